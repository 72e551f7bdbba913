from __future__ import annotations

import logging
from typing import Any

from groq import Groq

from contentperf.config import Settings, settings as default_settings
from contentperf.errors import GenerationError

logger = logging.getLogger(__name__)


class GroqAdapter:
    """Plain-text generation through Groq chat completions.

    Unlike the metrics adapter there is no fallback: a missing key or a failed
    call raises, and the dispatcher records it against the action.
    """

    def __init__(self, config: Settings | None = None, client: Any | None = None) -> None:
        cfg = config or default_settings
        self.model = cfg.groq_model
        if client is not None:
            self.client = client
        elif cfg.groq_api_key:
            self.client = Groq(api_key=cfg.groq_api_key, timeout=cfg.groq_timeout_seconds)
        else:
            self.client = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def generate(self, prompt: str, *, max_tokens: int = 200) -> str:
        if not self.client:
            raise GenerationError("GROQ_API_KEY not configured")

        completion = self.client.chat.completions.create(
            model=self.model,
            temperature=0.7,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        content = completion.choices[0].message.content if completion.choices else None
        text = (content or "").strip()
        if not text:
            raise GenerationError(f"{self.model} returned an empty response")
        logger.debug(f"Generated {len(text)} chars with {self.model}")
        return text

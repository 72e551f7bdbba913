"""
Shared pytest fixtures for contentperf tests.

Provides:
- PageMetrics factory
- tmp data dir / site root layouts
- fake text generator and fake GA4 HTTP session
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from contentperf.domain.models import MetricsSummary, PageMetrics, PerformanceRecord
from contentperf.domain.states import Bucket
from contentperf.infra.repositories import SnapshotStore


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def make_metrics() -> Callable[..., PageMetrics]:
    def factory(page_path: str = "/page", **overrides: Any) -> PageMetrics:
        values: dict[str, Any] = {
            "pageviews": 50,
            "entrances": 20,
            "avg_engagement_seconds": 30.0,
            "bounce_rate": 0.5,
            "exits": 5,
            "events": {},
        }
        values.update(overrides)
        return PageMetrics(page_path=page_path, **values)

    return factory


@pytest.fixture
def make_record() -> Callable[..., PerformanceRecord]:
    def factory(slug: str = "/page", actions: tuple[str, ...] = (), bucket: Bucket = Bucket.A) -> PerformanceRecord:
        return PerformanceRecord(
            slug=slug,
            content_role="acquisition",
            bucket=bucket,
            actions=tuple(actions),
            metrics=MetricsSummary(pageviews=150, entrances=2, avg_engagement=70, has_conversions=False),
            analyzed_at="2026-01-01T00:00:00+00:00",
        )

    return factory


# =============================================================================
# Filesystem fixtures
# =============================================================================


@pytest.fixture
def store(tmp_path: Path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "data")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Site checkout with one page in each conventional location."""
    root = tmp_path / "site"
    (root / "src" / "pages").mkdir(parents=True)
    (root / "src" / "pages" / "otherwhere-vs-chatgpt.astro").write_text("---\n---\n<h1>vs</h1>\n")
    (root / "src" / "pages" / "guides" / "lisbon").mkdir(parents=True)
    (root / "src" / "pages" / "guides" / "lisbon" / "index.astro").write_text("<h1>Lisbon</h1>\n")
    (root / "content" / "posts").mkdir(parents=True)
    (root / "content" / "posts" / "packing-list.mdx").write_text("# Packing list\n")
    return root


# =============================================================================
# Fake collaborators
# =============================================================================


class FakeGenerator:
    def __init__(self, text: str = "Generated text", fail_on: set[str] | None = None) -> None:
        self.text = text
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, int]] = []

    def generate(self, prompt: str, *, max_tokens: int = 200) -> str:
        self.calls.append((prompt, max_tokens))
        for marker in self.fail_on:
            if marker in prompt:
                raise RuntimeError(f"rate limited: {marker}")
        return self.text


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Returns queued responses in order; records request bodies."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def post(self, url: str, json: Any = None, headers: Any = None, timeout: Any = None) -> FakeResponse:
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol

from contentperf.domain.models import ActionResult, ActionResultLog, PerformanceRecord
from contentperf.domain.states import ActionId, ActionStatus, Tier, parse_action, tier_for
from contentperf.pipeline.prompts import PROMPTS, clip_text

logger = logging.getLogger(__name__)

PAGE_FILE_CANDIDATES = (
    "src/pages{slug}.astro",
    "src/pages{slug}/index.astro",
    "content/posts{slug}.mdx",
)


class TextGenerator(Protocol):
    def generate(self, prompt: str, *, max_tokens: int = 200) -> str:
        ...


def find_page_file(site_root: Path, slug: str) -> Path | None:
    for candidate in PAGE_FILE_CANDIDATES:
        path = site_root / candidate.format(slug=slug)
        if path.is_file():
            return path
    return None


class ActionDispatcher:
    """Routes each queued action to its tier and records exactly one result per action."""

    def __init__(self, generator: TextGenerator, site_root: Path | str) -> None:
        self.generator = generator
        self.site_root = Path(site_root)

    def dispatch(self, record: PerformanceRecord) -> list[ActionResult]:
        results: list[ActionResult] = []
        for action in record.actions:
            result = self.apply_action(record, action)
            logger.info(f"{record.slug}: {result.status.value}: {action}")
            results.append(result)
        return results

    def dispatch_all(self, records: Iterable[PerformanceRecord]) -> ActionResultLog:
        log = ActionResultLog()
        for record in records:
            logger.info(f"Processing {record.slug} (bucket {record.bucket.value})")
            log.extend(self.dispatch(record))
        return log

    def apply_action(self, record: PerformanceRecord, action: str) -> ActionResult:
        slug = record.slug
        action_id = parse_action(action)
        if action_id is None:
            return ActionResult(ActionStatus.SKIPPED, slug, action, f"{slug}: {action} - unknown action")

        tier = tier_for(action_id)
        if tier == Tier.REVIEW:
            return ActionResult(ActionStatus.FLAGGED, slug, action, f"{slug}: {action} - needs manual review")
        if tier == Tier.DRAFT:
            # Intent only: draft creation is a human-reviewed step outside this pipeline.
            return ActionResult(
                ActionStatus.DRAFT, slug, action, f"{slug}: {action} - draft queued for human review"
            )
        return self._apply_auto(record, action_id)

    def _apply_auto(self, record: PerformanceRecord, action: ActionId) -> ActionResult:
        slug = record.slug
        try:
            page_file = find_page_file(self.site_root, slug)
        except OSError as exc:
            logger.warning(f"{slug}: {action.value} page lookup failed: {exc}")
            return ActionResult(
                ActionStatus.ERROR, slug, action.value, f"{slug}: {action.value} - page lookup failed: {exc}"
            )
        if page_file is None:
            return ActionResult(ActionStatus.SKIPPED, slug, action.value, f"{slug}: file not found")

        spec = PROMPTS[action]
        try:
            text = self.generator.generate(spec.build(record), max_tokens=spec.max_tokens)
            output = clip_text(text, spec.max_chars)
        except Exception as exc:
            logger.warning(f"{slug}: {action.value} generation failed: {exc}")
            return ActionResult(ActionStatus.ERROR, slug, action.value, f"{slug}: {action.value} - {exc}")

        if action == ActionId.REWRITE_META:
            message = f'{slug}: {spec.label} generated - "{output}"'
        else:
            message = f"{slug}: {spec.label} generated"
        return ActionResult(ActionStatus.GENERATED, slug, action.value, message, output=output)

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import math
from types import MappingProxyType
from typing import Any, Mapping

from contentperf.domain.states import ActionStatus, Bucket


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class PageMetrics:
    page_path: str
    pageviews: int = 0
    entrances: int = 0
    avg_engagement_seconds: float = 0.0
    bounce_rate: float = 0.0
    exits: int = 0
    events: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the events mapping; None from a partial provider row becomes empty.
        object.__setattr__(self, "events", MappingProxyType(dict(self.events or {})))

    @property
    def has_conversions(self) -> bool:
        return any(count > 0 for count in self.events.values())

    @property
    def exit_rate(self) -> float:
        if self.entrances <= 0:
            return 0.0
        return self.exits / self.entrances


@dataclass(frozen=True)
class MetricsSummary:
    pageviews: int
    entrances: int
    avg_engagement: int
    has_conversions: bool

    @classmethod
    def from_metrics(cls, metrics: PageMetrics) -> "MetricsSummary":
        return cls(
            pageviews=metrics.pageviews,
            entrances=metrics.entrances,
            avg_engagement=round_half_up(metrics.avg_engagement_seconds),
            has_conversions=metrics.has_conversions,
        )


@dataclass(frozen=True)
class PerformanceRecord:
    slug: str
    content_role: str
    bucket: Bucket
    actions: tuple[str, ...]
    metrics: MetricsSummary
    analyzed_at: str = field(default_factory=utc_now)


@dataclass(frozen=True)
class ActionResult:
    status: ActionStatus
    slug: str
    action: str
    message: str
    output: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "status": self.status.value,
            "slug": self.slug,
            "action": self.action,
            "message": self.message,
        }
        if self.output is not None:
            out["output"] = self.output
        return out


RESULT_KEYS: dict[ActionStatus, str] = {
    ActionStatus.GENERATED: "generated",
    ActionStatus.DRAFT: "draft",
    ActionStatus.FLAGGED: "flagged",
    ActionStatus.SKIPPED: "skipped",
    ActionStatus.ERROR: "errors",
}


@dataclass
class ActionResultLog:
    """Dispatch-run results grouped by status, in dispatch order within each group."""

    executed_at: str = field(default_factory=utc_now)
    applied: list[ActionResult] = field(default_factory=list)
    generated: list[ActionResult] = field(default_factory=list)
    draft: list[ActionResult] = field(default_factory=list)
    flagged: list[ActionResult] = field(default_factory=list)
    skipped: list[ActionResult] = field(default_factory=list)
    errors: list[ActionResult] = field(default_factory=list)

    def add(self, result: ActionResult) -> None:
        getattr(self, RESULT_KEYS[result.status]).append(result)

    def extend(self, results: list[ActionResult]) -> None:
        for result in results:
            self.add(result)

    def counts(self) -> dict[str, int]:
        return {
            "applied": len(self.applied),
            "generated": len(self.generated),
            "draft": len(self.draft),
            "flagged": len(self.flagged),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }

    @property
    def total(self) -> int:
        return sum(self.counts().values())

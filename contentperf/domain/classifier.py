from __future__ import annotations

from typing import Callable

from contentperf.config import ClassificationThresholds, settings
from contentperf.domain.models import PageMetrics
from contentperf.domain.states import Bucket


Predicate = Callable[[PageMetrics, ClassificationThresholds], bool]


def _winner(m: PageMetrics, t: ClassificationThresholds) -> bool:
    return (
        m.pageviews >= t.high_impressions
        and m.avg_engagement_seconds >= t.strong_engagement
        and m.has_conversions
    )


def _low_click_through(m: PageMetrics, t: ClassificationThresholds) -> bool:
    return m.pageviews >= t.high_impressions and m.entrances < m.pageviews * t.low_ctr


def _engaged_unconverted(m: PageMetrics, t: ClassificationThresholds) -> bool:
    return m.avg_engagement_seconds >= t.strong_engagement and not m.has_conversions


def _entry_then_exit(m: PageMetrics, t: ClassificationThresholds) -> bool:
    return m.entrances >= t.high_entrances and m.exit_rate >= t.high_exit_rate


def _dead_weight(m: PageMetrics, t: ClassificationThresholds) -> bool:
    return m.pageviews < t.low_impressions and m.avg_engagement_seconds < t.strong_engagement


# Priority order: the first matching rule decides the bucket.
CLASSIFICATION_RULES: tuple[tuple[Bucket, Predicate], ...] = (
    (Bucket.A, _winner),
    (Bucket.B, _low_click_through),
    (Bucket.C, _engaged_unconverted),
    (Bucket.D, _entry_then_exit),
    (Bucket.F, _dead_weight),
)


def matching_buckets(
    metrics: PageMetrics,
    thresholds: ClassificationThresholds | None = None,
) -> list[Bucket]:
    t = thresholds or settings.thresholds
    return [bucket for bucket, predicate in CLASSIFICATION_RULES if predicate(metrics, t)]


def classify(
    metrics: PageMetrics,
    role: str | None = None,
    thresholds: ClassificationThresholds | None = None,
) -> Bucket | None:
    """Return the bucket of the first satisfied rule, or None when the page is unchanged.

    ``role`` is part of the call contract but no rule depends on it; role-based
    behaviour lives in the action policy.
    """
    t = thresholds or settings.thresholds
    for bucket, predicate in CLASSIFICATION_RULES:
        if predicate(metrics, t):
            return bucket
    return None

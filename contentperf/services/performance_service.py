from __future__ import annotations

import logging
from typing import Mapping

from contentperf.config import ClassificationThresholds, settings
from contentperf.contracts.schemas import (
    ActionResultsDocument,
    BucketSummary,
    PerformanceRecordContract,
    PerformanceSnapshot,
)
from contentperf.domain.classifier import classify
from contentperf.domain.models import MetricsSummary, PageMetrics, PerformanceRecord, utc_now
from contentperf.domain.policy import actions_for
from contentperf.domain.roles import resolve_role
from contentperf.errors import ContentPerfError
from contentperf.infra.ga4_adapter import GA4MetricsAdapter
from contentperf.infra.repositories import SnapshotStore
from contentperf.pipeline.dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)


def build_snapshot(
    metrics: Mapping[str, PageMetrics],
    role_map: Mapping[str, str],
    *,
    thresholds: ClassificationThresholds | None = None,
    period: str = "28_days",
) -> PerformanceSnapshot:
    """Classify every page and queue its actions; unclassified pages only count as unchanged."""
    summary = BucketSummary()
    pages: list[PerformanceRecordContract] = []

    for page_path, page_metrics in metrics.items():
        role = resolve_role(page_path, role_map)
        bucket = classify(page_metrics, role, thresholds)
        if bucket is None:
            summary.unchanged += 1
            continue

        record = PerformanceRecord(
            slug=page_path,
            content_role=role,
            bucket=bucket,
            actions=tuple(a.value for a in actions_for(bucket, role)),
            metrics=MetricsSummary.from_metrics(page_metrics),
        )
        pages.append(PerformanceRecordContract.from_record(record))
        setattr(summary, bucket.value, getattr(summary, bucket.value) + 1)

    return PerformanceSnapshot(generated_at=utc_now(), period=period, summary=summary, pages=pages)


class PerformanceService:
    def __init__(
        self,
        store: SnapshotStore | None = None,
        adapter: GA4MetricsAdapter | None = None,
        thresholds: ClassificationThresholds | None = None,
    ) -> None:
        self.store = store or SnapshotStore()
        self.adapter = adapter or GA4MetricsAdapter()
        self.thresholds = thresholds or settings.thresholds

    def analyze(self) -> PerformanceSnapshot:
        metrics = self.adapter.fetch()
        role_map = self.store.load_role_map()
        snapshot = build_snapshot(
            metrics,
            role_map,
            thresholds=self.thresholds,
            period=self.adapter.period,
        )
        self.store.save_snapshot(snapshot)
        logger.info(f"Classified {len(metrics)} pages, {len(snapshot.pages)} with actions")
        return snapshot


class ActionService:
    def __init__(self, dispatcher: ActionDispatcher, store: SnapshotStore | None = None) -> None:
        self.dispatcher = dispatcher
        self.store = store or SnapshotStore()

    def apply(self) -> ActionResultsDocument | None:
        """Dispatch every queued action in the current snapshot.

        Returns None without writing anything when the snapshot has no pages.
        Snapshot read errors and results write errors propagate.
        """
        snapshot = self.store.load_snapshot()
        if not snapshot.pages:
            logger.info("No actions to apply; run the analyze step first")
            return None

        records = [page.to_record() for page in snapshot.pages]
        log = self.dispatcher.dispatch_all(records)

        expected = sum(len(r.actions) for r in records)
        if log.total != expected:
            raise ContentPerfError(f"Dispatched {expected} actions but recorded {log.total} results")

        document = ActionResultsDocument.from_log(log)
        self.store.save_results(document)
        return document

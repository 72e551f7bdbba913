from contentperf.infra.ga4_adapter import GA4MetricsAdapter, MetricsResult, sample_metrics
from contentperf.infra.groq_adapter import GroqAdapter
from contentperf.infra.repositories import SnapshotStore

__all__ = [
    "GA4MetricsAdapter",
    "MetricsResult",
    "sample_metrics",
    "GroqAdapter",
    "SnapshotStore",
]

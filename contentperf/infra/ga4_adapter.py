from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any

import requests

from contentperf.config import Settings, settings as default_settings
from contentperf.domain.models import PageMetrics
from contentperf.errors import ProviderError

logger = logging.getLogger(__name__)

GA4_API_BASE = "https://analyticsdata.googleapis.com/v1beta"

PAGE_METRICS = (
    "screenPageViews",
    "entrances",
    "averageSessionDuration",
    "bounceRate",
    "exits",
)

# Fixed demo dataset returned whenever GA4 is unconfigured or unreachable.
SAMPLE_METRICS: dict[str, dict[str, Any]] = {
    "/what-is-otherwhere": {
        "pageviews": 250,
        "entrances": 180,
        "avg_engagement_seconds": 95.0,
        "bounce_rate": 0.35,
        "exits": 80,
        "events": {"sms_click": 12, "gpt_click": 8},
    },
    "/otherwhere-vs-chatgpt": {
        "pageviews": 180,
        "entrances": 150,
        "avg_engagement_seconds": 72.0,
        "bounce_rate": 0.45,
        "exits": 100,
        "events": {"sms_click": 3},
    },
    "/what-is-ai-travel-concierge": {
        "pageviews": 120,
        "entrances": 90,
        "avg_engagement_seconds": 85.0,
        "bounce_rate": 0.5,
        "exits": 70,
        "events": {},
    },
    "/case-studies/honeymoon-puglia": {
        "pageviews": 80,
        "entrances": 60,
        "avg_engagement_seconds": 110.0,
        "bounce_rate": 0.3,
        "exits": 25,
        "events": {"sms_click": 5},
    },
    "/destinations/lisbon": {
        "pageviews": 45,
        "entrances": 35,
        "avg_engagement_seconds": 40.0,
        "bounce_rate": 0.65,
        "exits": 30,
        "events": {},
    },
}


def sample_metrics() -> dict[str, PageMetrics]:
    return {path: PageMetrics(page_path=path, **values) for path, values in SAMPLE_METRICS.items()}


@dataclass(frozen=True)
class MetricsResult:
    metrics: dict[str, PageMetrics] | None = None
    error: ProviderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.metrics is not None

    def unwrap_or(self, default: dict[str, PageMetrics]) -> dict[str, PageMetrics]:
        return self.metrics if self.ok else default


def _to_int(value: Any) -> int:
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_float(value: Any) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(out):
        return 0.0
    return max(0.0, out)


def _row_values(row: dict[str, Any], key: str) -> list[Any]:
    return [item.get("value") if isinstance(item, dict) else None for item in row.get(key) or []]


class GA4MetricsAdapter:
    """Google Analytics 4 Data API adapter.

    Two ``runReport`` calls per fetch:
    POST {GA4_API_BASE}/properties/{GA4_PROPERTY_ID}:runReport
      1. pagePath x (screenPageViews, entrances, averageSessionDuration, bounceRate, exits)
      2. pagePath, eventName x eventCount, filtered to the conversion events
    Any failure degrades to ``sample_metrics()``.
    """

    def __init__(self, config: Settings | None = None, session: Any | None = None) -> None:
        cfg = config or default_settings
        self.property_id = cfg.ga4_property_id
        self.access_token = cfg.ga4_access_token
        self.conversion_events = list(cfg.ga4_conversion_events)
        self.window_days = cfg.metrics_window_days
        self.timeout = cfg.ga4_timeout_seconds
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.property_id and self.access_token)

    @property
    def period(self) -> str:
        return f"{self.window_days}_days"

    def fetch(self) -> dict[str, PageMetrics]:
        result = self.fetch_result()
        if not result.ok:
            logger.warning(f"GA4 metrics unavailable ({result.error}); using sample dataset")
        return result.unwrap_or(sample_metrics())

    def fetch_result(self) -> MetricsResult:
        if not self.enabled:
            return MetricsResult(error=ProviderError("GA4_PROPERTY_ID or GA4_ACCESS_TOKEN not set"))
        try:
            metrics = self._fetch_live()
        except ProviderError as exc:
            return MetricsResult(error=exc)
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as exc:
            return MetricsResult(error=ProviderError(f"GA4 request failed: {exc}"))
        logger.info(f"Fetched GA4 metrics for {len(metrics)} pages")
        return MetricsResult(metrics=metrics)

    def _fetch_live(self) -> dict[str, PageMetrics]:
        page_report = self._run_report(
            {
                "dateRanges": [self._date_range()],
                "dimensions": [{"name": "pagePath"}],
                "metrics": [{"name": name} for name in PAGE_METRICS],
            }
        )

        rows: dict[str, dict[str, Any]] = {}
        for row in page_report.get("rows") or []:
            if not isinstance(row, dict):
                continue
            dims = _row_values(row, "dimensionValues")
            values = _row_values(row, "metricValues") + [None] * len(PAGE_METRICS)
            if not dims or not dims[0]:
                continue
            rows[str(dims[0])] = {
                "pageviews": _to_int(values[0]),
                "entrances": _to_int(values[1]),
                "avg_engagement_seconds": _to_float(values[2]),
                "bounce_rate": min(1.0, _to_float(values[3])),
                "exits": _to_int(values[4]),
                "events": {},
            }

        if self.conversion_events and rows:
            event_report = self._run_report(
                {
                    "dateRanges": [self._date_range()],
                    "dimensions": [{"name": "pagePath"}, {"name": "eventName"}],
                    "metrics": [{"name": "eventCount"}],
                    "dimensionFilter": {
                        "filter": {
                            "fieldName": "eventName",
                            "inListFilter": {"values": self.conversion_events},
                        }
                    },
                }
            )
            for row in event_report.get("rows") or []:
                if not isinstance(row, dict):
                    continue
                dims = _row_values(row, "dimensionValues")
                values = _row_values(row, "metricValues")
                if len(dims) < 2 or not values:
                    continue
                page = rows.get(str(dims[0]))
                if page is None:
                    continue
                page["events"][str(dims[1])] = _to_int(values[0])

        return {path: PageMetrics(page_path=path, **values) for path, values in rows.items()}

    def _date_range(self) -> dict[str, str]:
        return {"startDate": f"{self.window_days}daysAgo", "endDate": "today"}

    def _run_report(self, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{GA4_API_BASE}/properties/{self.property_id}:runReport"
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        response = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        if response.status_code != 200:
            raise ProviderError(f"GA4 runReport returned HTTP {response.status_code}: {response.text[:200]}")
        parsed = response.json()
        if not isinstance(parsed, dict):
            raise ProviderError("GA4 runReport returned a non-object body")
        return parsed

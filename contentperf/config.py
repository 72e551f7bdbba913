from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CONVERSION_EVENTS = ("sms_click", "sms_copy", "gpt_click", "outbound_link")


def _get_config_value(*keys: str, default: str = "") -> str:
    for key in keys:
        value = os.getenv(key, "").strip()
        if value:
            return value
    return default


def _get_float(key: str, default: float) -> float:
    raw = _get_config_value(key)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _get_int(key: str, default: int) -> int:
    raw = _get_config_value(key)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _split_list(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ClassificationThresholds:
    """Tuning block for the bucket rules.

    Counts are over the metrics window (28 days by default), engagement is in
    seconds, ``low_ctr`` and ``high_exit_rate`` are ratios.
    """

    high_impressions: int = 100
    strong_engagement: float = 60.0
    low_ctr: float = 0.02
    high_entrances: int = 50
    high_exit_rate: float = 0.7
    low_impressions: int = 10


DEFAULT_THRESHOLDS = ClassificationThresholds()


def load_thresholds() -> ClassificationThresholds:
    d = DEFAULT_THRESHOLDS
    return ClassificationThresholds(
        high_impressions=_get_int("THRESHOLD_HIGH_IMPRESSIONS", d.high_impressions),
        strong_engagement=_get_float("THRESHOLD_STRONG_ENGAGEMENT", d.strong_engagement),
        low_ctr=_get_float("THRESHOLD_LOW_CTR", d.low_ctr),
        high_entrances=_get_int("THRESHOLD_HIGH_ENTRANCES", d.high_entrances),
        high_exit_rate=_get_float("THRESHOLD_HIGH_EXIT_RATE", d.high_exit_rate),
        low_impressions=_get_int("THRESHOLD_LOW_IMPRESSIONS", d.low_impressions),
    )


@dataclass(frozen=True)
class Settings:
    app_env: str
    data_dir: Path
    site_root: Path
    ga4_property_id: str
    ga4_access_token: str
    ga4_conversion_events: tuple[str, ...]
    ga4_timeout_seconds: float
    metrics_window_days: int
    groq_api_key: str
    groq_model: str
    groq_timeout_seconds: float
    log_level: str
    thresholds: ClassificationThresholds = field(default_factory=ClassificationThresholds)


def load_settings() -> Settings:
    events = _split_list(_get_config_value("GA4_CONVERSION_EVENTS"))
    return Settings(
        app_env=_get_config_value("APP_ENV", default="dev"),
        data_dir=Path(_get_config_value("CONTENTPERF_DATA_DIR", "DATA_DIR", default="data")),
        site_root=Path(_get_config_value("CONTENTPERF_SITE_ROOT", "SITE_ROOT", default=".")),
        ga4_property_id=_get_config_value("GA4_PROPERTY_ID"),
        ga4_access_token=_get_config_value("GA4_ACCESS_TOKEN", "GOOGLE_ACCESS_TOKEN"),
        ga4_conversion_events=events or DEFAULT_CONVERSION_EVENTS,
        ga4_timeout_seconds=_get_float("GA4_TIMEOUT_SECONDS", 30.0),
        metrics_window_days=max(1, _get_int("METRICS_WINDOW_DAYS", 28)),
        groq_api_key=_get_config_value("GROQ_API_KEY"),
        groq_model=_get_config_value("GROQ_MODEL", default="llama-3.1-70b-versatile"),
        groq_timeout_seconds=_get_float("GROQ_TIMEOUT_SECONDS", 60.0),
        log_level=_get_config_value("LOG_LEVEL", default="INFO").upper(),
        thresholds=load_thresholds(),
    )


settings = load_settings()

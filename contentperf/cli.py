from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from contentperf.config import settings
from contentperf.errors import PersistenceError, SnapshotNotFoundError
from contentperf.infra.ga4_adapter import GA4MetricsAdapter
from contentperf.infra.groq_adapter import GroqAdapter
from contentperf.infra.repositories import SnapshotStore
from contentperf.pipeline.dispatcher import ActionDispatcher
from contentperf.services.performance_service import ActionService, PerformanceService

logger = logging.getLogger("contentperf")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT, stream=sys.stderr)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding the JSON artifacts")
    parser.add_argument("--log-level", default=None, help="Logging level (default from LOG_LEVEL)")


def parse_analyze_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify pages from analytics metrics and write the performance snapshot")
    _add_common_args(parser)
    return parser.parse_args(argv)


def parse_apply_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dispatch queued actions from the performance snapshot")
    _add_common_args(parser)
    parser.add_argument("--site-root", type=Path, default=None, help="Site checkout used to locate page files")
    return parser.parse_args(argv)


def analyze_main(argv: Sequence[str] | None = None) -> int:
    args = parse_analyze_args(argv)
    configure_logging(args.log_level or settings.log_level)

    store = SnapshotStore(args.data_dir or settings.data_dir)
    service = PerformanceService(store=store, adapter=GA4MetricsAdapter())
    try:
        snapshot = service.analyze()
    except PersistenceError as exc:
        logger.error(str(exc))
        return 1

    print(
        json.dumps(
            {
                "snapshot": str(store.snapshot_path),
                "period": snapshot.period,
                "pages_with_actions": len(snapshot.pages),
                "summary": snapshot.summary.model_dump(),
            },
            indent=2,
        )
    )
    return 0


def apply_main(argv: Sequence[str] | None = None) -> int:
    args = parse_apply_args(argv)
    configure_logging(args.log_level or settings.log_level)

    config = settings
    if args.site_root is not None:
        config = replace(config, site_root=args.site_root)

    store = SnapshotStore(args.data_dir or config.data_dir)
    dispatcher = ActionDispatcher(GroqAdapter(config), site_root=config.site_root)
    service = ActionService(dispatcher, store=store)
    try:
        document = service.apply()
    except SnapshotNotFoundError as exc:
        logger.error(f"{exc}. Run contentperf-analyze first.")
        return 1
    except PersistenceError as exc:
        logger.error(str(exc))
        return 1

    if document is None:
        print(json.dumps({"snapshot": str(store.snapshot_path), "dispatched": 0}, indent=2))
        return 0

    counts = {name: len(items) for name, items in document.results}
    print(
        json.dumps(
            {
                "results": str(store.results_path),
                "dispatched": sum(counts.values()),
                "counts": counts,
            },
            indent=2,
        )
    )
    return 0


def analyze_entrypoint() -> None:
    sys.exit(analyze_main())


def apply_entrypoint() -> None:
    sys.exit(apply_main())

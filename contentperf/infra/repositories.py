from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from contentperf.config import settings
from contentperf.contracts.schemas import ActionResultsDocument, PerformanceSnapshot
from contentperf.domain.roles import DEFAULT_ROLE_MAP
from contentperf.errors import PersistenceError, SnapshotNotFoundError

logger = logging.getLogger(__name__)

ROLE_MAP_FILE = "content-roles.json"
SNAPSHOT_FILE = "content-performance.json"
RESULTS_FILE = "action-results.json"


class SnapshotStore:
    """JSON-file store for the role map, the performance snapshot and the action results."""

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else settings.data_dir

    @property
    def role_map_path(self) -> Path:
        return self.data_dir / ROLE_MAP_FILE

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / SNAPSHOT_FILE

    @property
    def results_path(self) -> Path:
        return self.data_dir / RESULTS_FILE

    def load_role_map(self) -> dict[str, str]:
        path = self.role_map_path
        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info(f"No role map at {path}; using default role map")
            return dict(DEFAULT_ROLE_MAP)
        except (OSError, ValueError) as exc:
            logger.warning(f"Role map at {path} unreadable ({exc}); using default role map")
            return dict(DEFAULT_ROLE_MAP)

        if not isinstance(parsed, dict):
            logger.warning(f"Role map at {path} is not an object; using default role map")
            return dict(DEFAULT_ROLE_MAP)
        # json keeps key order, which decides wildcard precedence.
        return {str(k): str(v) for k, v in parsed.items() if v}

    def save_snapshot(self, snapshot: PerformanceSnapshot) -> Path:
        return self._write_json(self.snapshot_path, snapshot.model_dump(mode="json", by_alias=True))

    def load_snapshot(self) -> PerformanceSnapshot:
        path = self.snapshot_path
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SnapshotNotFoundError(f"Cannot read snapshot {path}: {exc}") from exc
        try:
            return PerformanceSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            raise SnapshotNotFoundError(f"Snapshot {path} is invalid: {exc}") from exc

    def save_results(self, document: ActionResultsDocument) -> Path:
        payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
        return self._write_json(self.results_path, payload)

    def load_results(self) -> ActionResultsDocument | None:
        path = self.results_path
        if not path.exists():
            return None
        try:
            return ActionResultsDocument.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            raise PersistenceError(f"Cannot read results {path}: {exc}") from exc

    def _write_json(self, path: Path, payload: dict[str, Any]) -> Path:
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            raise PersistenceError(f"Write failed for {path}: {exc}") from exc
        logger.info(f"Wrote {path}")
        return path

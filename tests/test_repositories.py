from __future__ import annotations

import json
from pathlib import Path

import pytest

from contentperf.contracts.schemas import ActionResultsDocument, PerformanceSnapshot
from contentperf.domain.models import ActionResult, ActionResultLog
from contentperf.domain.roles import DEFAULT_ROLE_MAP
from contentperf.domain.states import ActionStatus
from contentperf.errors import PersistenceError, SnapshotNotFoundError
from contentperf.infra.repositories import SnapshotStore


def test_missing_role_map_uses_default(store: SnapshotStore) -> None:
    assert store.load_role_map() == DEFAULT_ROLE_MAP
    assert list(store.load_role_map()) == list(DEFAULT_ROLE_MAP)


def test_role_map_keeps_file_order(store: SnapshotStore) -> None:
    store.data_dir.mkdir(parents=True)
    store.role_map_path.write_text('{"/b/*": "trust", "/a/*": "comprehension", "/c": ""}')
    assert list(store.load_role_map().items()) == [("/b/*", "trust"), ("/a/*", "comprehension")]


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_unreadable_role_map_uses_default(store: SnapshotStore, content: str) -> None:
    store.data_dir.mkdir(parents=True)
    store.role_map_path.write_text(content)
    assert store.load_role_map() == DEFAULT_ROLE_MAP


def test_snapshot_round_trip_uses_camel_case_metrics(store: SnapshotStore) -> None:
    snapshot = PerformanceSnapshot.model_validate(
        {
            "generated_at": "2026-01-01T00:00:00+00:00",
            "summary": {"A": 1, "unchanged": 2},
            "pages": [
                {
                    "slug": "/a",
                    "content_role": "acquisition",
                    "bucket": "A",
                    "actions": ["expand_topic_cluster"],
                    "metrics": {"pageviews": 250, "entrances": 180, "avgEngagement": 95, "hasConversions": True},
                    "analyzed_at": "2026-01-01T00:00:00+00:00",
                }
            ],
        }
    )
    path = store.save_snapshot(snapshot)

    raw = json.loads(path.read_text())
    assert raw["period"] == "28_days"
    assert raw["summary"] == {"A": 1, "B": 0, "C": 0, "D": 0, "F": 0, "unchanged": 2}
    assert raw["pages"][0]["metrics"] == {
        "pageviews": 250,
        "entrances": 180,
        "avgEngagement": 95,
        "hasConversions": True,
    }
    assert store.load_snapshot() == snapshot
    assert not any(p.name.endswith(".tmp") for p in store.data_dir.iterdir())


def test_missing_snapshot_raises(store: SnapshotStore) -> None:
    with pytest.raises(SnapshotNotFoundError):
        store.load_snapshot()


def test_invalid_snapshot_raises(store: SnapshotStore) -> None:
    store.data_dir.mkdir(parents=True)
    store.snapshot_path.write_text('{"pages": [{"slug": "/a", "bucket": "Z"}]}')
    with pytest.raises(SnapshotNotFoundError, match="invalid"):
        store.load_snapshot()


def test_results_document_layout(store: SnapshotStore) -> None:
    log = ActionResultLog(executed_at="2026-01-01T00:00:00+00:00")
    log.add(ActionResult(ActionStatus.GENERATED, "/a", "rewrite_meta", "/a: new meta generated", output="Meta"))
    log.add(ActionResult(ActionStatus.ERROR, "/a", "add_quick_answer", "/a: add_quick_answer - boom"))
    path = store.save_results(ActionResultsDocument.from_log(log))

    raw = json.loads(path.read_text())
    assert raw["executed_at"] == "2026-01-01T00:00:00+00:00"
    assert list(raw["results"]) == ["applied", "generated", "draft", "flagged", "skipped", "errors"]
    assert raw["results"]["generated"][0]["output"] == "Meta"
    assert "output" not in raw["results"]["errors"][0]
    assert raw["results"]["errors"][0]["status"] == "error"

    loaded = store.load_results()
    assert loaded is not None
    assert loaded.results.errors[0].to_result().status == ActionStatus.ERROR


def test_write_failure_is_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocked"
    blocker.write_text("a file, not a directory")
    store = SnapshotStore(blocker / "data")
    with pytest.raises(PersistenceError):
        store.save_snapshot(PerformanceSnapshot(generated_at="2026-01-01T00:00:00+00:00"))

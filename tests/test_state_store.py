from __future__ import annotations

import json
from pathlib import Path

from devquests.storage.state_store import JsonStateStore, MemoryStateStore


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    store = JsonStateStore(tmp_path / "state.json")
    payload = {"xp": 45, "dailies": {"commit": 1}, "history": {"2024-01-03": 1}}

    assert store.save(payload) is True
    assert (tmp_path / "state.json").exists()
    assert (tmp_path / "state.backup.json").exists()

    assert JsonStateStore(tmp_path / "state.json").load() == payload


def test_missing_file_loads_as_absent(tmp_path: Path) -> None:
    assert JsonStateStore(tmp_path / "nothing.json").load() is None


def test_corrupt_primary_falls_back_to_backup(tmp_path: Path) -> None:
    store = JsonStateStore(tmp_path / "state.json")
    store.save({"xp": 80})
    (tmp_path / "state.json").write_text("{not json", encoding="utf-8")

    assert store.load() == {"xp": 80}


def test_non_object_json_is_ignored(tmp_path: Path) -> None:
    primary = tmp_path / "state.json"
    primary.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    store = JsonStateStore(primary)

    assert store.load() is None


def test_save_failure_is_reported_not_raised(tmp_path: Path) -> None:
    primary = tmp_path / "primary"
    backup = tmp_path / "backup"
    primary.mkdir()
    backup.mkdir()
    store = JsonStateStore(primary, backup_path=backup)

    assert store.save({"xp": 1}) is False


def test_memory_store_copies_payloads() -> None:
    store = MemoryStateStore()
    payload = {"dailies": {"commit": 1}}
    store.save(payload)
    payload["dailies"]["commit"] = 0

    loaded = store.load()
    assert loaded == {"dailies": {"commit": 1}}
    assert store.save_count == 1

    failing = MemoryStateStore(fail_saves=True)
    assert failing.save({"xp": 1}) is False
    assert failing.load() is None

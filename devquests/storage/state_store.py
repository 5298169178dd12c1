"""Local persistence for the progress state snapshot."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol


logger = logging.getLogger(__name__)


def _default_state_dir() -> Path:
    return Path.home() / ".devquests"


def _default_state_path() -> Path:
    return _default_state_dir() / "state.json"


class StateStore(Protocol):
    def load(self) -> dict[str, Any] | None: ...

    def save(self, payload: dict[str, Any]) -> bool: ...


class JsonStateStore:
    """JSON file store with a backup copy written after the primary."""

    def __init__(self, path: Path | None = None, backup_path: Path | None = None) -> None:
        self.path = path or _default_state_path()
        self.backup_path = backup_path or self.path.with_name(f"{self.path.stem}.backup.json")

    def load(self) -> dict[str, Any] | None:
        for candidate in (self.path, self.backup_path):
            payload = self._read(candidate)
            if payload is not None:
                return payload
        return None

    def save(self, payload: dict[str, Any]) -> bool:
        try:
            text = json.dumps(payload, ensure_ascii=True, indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("State is not serializable: %s", exc)
            return False

        saved = False
        for target in (self.path, self.backup_path):
            try:
                _write_atomic(target, text)
                saved = True
            except OSError as exc:
                logger.warning("Saving state to %s failed: %s", target, exc)
        return saved

    @staticmethod
    def _read(path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            item = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", path, exc)
            return None
        if not isinstance(item, dict):
            logger.warning("Ignoring state file %s: expected a JSON object", path)
            return None
        return item


class MemoryStateStore:
    """In-process store; ``fail_saves`` simulates an unavailable backend."""

    def __init__(self, payload: dict[str, Any] | None = None, fail_saves: bool = False) -> None:
        self.payload = copy.deepcopy(payload)
        self.fail_saves = fail_saves
        self.save_count = 0

    def load(self) -> dict[str, Any] | None:
        return copy.deepcopy(self.payload)

    def save(self, payload: dict[str, Any]) -> bool:
        self.save_count += 1
        if self.fail_saves:
            logger.warning("In-memory state store rejected save")
            return False
        self.payload = copy.deepcopy(payload)
        return True


def _write_atomic(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, target)

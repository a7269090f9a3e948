"""Local persistence for heart receipts."""

import json
import logging
from pathlib import Path
from typing import Protocol

from .errors import ConfigError

logger = logging.getLogger(__name__)


def receipt_key(album: str | None, shortcut: str | None) -> str:
    return f"{album}-{shortcut}-heart"


class ReceiptStore(Protocol):
    """Synchronous key-value store holding at most one receipt per key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, identifier: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryReceiptStore:
    """Process-local receipt store."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._receipts: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._receipts.get(key)

    def set(self, key: str, identifier: str) -> None:
        self._receipts[key] = identifier

    def remove(self, key: str) -> None:
        self._receipts.pop(key, None)

    def __len__(self) -> int:
        return len(self._receipts)


class JsonReceiptStore(MemoryReceiptStore):
    """Receipt store persisted to a JSON file after every change."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Receipt file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Receipt file {self.path} must hold a JSON object")
        logger.debug("Loaded %s receipts from %s", len(data), self.path)
        return {str(key): str(value) for key, value in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(self._receipts, handle, indent=2, sort_keys=True)

    def set(self, key: str, identifier: str) -> None:
        super().set(key, identifier)
        self._save()

    def remove(self, key: str) -> None:
        super().remove(key)
        self._save()

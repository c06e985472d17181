"""In-memory dict of pydantic records backed by a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generic, Type, TypeVar

from pydantic import BaseModel

from negotiator.errors import PersistenceError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class JsonFileStore(Generic[RecordT]):
    """Keeps every record in memory and rewrites the whole file on change.

    Mutations go through :meth:`_commit`, which only swaps the in-memory
    state once the file write succeeded, so a failed write leaves the store
    exactly as it was.
    """

    record_type: Type[RecordT]

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._items: dict[str, RecordT] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Persistence helpers ───────────────────────────────────────────────

    def _load(self) -> None:
        """Load from JSON file if it exists."""
        if not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            for entry in raw:
                item = self.record_type(**entry)
                self._items[item.id] = item
            logger.info("Loaded %d %s records from %s",
                        len(self._items), self.record_type.__name__, self._path)
        except Exception as exc:
            logger.warning("Failed to load %s: %s", self._path, exc)

    def _commit(self, items: dict[str, RecordT]) -> None:
        """Persist ``items`` and make them the current state."""
        payload = [item.model_dump() for item in items.values()]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to write %s: %s", self._path, exc)
            raise PersistenceError(f"Could not write {self._path.name}") from exc
        self._items = items

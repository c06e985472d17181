"""JSON-file pack store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from negotiator.models.domain import Pack
from negotiator.models.json_store import JsonFileStore

logger = logging.getLogger(__name__)

PACKS_FILE = "packs.json"


class PackStore(JsonFileStore[Pack]):
    """Packs keyed by id. Ownership is enforced by the caller."""

    record_type = Pack

    @classmethod
    def in_dir(cls, data_dir: str | Path) -> "PackStore":
        return cls(Path(data_dir) / PACKS_FILE)

    def add(self, pack: Pack) -> Pack:
        """Insert a new pack and persist."""
        items = dict(self._items)
        items[pack.id] = pack
        self._commit(items)
        logger.info("Pack stored: id=%s user=%s", pack.id, pack.user_id)
        return pack

    def get(self, pack_id: str) -> Optional[Pack]:
        return self._items.get(pack_id)

    def list_for_owner(self, user_id: str) -> list[Pack]:
        """Return the owner's packs, newest first."""
        packs = [p for p in self._items.values() if p.user_id == user_id]
        packs.sort(key=lambda p: p.created_at, reverse=True)
        return packs

    def delete(self, pack_id: str) -> bool:
        if pack_id not in self._items:
            return False
        items = dict(self._items)
        del items[pack_id]
        self._commit(items)
        logger.info("Pack deleted: id=%s", pack_id)
        return True

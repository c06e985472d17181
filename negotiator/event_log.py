"""Append-only JSON-lines event log under ``<log_dir>/events.jsonl``."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

EVENTS_FILE = "events.jsonl"


class EventLog:
    """Writes one JSON object per line; reads back the most recent ones."""

    def __init__(self, log_dir: str | Path) -> None:
        self._file = Path(log_dir) / EVENTS_FILE

    def record(self, event: str, **fields: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
            **fields,
        }
        try:
            self._file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as exc:
            logger.warning("Could not append to %s: %s", self._file, exc)
            return
        logger.info("Event logged: %s %s", event, fields.get("pack_id", ""))

    def recent(self, limit: int = 20, user_id: str | None = None) -> list[dict[str, Any]]:
        """Return up to ``limit`` entries, newest first.

        With ``user_id`` only that user's entries are returned.
        """
        if limit <= 0 or not self._file.exists():
            return []

        with open(self._file, "r", encoding="utf-8") as f:
            lines = f.readlines()

        entries: list[dict[str, Any]] = []
        for line in reversed(lines):
            try:
                entry = json.loads(line.strip())
            except json.JSONDecodeError:
                continue
            if user_id is not None and entry.get("user_id") != user_id:
                continue
            entries.append(entry)
            if len(entries) >= limit:
                break
        return entries

"""On-device key-value storage for the current trip id.

Backed by a small JSON object on disk so other keys written by the client
survive a save or remove of the trip id.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from planner.config.settings import settings

TRIP_STORAGE_KEY = "@planner:tripId"


class TripStorage:
    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.storage_path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8").strip()
        if not text:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"[STORAGE] Ignoring malformed storage file at {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"[STORAGE] Ignoring non-object storage file at {self.path}")
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def save(self, trip_id: str) -> None:
        data = self._read()
        data[TRIP_STORAGE_KEY] = trip_id
        self._write(data)
        logger.debug(f"[STORAGE] Saved current trip {trip_id}")

    def get(self) -> str | None:
        return self._read().get(TRIP_STORAGE_KEY)

    def remove(self) -> None:
        data = self._read()
        if data.pop(TRIP_STORAGE_KEY, None) is not None:
            self._write(data)
            logger.debug("[STORAGE] Removed current trip")

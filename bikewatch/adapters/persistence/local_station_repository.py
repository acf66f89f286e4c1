from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bikewatch.app.ports.output import IStationRepository
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import Station

logger = logging.getLogger(__name__)


def _station_rows(payload: Any) -> list[Any]:
    # Accept a bare list or the GBFS-style {"data": {"stations": [...]}} envelope.
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("stations"), list):
            return data["stations"]
        if isinstance(payload.get("stations"), list):
            return payload["stations"]
    raise DatasetError("Station payload has no station list")


def parse_stations(payload: Any) -> tuple[Station, ...]:
    """Build Station records from decoded JSON, skipping unusable rows."""

    stations: list[Station] = []
    seen_ids: set[int] = set()
    seen_short_names: set[str] = set()
    skipped = 0
    for row in _station_rows(payload):
        if not isinstance(row, dict):
            skipped += 1
            continue
        raw_id = row.get("number", row.get("id"))
        try:
            station_id = int(raw_id)
            lon = float(row["lon"])
            lat = float(row["lat"])
            short_name = str(
                row.get("short_name") or row.get("shortName") or station_id
            ).strip()
            name = str(row.get("name") or short_name).strip()
            station = Station(
                id=station_id, short_name=short_name, name=name, lon=lon, lat=lat
            )
        except (TypeError, ValueError, KeyError):
            skipped += 1
            continue
        # Short names key the rendered markers, so they must be unique too.
        if station.id in seen_ids or station.short_name in seen_short_names:
            skipped += 1
            continue
        seen_ids.add(station.id)
        seen_short_names.add(station.short_name)
        stations.append(station)

    if skipped:
        logger.warning("Skipped %d malformed or duplicate station rows", skipped)
    return tuple(stations)


@dataclass(slots=True)
class LocalStationRepository(IStationRepository):
    """Loads stations from a JSON file.

    Env vars:
      - BIKEWATCH_STATIONS_PATH: path to the stations JSON (default data/stations.json)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = (
            self.path or os.getenv("BIKEWATCH_STATIONS_PATH") or "data/stations.json"
        )
        return Path(value)

    def load_stations(self) -> tuple[Station, ...]:
        path = self._path()
        try:
            with path.open("r", encoding="utf-8") as fp:
                payload = json.load(fp)
        except (OSError, ValueError) as exc:
            raise DatasetError(f"Cannot read stations from {path}: {exc}") from exc
        return parse_stations(payload)

from __future__ import annotations

import csv
import io
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping

from bikewatch.app.ports.output import ITripRepository
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import Trip

logger = logging.getLogger(__name__)

_TRUE_MEMBER_VALUES = {"1", "true", "yes", "y", "member"}


def _first(row: Mapping[str, str | None], *names: str) -> str:
    for name in names:
        value = row.get(name)
        if value is not None and value.strip():
            return value.strip()
    return ""


def _parse_timestamp(raw: str) -> datetime:
    # fromisoformat on older interpreters rejects a trailing "Z".
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _parse_station_id(raw: str) -> int | None:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # Rejects fractional ids as well as NaN and infinity.
    if not value.is_integer():
        return None
    return int(value)


def parse_trip_rows(rows: Iterable[Mapping[str, str | None]]) -> tuple[Trip, ...]:
    """Build Trip records from CSV rows.

    Rows whose timestamps cannot be parsed are dropped here so that they never
    reach the time-window filter.
    """

    trips: list[Trip] = []
    skipped = 0
    for index, row in enumerate(rows):
        try:
            start = _parse_timestamp(_first(row, "trip_started_at", "started_at"))
            end = _parse_timestamp(_first(row, "trip_ended_at", "ended_at"))
        except ValueError:
            skipped += 1
            continue

        trips.append(
            Trip(
                id=_first(row, "ride_id", "id") or str(index),
                bike_type=_first(row, "bike_type", "rideable_type"),
                start_time=start,
                end_time=end,
                start_station_id=_parse_station_id(_first(row, "start_station_id")),
                end_station_id=_parse_station_id(_first(row, "end_station_id")),
                member=_first(row, "member", "member_casual").lower()
                in _TRUE_MEMBER_VALUES,
            )
        )

    if skipped:
        logger.warning("Skipped %d trips with unparsable timestamps", skipped)
    return tuple(trips)


def parse_trips_csv(text: str) -> tuple[Trip, ...]:
    try:
        return parse_trip_rows(csv.DictReader(io.StringIO(text)))
    except csv.Error as exc:
        raise DatasetError(f"Malformed trips CSV: {exc}") from exc


@dataclass(slots=True)
class LocalTripRepository(ITripRepository):
    """Loads trips from a CSV file.

    Env vars:
      - BIKEWATCH_TRIPS_PATH: path to the trips CSV (default data/trips.csv)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("BIKEWATCH_TRIPS_PATH") or "data/trips.csv"
        return Path(value)

    def load_trips(self) -> tuple[Trip, ...]:
        path = self._path()
        try:
            with path.open("r", encoding="utf-8", newline="") as fp:
                return parse_trip_rows(csv.DictReader(fp))
        except (OSError, csv.Error) as exc:
            raise DatasetError(f"Cannot read trips from {path}: {exc}") from exc

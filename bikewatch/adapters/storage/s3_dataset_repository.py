from __future__ import annotations

import json
import os
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from bikewatch.adapters.aws import s3_client
from bikewatch.adapters.persistence.local_station_repository import parse_stations
from bikewatch.adapters.persistence.local_trip_repository import parse_trips_csv
from bikewatch.app.ports.output import IStationRepository, ITripRepository
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import Station, Trip


def _bucket(value: str | None) -> str:
    bucket = value or os.getenv("BIKEWATCH_DATA_BUCKET")
    if not bucket:
        raise DatasetError("Missing BIKEWATCH_DATA_BUCKET")
    return bucket


def _read_text(bucket: str, key: str) -> str:
    try:
        obj = s3_client().get_object(Bucket=bucket, Key=key)
        return obj["Body"].read().decode("utf-8-sig")
    except (BotoCoreError, ClientError, UnicodeDecodeError) as exc:
        raise DatasetError(f"Cannot read s3://{bucket}/{key}: {exc}") from exc


@dataclass(slots=True)
class S3StationRepository(IStationRepository):
    """Reads the stations JSON from S3.

    Env vars:
      - BIKEWATCH_DATA_BUCKET (required)
      - BIKEWATCH_STATIONS_KEY (default: stations.json)
      - ENDPOINT_URL (preferred for LocalStack)
    """

    bucket: str | None = None
    key: str | None = None

    def load_stations(self) -> tuple[Station, ...]:
        key = self.key or os.getenv("BIKEWATCH_STATIONS_KEY") or "stations.json"
        text = _read_text(_bucket(self.bucket), key)
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise DatasetError(f"Invalid stations JSON at {key}") from exc
        return parse_stations(payload)


@dataclass(slots=True)
class S3TripRepository(ITripRepository):
    """Reads the trips CSV from S3.

    Env vars:
      - BIKEWATCH_DATA_BUCKET (required)
      - BIKEWATCH_TRIPS_KEY (default: trips.csv)
    """

    bucket: str | None = None
    key: str | None = None

    def load_trips(self) -> tuple[Trip, ...]:
        key = self.key or os.getenv("BIKEWATCH_TRIPS_KEY") or "trips.csv"
        return parse_trips_csv(_read_text(_bucket(self.bucket), key))

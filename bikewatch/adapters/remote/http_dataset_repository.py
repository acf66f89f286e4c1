from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from bikewatch.adapters.persistence.local_station_repository import parse_stations
from bikewatch.adapters.persistence.local_trip_repository import parse_trips_csv
from bikewatch.app.ports.output import IStationRepository, ITripRepository
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import Station, Trip


def _timeout_s(default: float) -> float:
    raw = os.getenv("BIKEWATCH_HTTP_TIMEOUT_S")
    if raw:
        return float(raw)
    return default


def _get(
    url: str | None, *, timeout_s: float, transport: httpx.BaseTransport | None
) -> httpx.Response:
    if not url:
        raise DatasetError("Dataset URL not configured")
    try:
        with httpx.Client(
            timeout=timeout_s, follow_redirects=True, transport=transport
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise DatasetError(f"Cannot fetch {url}: {exc}") from exc
    return resp


@dataclass(slots=True)
class HttpStationRepository(IStationRepository):
    """Fetches the station registry as JSON over HTTP.

    Env vars:
      - BIKEWATCH_STATIONS_URL: stations JSON URL
      - BIKEWATCH_HTTP_TIMEOUT_S: request timeout (default 30)
    """

    url: str | None = None
    timeout_s: float = 30.0
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        if self.url is None:
            self.url = os.getenv("BIKEWATCH_STATIONS_URL")
        self.timeout_s = _timeout_s(self.timeout_s)

    def load_stations(self) -> tuple[Station, ...]:
        resp = _get(self.url, timeout_s=self.timeout_s, transport=self.transport)
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DatasetError(f"Invalid stations JSON from {self.url}") from exc
        return parse_stations(payload)


@dataclass(slots=True)
class HttpTripRepository(ITripRepository):
    """Fetches the trip log as CSV over HTTP.

    Env vars:
      - BIKEWATCH_TRIPS_URL: trips CSV URL
      - BIKEWATCH_HTTP_TIMEOUT_S: request timeout (default 30)
    """

    url: str | None = None
    timeout_s: float = 30.0
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        if self.url is None:
            self.url = os.getenv("BIKEWATCH_TRIPS_URL")
        self.timeout_s = _timeout_s(self.timeout_s)

    def load_trips(self) -> tuple[Trip, ...]:
        resp = _get(self.url, timeout_s=self.timeout_s, transport=self.transport)
        return parse_trips_csv(resp.text)

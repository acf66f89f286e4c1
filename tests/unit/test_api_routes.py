from __future__ import annotations

from datetime import datetime

import httpx
import pytest

from bikewatch.adapters.api.dependencies import get_traffic_view_service
from bikewatch.app.services.traffic_view_service import (
    TrafficContext,
    TrafficSnapshot,
    TrafficViewService,
)
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import Station, TimeSelection, Trip
from bikewatch.main import app


def _service() -> TrafficViewService:
    stations = (
        Station(id=1, short_name="A", name="Station A", lon=-71.09, lat=42.36),
        Station(id=2, short_name="B", name="Station B", lon=-71.10, lat=42.35),
    )

    def trip(trip_id: str, start: int, end: int, hh: int, mm: int) -> Trip:
        at = datetime(2024, 3, 1, hh, mm)
        return Trip(
            id=trip_id,
            bike_type="classic",
            start_time=at,
            end_time=at,
            start_station_id=start,
            end_station_id=end,
        )

    trips = (
        trip("t1", 1, 2, 8, 5),
        trip("t2", 2, 1, 8, 50),
        trip("t3", 1, 1, 23, 58),
    )
    return TrafficViewService(context=TrafficContext(stations=stations, trips=trips))


async def _get(path: str, **params: str) -> httpx.Response:
    app.dependency_overrides[get_traffic_view_service] = _service
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            return await client.get(path, params=params)
    finally:
        app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    resp = await _get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_traffic_for_morning_window() -> None:
    resp = await _get("/traffic", minute="510")

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["minute"] == 510
    assert payload["label"] == "08:30"
    assert payload["window"] == {"start_minute": 450, "end_minute": 570, "wraps": False}
    assert payload["trip_count"] == 2
    assert payload["size_scale"] == {"domain": [0.0, 2.0], "range": [2.0, 25.0]}
    counts = [
        (s["station_id"], s["departures"], s["arrivals"], s["total"])
        for s in payload["stations"]
    ]
    assert counts == [(1, 1, 1, 2), (2, 1, 1, 2)]
    assert all(s["flow_class"] == "balanced" for s in payload["stations"])


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_traffic_defaults_to_any_time() -> None:
    resp = await _get("/traffic")

    payload = resp.json()
    assert payload["minute"] is None
    assert payload["label"] == "Any time"
    assert payload["window"] is None
    assert payload["trip_count"] == 3


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_traffic_rejects_out_of_range_minute() -> None:
    resp = await _get("/traffic", minute="1440")
    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_markers_and_stations() -> None:
    markers = (await _get("/markers", minute="any")).json()
    assert markers["label"] == "Any time"
    by_name = {m["short_name"]: m for m in markers["markers"]}
    assert by_name["A"]["title"] == "4 trips (2 departures, 2 arrivals)"
    assert by_name["A"]["radius"] == 25.0
    assert by_name["A"]["fill"] == "#c9c9ff"

    stations = (await _get("/stations")).json()
    assert [s["short_name"] for s in stations] == ["A", "B"]


class _FailingService(TrafficViewService):
    error: Exception

    def recompute(self, selection: TimeSelection) -> TrafficSnapshot:
        raise self.error


async def _get_failing(error: Exception, path: str) -> httpx.Response:
    service = _FailingService(context=TrafficContext())
    service.error = error
    app.dependency_overrides[get_traffic_view_service] = lambda: service
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            return await client.get(path)
    finally:
        app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_dataset_error_maps_to_service_unavailable() -> None:
    resp = await _get_failing(DatasetError("trips offline"), "/traffic")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "trips offline", "status": 503}


@pytest.mark.unit
@pytest.mark.anyio
async def test_unexpected_error_hides_detail(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIKEWATCH_REVEAL_ERRORS", raising=False)
    resp = await _get_failing(RuntimeError("secret path"), "/traffic")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal Server Error", "status": 500}


@pytest.mark.unit
@pytest.mark.anyio
async def test_unexpected_error_revealed_when_enabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("BIKEWATCH_REVEAL_ERRORS", "true")
    resp = await _get_failing(RuntimeError("secret path"), "/traffic")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "secret path"

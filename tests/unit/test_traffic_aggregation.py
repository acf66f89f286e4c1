from __future__ import annotations

from datetime import datetime

from bikewatch.domain.algorithms.traffic import aggregate_traffic
from bikewatch.domain.models import Station, StationTraffic, Trip

T0 = datetime(2024, 3, 1, 8, 0)


def _stations() -> tuple[Station, ...]:
    return (
        Station(id=1, short_name="A32", name="Alpha", lon=-71.09, lat=42.36),
        Station(id=2, short_name="B11", name="Beta", lon=-71.10, lat=42.35),
        Station(id=3, short_name="C07", name="Gamma", lon=-71.11, lat=42.34),
    )


def _trip(start: int | None, end: int | None) -> Trip:
    return Trip(
        id=f"{start}-{end}",
        bike_type="electric",
        start_time=T0,
        end_time=T0,
        start_station_id=start,
        end_station_id=end,
    )


def test_counts_departures_and_arrivals_per_station() -> None:
    trips = (_trip(1, 2), _trip(1, 3), _trip(2, 1))
    traffic = aggregate_traffic(_stations(), trips)

    assert traffic == (
        StationTraffic(station_id=1, departures=2, arrivals=1),
        StationTraffic(station_id=2, departures=1, arrivals=1),
        StationTraffic(station_id=3, departures=0, arrivals=1),
    )
    assert [t.total for t in traffic] == [3, 2, 1]


def test_every_station_is_zero_filled_once() -> None:
    traffic = aggregate_traffic(_stations(), ())

    assert [t.station_id for t in traffic] == [1, 2, 3]
    assert all(t.departures == 0 and t.arrivals == 0 for t in traffic)


def test_unknown_and_missing_station_ids_are_ignored() -> None:
    trips = (_trip(99, 1), _trip(None, None), _trip(2, 42))
    traffic = {t.station_id: t for t in aggregate_traffic(_stations(), trips)}

    assert set(traffic) == {1, 2, 3}
    assert traffic[1].arrivals == 1
    assert traffic[2].departures == 1
    assert sum(t.total for t in traffic.values()) == 2


def test_total_is_always_departures_plus_arrivals() -> None:
    trips = (_trip(1, 1), _trip(1, 2), _trip(3, 1), _trip(3, 3))
    for t in aggregate_traffic(_stations(), trips):
        assert t.total == t.departures + t.arrivals


def test_empty_registry_yields_empty_result() -> None:
    assert aggregate_traffic((), (_trip(1, 2),)) == ()


def test_flow_ratio_guards_idle_station() -> None:
    assert StationTraffic(station_id=1).flow_ratio == 0.0
    assert StationTraffic(station_id=1, departures=3, arrivals=1).flow_ratio == 0.75

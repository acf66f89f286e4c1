from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from bikewatch.domain.models import Station, StationTraffic, Trip


def aggregate_traffic(
    stations: Sequence[Station], trips: Iterable[Trip]
) -> tuple[StationTraffic, ...]:
    """Reduce trips into one zero-filled StationTraffic per station.

    Output follows `stations` order. Trips referencing unknown (or missing)
    station ids do not contribute to any entry.
    """

    departures: Counter[int] = Counter()
    arrivals: Counter[int] = Counter()
    for trip in trips:
        if trip.start_station_id is not None:
            departures[trip.start_station_id] += 1
        if trip.end_station_id is not None:
            arrivals[trip.end_station_id] += 1

    return tuple(
        StationTraffic(
            station_id=s.id,
            departures=departures.get(s.id, 0),
            arrivals=arrivals.get(s.id, 0),
        )
        for s in stations
    )

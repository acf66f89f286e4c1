from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from bikewatch.app.ports.output import ITrafficRenderer
from bikewatch.app.services.traffic_view_service import TrafficSnapshot
from bikewatch.domain.models import FlowClass, Station, StationTraffic


@dataclass(frozen=True, slots=True)
class StationMarker:
    """Renderer-neutral circle for one station.

    Coordinates stay in lon/lat; projecting them is the drawing layer's job.
    """

    station_id: int
    short_name: str
    name: str
    lon: float
    lat: float
    radius: float
    flow_class: FlowClass
    departures: int
    arrivals: int
    total: int

    @property
    def fill(self) -> str:
        return self.flow_class.color

    @property
    def title(self) -> str:
        return (
            f"{self.total} trips ({self.departures} departures, "
            f"{self.arrivals} arrivals)"
        )


def build_markers(
    stations: Sequence[Station], snapshot: TrafficSnapshot
) -> tuple[StationMarker, ...]:
    """Join station records with the snapshot's traffic by station id."""

    traffic_by_id = snapshot.by_station_id()
    size = snapshot.scales.size_scale
    classify = snapshot.scales.color_classifier.classify

    markers: list[StationMarker] = []
    for s in stations:
        t = traffic_by_id.get(s.id) or StationTraffic(station_id=s.id)
        markers.append(
            StationMarker(
                station_id=s.id,
                short_name=s.short_name,
                name=s.name,
                lon=s.lon,
                lat=s.lat,
                radius=size(t.total),
                flow_class=classify(t),
                departures=t.departures,
                arrivals=t.arrivals,
                total=t.total,
            )
        )
    return tuple(markers)


@dataclass(slots=True)
class MarkerFrameRenderer(ITrafficRenderer):
    """Keeps the latest marker frame, keyed by station short name."""

    stations: Sequence[Station]
    last_frame: dict[str, StationMarker] = field(default_factory=dict)
    frames_rendered: int = 0

    def render(self, snapshot: TrafficSnapshot) -> None:
        markers = build_markers(self.stations, snapshot)
        # Replace, never merge: stations absent from this frame disappear.
        self.last_frame = {m.short_name: m for m in markers}
        self.frames_rendered += 1

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FlowClass(str, Enum):
    ARRIVALS = "arrivals"
    BALANCED = "balanced"
    DEPARTURES = "departures"

    @property
    def color(self) -> str:
        return _FLOW_COLORS[self]


_FLOW_COLORS: dict[FlowClass, str] = {
    FlowClass.ARRIVALS: "#6ea8fe",
    FlowClass.BALANCED: "#c9c9ff",
    FlowClass.DEPARTURES: "#ffb26e",
}


@dataclass(frozen=True, slots=True)
class StationTraffic:
    """Departure/arrival counts for one station within one filter window."""

    station_id: int
    departures: int = 0
    arrivals: int = 0

    @property
    def total(self) -> int:
        return self.departures + self.arrivals

    @property
    def flow_ratio(self) -> float:
        """Share of the station's traffic that is departures (0 when idle)."""

        return self.departures / max(1, self.total)

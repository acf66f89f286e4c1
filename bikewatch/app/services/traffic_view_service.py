from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bikewatch.app.ports.output import (
    IStationRepository,
    ITrafficRenderer,
    ITripRepository,
)
from bikewatch.domain.algorithms.scales import (
    DEFAULT_RADIUS_RANGE,
    EncodingScales,
    compute_scales,
)
from bikewatch.domain.algorithms.time_window import filter_trips
from bikewatch.domain.algorithms.traffic import aggregate_traffic
from bikewatch.domain.exceptions import DatasetError
from bikewatch.domain.models import (
    ANY_TIME,
    Station,
    StationTraffic,
    TimeSelection,
    Trip,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrafficContext:
    """Immutable station registry and trip log shared by every recompute."""

    stations: tuple[Station, ...] = ()
    trips: tuple[Trip, ...] = ()
    # False when a source failed to load and was replaced by an empty one.
    complete: bool = True

    @staticmethod
    def load(
        station_repository: IStationRepository, trip_repository: ITripRepository
    ) -> "TrafficContext":
        """Load both datasets; a failing source degrades to an empty one."""

        complete = True
        try:
            stations = station_repository.load_stations()
        except DatasetError:
            logger.warning(
                "Station dataset unavailable; using empty registry", exc_info=True
            )
            stations = ()
            complete = False

        try:
            trips = trip_repository.load_trips()
        except DatasetError:
            logger.warning(
                "Trip dataset unavailable; using empty trip log", exc_info=True
            )
            trips = ()
            complete = False

        logger.info("Loaded %d stations and %d trips", len(stations), len(trips))
        return TrafficContext(
            stations=tuple(stations), trips=tuple(trips), complete=complete
        )


@dataclass(frozen=True, slots=True)
class TrafficSnapshot:
    selection: TimeSelection
    traffic: tuple[StationTraffic, ...]
    scales: EncodingScales
    trip_count: int

    def by_station_id(self) -> dict[int, StationTraffic]:
        return {t.station_id: t for t in self.traffic}

    def get(self, station_id: int) -> StationTraffic | None:
        for t in self.traffic:
            if t.station_id == station_id:
                return t
        return None


@dataclass(slots=True)
class TrafficViewService:
    """Recomputes station traffic whenever the time selection changes.

    The only state kept across calls is the context and the current
    selection; every call re-filters and re-aggregates the full trip log.
    """

    context: TrafficContext
    renderer: ITrafficRenderer | None = None
    radius_range: tuple[float, float] = DEFAULT_RADIUS_RANGE
    _selection: TimeSelection = field(default=ANY_TIME, init=False, repr=False)

    @property
    def selection(self) -> TimeSelection:
        return self._selection

    def recompute(self, selection: TimeSelection) -> TrafficSnapshot:
        filtered = filter_trips(self.context.trips, selection)
        traffic = aggregate_traffic(self.context.stations, filtered)
        scales = compute_scales(traffic, radius_range=self.radius_range)
        return TrafficSnapshot(
            selection=selection,
            traffic=traffic,
            scales=scales,
            trip_count=len(filtered),
        )

    def on_time_change(self, selection: TimeSelection) -> TrafficSnapshot:
        self._selection = selection
        snapshot = self.recompute(selection)
        if self.renderer is not None:
            self.renderer.render(snapshot)
        return snapshot

    def start(self) -> TrafficSnapshot:
        return self.on_time_change(ANY_TIME)

from __future__ import annotations

import os

from bikewatch.adapters.persistence import LocalStationRepository, LocalTripRepository
from bikewatch.adapters.remote.http_dataset_repository import (
    HttpStationRepository,
    HttpTripRepository,
)
from bikewatch.adapters.storage.s3_dataset_repository import (
    S3StationRepository,
    S3TripRepository,
)
from bikewatch.app.ports.output import IStationRepository, ITripRepository
from bikewatch.app.services.traffic_view_service import (
    TrafficContext,
    TrafficViewService,
)
from bikewatch.domain.algorithms.scales import DEFAULT_RADIUS_RANGE


def _repositories() -> tuple[IStationRepository, ITripRepository]:
    source = (os.getenv("BIKEWATCH_SOURCE") or "local").strip().lower()
    if source == "http":
        return HttpStationRepository(), HttpTripRepository()
    if source == "s3":
        return S3StationRepository(), S3TripRepository()
    if source != "local":
        raise RuntimeError(f"Unknown BIKEWATCH_SOURCE: {source}")
    return LocalStationRepository(), LocalTripRepository()


def _radius_range() -> tuple[float, float]:
    low, high = DEFAULT_RADIUS_RANGE
    if os.getenv("BIKEWATCH_RADIUS_MIN"):
        low = float(os.environ["BIKEWATCH_RADIUS_MIN"])
    if os.getenv("BIKEWATCH_RADIUS_MAX"):
        high = float(os.environ["BIKEWATCH_RADIUS_MAX"])
    return low, high


_cached_service: TrafficViewService | None = None


def get_traffic_view_service() -> TrafficViewService:
    """Return the process-wide service, loading datasets on first use.

    A context that degraded to empty data is served but not kept, so the next
    request retries the sources.
    """

    global _cached_service
    if _cached_service is not None:
        return _cached_service

    station_repository, trip_repository = _repositories()
    context = TrafficContext.load(station_repository, trip_repository)
    service = TrafficViewService(context=context, radius_range=_radius_range())
    if context.complete:
        _cached_service = service
    return service

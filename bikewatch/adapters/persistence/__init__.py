from .local_station_repository import LocalStationRepository
from .local_trip_repository import LocalTripRepository

__all__ = [
    "LocalStationRepository",
    "LocalTripRepository",
]

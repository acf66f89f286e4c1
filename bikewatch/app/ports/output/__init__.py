from .station_repository import IStationRepository
from .traffic_renderer import ITrafficRenderer
from .trip_repository import ITripRepository

__all__ = [
    "IStationRepository",
    "ITrafficRenderer",
    "ITripRepository",
]

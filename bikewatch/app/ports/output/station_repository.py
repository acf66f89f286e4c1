from __future__ import annotations

from abc import ABC, abstractmethod

from bikewatch.domain.models import Station


class IStationRepository(ABC):
    """Port for loading the station registry."""

    @abstractmethod
    def load_stations(self) -> tuple[Station, ...]:
        raise NotImplementedError

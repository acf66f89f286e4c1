from __future__ import annotations

from abc import ABC, abstractmethod

from bikewatch.domain.models import Trip


class ITripRepository(ABC):
    """Port for loading the trip log.

    Implementations drop rows with unparsable timestamps before returning.
    """

    @abstractmethod
    def load_trips(self) -> tuple[Trip, ...]:
        raise NotImplementedError

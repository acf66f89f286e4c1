from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bikewatch.app.services.traffic_view_service import TrafficSnapshot


class ITrafficRenderer(ABC):
    """Port for drawing a traffic snapshot.

    Every call is authoritative: the renderer replaces its previous visual
    state instead of merging into it.
    """

    @abstractmethod
    def render(self, snapshot: TrafficSnapshot) -> None:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from bikewatch.domain.models import ANY_TIME, TimeSelection, Trip
from bikewatch.domain.models.time_selection import MINUTES_PER_DAY

WINDOW_RADIUS_MIN = 60


@dataclass(frozen=True, slots=True)
class WindowBounds:
    """Inclusive minutes-since-midnight bounds; start > end when wrapping."""

    start: int
    end: int

    @property
    def wraps(self) -> bool:
        return self.start > self.end

    def __contains__(self, minute: int) -> bool:
        if self.wraps:
            return minute >= self.start or minute <= self.end
        return self.start <= minute <= self.end


def minutes_since_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def window_bounds(minute: int, *, radius: int = WINDOW_RADIUS_MIN) -> WindowBounds:
    return WindowBounds(
        start=(minute - radius + MINUTES_PER_DAY) % MINUTES_PER_DAY,
        end=(minute + radius) % MINUTES_PER_DAY,
    )


def filter_trips(trips: Sequence[Trip], selection: TimeSelection) -> Sequence[Trip]:
    """Keep trips starting or ending within ±60 minutes of the selection.

    ANY_TIME returns `trips` itself; callers must not mutate the result.
    Input order is preserved.
    """

    if selection is ANY_TIME:
        return trips

    bounds = window_bounds(selection.minute)
    return tuple(
        t
        for t in trips
        if minutes_since_midnight(t.start_time) in bounds
        or minutes_since_midnight(t.end_time) in bounds
    )

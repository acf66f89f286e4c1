from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Trip:
    """A single bike-share ride.

    Station ids are None when the source row could not be matched to a dock.
    `end_time >= start_time` is expected but not enforced.
    """

    id: str
    bike_type: str
    start_time: datetime
    end_time: datetime
    start_station_id: int | None = None
    end_station_id: int | None = None
    member: bool = False

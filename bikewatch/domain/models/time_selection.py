from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from bikewatch.domain.exceptions.errors import InvalidTimeSelection

MINUTES_PER_DAY = 1440


class AnyTime(Enum):
    """Sentinel selection: no time-of-day filter."""

    ANY_TIME = "any"


ANY_TIME = AnyTime.ANY_TIME


@dataclass(frozen=True, slots=True)
class SpecificMinute:
    minute: int

    def __post_init__(self) -> None:
        if isinstance(self.minute, bool) or not isinstance(self.minute, int):
            raise InvalidTimeSelection(f"Minute must be an int: {self.minute!r}")
        if not (0 <= self.minute < MINUTES_PER_DAY):
            raise InvalidTimeSelection(f"Minute out of range: {self.minute}")


TimeSelection = Union[SpecificMinute, AnyTime]


def parse_time_selection(raw: str | int | None) -> TimeSelection:
    """Parse a UI/query value into a selection.

    None, "" and "any" (case-insensitive, also "any time") select ANY_TIME.
    Integers and digit strings select that minute of the day.
    """

    if raw is None:
        return ANY_TIME
    if isinstance(raw, int) and not isinstance(raw, bool):
        return SpecificMinute(raw)
    if isinstance(raw, str):
        value = raw.strip().lower()
        if value in {"", "any", "any time", "anytime"}:
            return ANY_TIME
        try:
            minute = int(value)
        except ValueError:
            raise InvalidTimeSelection(f"Unparsable time selection: {raw!r}") from None
        return SpecificMinute(minute)
    raise InvalidTimeSelection(f"Unsupported time selection: {raw!r}")


def format_time_selection(selection: TimeSelection) -> str:
    if selection is ANY_TIME:
        return "Any time"
    hours, minutes = divmod(selection.minute, 60)
    return f"{hours:02d}:{minutes:02d}"

from .station import Station
from .time_selection import (
    ANY_TIME,
    AnyTime,
    SpecificMinute,
    TimeSelection,
    format_time_selection,
    parse_time_selection,
)
from .traffic import FlowClass, StationTraffic
from .trip import Trip

__all__ = [
    "ANY_TIME",
    "AnyTime",
    "FlowClass",
    "SpecificMinute",
    "Station",
    "StationTraffic",
    "TimeSelection",
    "Trip",
    "format_time_selection",
    "parse_time_selection",
]

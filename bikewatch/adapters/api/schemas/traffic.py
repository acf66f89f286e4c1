from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StationSchema(BaseModel):
    id: int
    short_name: str
    name: str
    lon: float = Field(..., ge=-180.0, le=180.0)
    lat: float = Field(..., ge=-90.0, le=90.0)


class TimeWindowSchema(BaseModel):
    start_minute: int
    end_minute: int
    wraps: bool


class SizeScaleSchema(BaseModel):
    domain: tuple[float, float]
    range: tuple[float, float]


class StationTrafficSchema(BaseModel):
    station_id: int
    departures: int
    arrivals: int
    total: int
    flow_ratio: float
    radius: float
    flow_class: Literal["arrivals", "balanced", "departures"]


class TrafficResponseSchema(BaseModel):
    minute: int | None = None
    label: str
    window: TimeWindowSchema | None = None
    trip_count: int
    size_scale: SizeScaleSchema
    stations: list[StationTrafficSchema]


class StationMarkerSchema(BaseModel):
    station_id: int
    short_name: str
    name: str
    lon: float
    lat: float
    radius: float
    fill: str
    title: str


class MarkerFrameSchema(BaseModel):
    label: str
    markers: list[StationMarkerSchema]

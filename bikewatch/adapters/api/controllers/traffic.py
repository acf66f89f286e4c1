from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from bikewatch.adapters.api.dependencies import get_traffic_view_service
from bikewatch.adapters.api.schemas.traffic import (
    MarkerFrameSchema,
    SizeScaleSchema,
    StationMarkerSchema,
    StationSchema,
    StationTrafficSchema,
    TimeWindowSchema,
    TrafficResponseSchema,
)
from bikewatch.adapters.render.marker_renderer import MarkerFrameRenderer
from bikewatch.app.services.traffic_view_service import (
    TrafficSnapshot,
    TrafficViewService,
)
from bikewatch.domain.algorithms.time_window import window_bounds
from bikewatch.domain.exceptions import InvalidTimeSelection
from bikewatch.domain.models import (
    ANY_TIME,
    TimeSelection,
    format_time_selection,
    parse_time_selection,
)

router = APIRouter(tags=["traffic"])


def _selection(minute: str | None) -> TimeSelection:
    try:
        return parse_time_selection(minute)
    except InvalidTimeSelection as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _snapshot_to_schema(snapshot: TrafficSnapshot) -> TrafficResponseSchema:
    selection = snapshot.selection
    window = None
    minute = None
    if selection is not ANY_TIME:
        minute = selection.minute
        bounds = window_bounds(selection.minute)
        window = TimeWindowSchema(
            start_minute=bounds.start, end_minute=bounds.end, wraps=bounds.wraps
        )

    size = snapshot.scales.size_scale
    classify = snapshot.scales.color_classifier.classify
    return TrafficResponseSchema(
        minute=minute,
        label=format_time_selection(selection),
        window=window,
        trip_count=snapshot.trip_count,
        size_scale=SizeScaleSchema(
            domain=(0.0, size.domain_max), range=(size.range_min, size.range_max)
        ),
        stations=[
            StationTrafficSchema(
                station_id=t.station_id,
                departures=t.departures,
                arrivals=t.arrivals,
                total=t.total,
                flow_ratio=t.flow_ratio,
                radius=size(t.total),
                flow_class=classify(t).value,
            )
            for t in snapshot.traffic
        ],
    )


@router.get("/stations", response_model=list[StationSchema])
def list_stations(
    service: TrafficViewService = Depends(get_traffic_view_service),
) -> list[StationSchema]:
    return [
        StationSchema(
            id=s.id, short_name=s.short_name, name=s.name, lon=s.lon, lat=s.lat
        )
        for s in service.context.stations
    ]


@router.get("/traffic", response_model=TrafficResponseSchema)
def get_traffic(
    minute: str | None = Query(default=None),
    service: TrafficViewService = Depends(get_traffic_view_service),
) -> TrafficResponseSchema:
    return _snapshot_to_schema(service.recompute(_selection(minute)))


@router.get("/markers", response_model=MarkerFrameSchema)
def get_markers(
    minute: str | None = Query(default=None),
    service: TrafficViewService = Depends(get_traffic_view_service),
) -> MarkerFrameSchema:
    selection = _selection(minute)

    # Per-request controller over the shared immutable context.
    renderer = MarkerFrameRenderer(stations=service.context.stations)
    view = TrafficViewService(
        context=service.context,
        renderer=renderer,
        radius_range=service.radius_range,
    )
    view.on_time_change(selection)

    return MarkerFrameSchema(
        label=format_time_selection(selection),
        markers=[
            StationMarkerSchema(
                station_id=m.station_id,
                short_name=m.short_name,
                name=m.name,
                lon=m.lon,
                lat=m.lat,
                radius=m.radius,
                fill=m.fill,
                title=m.title,
            )
            for m in renderer.last_frame.values()
        ],
    )

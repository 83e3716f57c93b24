from __future__ import annotations

from collections.abc import Sequence

from map_engine.display import AspectRatioProvider, FixedAspectRatio
from map_engine.events import EventRecord
from map_engine.markers import Marker, build_markers
from map_engine.models import CameraCommand, GeoPoint, MapOptions
from map_engine.recenter import MapHandle
from map_engine.region import Region, compute_region
from map_engine.view import EventMapView, MapViewConfig

from api.schemas.map import (
    CameraCommandItem,
    GeoPointItem,
    MapBounds,
    MapGroundSpan,
    MapInitialViewResult,
    MapMarkerItem,
    MapMarkersResult,
    MapOptionsItem,
    MapRegionResult,
)


class MapService:
    def __init__(self, config: MapViewConfig, events: Sequence[EventRecord]) -> None:
        self._config = config
        self._events = list(events)

    async def region(
        self,
        display: AspectRatioProvider,
        center_lat: float | None = None,
        center_lng: float | None = None,
        radius_km: float | None = None,
    ) -> MapRegionResult:
        center = GeoPoint(
            latitude=self._config.center.latitude if center_lat is None else center_lat,
            longitude=self._config.center.longitude if center_lng is None else center_lng,
        )
        aspect_ratio = display.aspect_ratio()
        region = compute_region(
            center,
            self._config.radius_km if radius_km is None else radius_km,
            aspect_ratio,
        )
        return to_region_result(region, aspect_ratio)

    async def markers(self) -> MapMarkersResult:
        return MapMarkersResult(items=[to_marker_item(marker) for marker in build_markers(self._events)])

    async def initial_view(self, display: AspectRatioProvider) -> MapInitialViewResult:
        aspect_ratio = display.aspect_ratio()
        region = compute_region(self._config.center, self._config.radius_km, aspect_ratio)
        return MapInitialViewResult(
            region=to_region_result(region, aspect_ratio),
            markers=[to_marker_item(marker) for marker in build_markers(self._events)],
            options=to_options_item(self._config.options),
        )

    def open_view(self, display: AspectRatioProvider, map_handle: MapHandle) -> tuple[EventMapView, MapInitialViewResult]:
        # read the display once; the view and its description must agree
        aspect_ratio = display.aspect_ratio()
        view = EventMapView(self._config, FixedAspectRatio(aspect_ratio), self._events, map_handle)
        description = MapInitialViewResult(
            region=to_region_result(view.initial_region, aspect_ratio),
            markers=[to_marker_item(marker) for marker in view.markers],
            options=to_options_item(view.options),
        )
        return view, description


def to_point_item(point: GeoPoint) -> GeoPointItem:
    return GeoPointItem(latitude=point.latitude, longitude=point.longitude)


def to_region_result(region: Region, aspect_ratio: float) -> MapRegionResult:
    south, west, north, east = region.bounds()
    latitude_km, longitude_km = region.ground_spans_km()
    return MapRegionResult(
        center=to_point_item(region.center),
        latitude_delta=region.latitude_delta,
        longitude_delta=region.longitude_delta,
        aspect_ratio=aspect_ratio,
        bounds=MapBounds(south=south, west=west, north=north, east=east),
        ground_span=MapGroundSpan(latitude_km=round(latitude_km, 6), longitude_km=round(longitude_km, 6)),
    )


def to_marker_item(marker: Marker) -> MapMarkerItem:
    return MapMarkerItem(
        key=marker.key,
        latitude=marker.coordinate.latitude,
        longitude=marker.coordinate.longitude,
        title=marker.title,
    )


def to_options_item(options: MapOptions) -> MapOptionsItem:
    return MapOptionsItem(
        provider=options.provider,
        shows_user_location=options.shows_user_location,
        shows_my_location_button=options.shows_my_location_button,
        shows_scale=options.shows_scale,
    )


def to_camera_command_item(command: CameraCommand) -> CameraCommandItem:
    return CameraCommandItem(center=to_point_item(command.center), duration_ms=command.duration_ms)

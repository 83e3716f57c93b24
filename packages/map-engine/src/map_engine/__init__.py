"""Event map core package."""

from map_engine.display import AspectRatioProvider, DisplayMetricsError, FixedAspectRatio, ScreenDimensions
from map_engine.events import EventRecord, EventRecurrence, EventSession, load_events, parse_event
from map_engine.markers import Marker, build_markers
from map_engine.models import CameraCommand, GeoPoint, MapOptions
from map_engine.recenter import CAMERA_ANIMATION_MS, RECENTER_DELAY_MS, MapHandle, RecenterScheduler
from map_engine.region import (
    EARTH_RADIUS_KM,
    Region,
    compute_region,
    compute_region_for_display,
    degrees_to_km,
    km_to_degrees,
)
from map_engine.view import EventMapView, MapViewConfig

__all__ = [
    "AspectRatioProvider",
    "CAMERA_ANIMATION_MS",
    "CameraCommand",
    "DisplayMetricsError",
    "EARTH_RADIUS_KM",
    "EventMapView",
    "EventRecord",
    "EventRecurrence",
    "EventSession",
    "FixedAspectRatio",
    "GeoPoint",
    "MapHandle",
    "MapOptions",
    "MapViewConfig",
    "Marker",
    "RECENTER_DELAY_MS",
    "RecenterScheduler",
    "Region",
    "ScreenDimensions",
    "build_markers",
    "compute_region",
    "compute_region_for_display",
    "degrees_to_km",
    "km_to_degrees",
    "load_events",
    "parse_event",
]

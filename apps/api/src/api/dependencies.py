from __future__ import annotations

from devkit.config import load_settings
from map_engine.events import load_events
from map_engine.models import GeoPoint, MapOptions
from map_engine.view import MapViewConfig

from api.services.map_service import MapService

settings = load_settings("event-map-api")

_map_view_config = MapViewConfig(
    center=GeoPoint(latitude=settings.MAP_CENTER_LATITUDE, longitude=settings.MAP_CENTER_LONGITUDE),
    radius_km=settings.MAP_RADIUS_KM,
    recenter_delay_ms=settings.RECENTER_DELAY_MS,
    camera_animation_ms=settings.CAMERA_ANIMATION_MS,
    options=MapOptions(provider=settings.MAP_PROVIDER),
)
_map_service = MapService(_map_view_config, load_events(settings.EVENTS_PATH))


def get_map_service() -> MapService:
    return _map_service

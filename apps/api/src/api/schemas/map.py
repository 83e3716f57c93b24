from pydantic import BaseModel


class GeoPointItem(BaseModel):
    latitude: float
    longitude: float


class MapBounds(BaseModel):
    south: float
    west: float
    north: float
    east: float


class MapGroundSpan(BaseModel):
    latitude_km: float
    longitude_km: float


class MapRegionResult(BaseModel):
    center: GeoPointItem
    latitude_delta: float
    longitude_delta: float
    aspect_ratio: float
    bounds: MapBounds
    ground_span: MapGroundSpan


class MapMarkerItem(BaseModel):
    key: str
    latitude: float
    longitude: float
    title: str | None = None


class MapMarkersResult(BaseModel):
    items: list[MapMarkerItem]


class MapOptionsItem(BaseModel):
    provider: str
    shows_user_location: bool
    shows_my_location_button: bool
    shows_scale: bool


class MapInitialViewResult(BaseModel):
    region: MapRegionResult
    markers: list[MapMarkerItem]
    options: MapOptionsItem


class CameraCommandItem(BaseModel):
    center: GeoPointItem
    duration_ms: int

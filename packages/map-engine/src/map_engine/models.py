from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CameraCommand:
    center: GeoPoint
    duration_ms: int


@dataclass(frozen=True)
class MapOptions:
    provider: str = "google"
    shows_user_location: bool = True
    shows_my_location_button: bool = True
    shows_scale: bool = True

"""Initial map viewport sized from a ground radius and the display aspect ratio."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from map_engine.display import AspectRatioProvider
from map_engine.models import GeoPoint

EARTH_RADIUS_KM = 6371

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    center: GeoPoint
    latitude_delta: float
    longitude_delta: float

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (south, west, north, east) in degrees."""
        half_lat = self.latitude_delta / 2
        half_lng = self.longitude_delta / 2
        return (
            self.center.latitude - half_lat,
            self.center.longitude - half_lng,
            self.center.latitude + half_lat,
            self.center.longitude + half_lng,
        )

    def ground_spans_km(self) -> tuple[float, float]:
        """Return the (latitude, longitude) axis spans as ground distance."""
        return degrees_to_km(self.latitude_delta), degrees_to_km(self.longitude_delta)


def km_to_degrees(span_km: float) -> float:
    return (span_km / EARTH_RADIUS_KM / math.pi) * 180


def degrees_to_km(delta_degrees: float) -> float:
    return (delta_degrees / 180) * math.pi * EARTH_RADIUS_KM


def compute_region(center: GeoPoint, radius_km: float, aspect_ratio: float) -> Region:
    """Build a region whose shorter display axis spans exactly 2 * radius_km.

    The longer axis is stretched by the aspect ratio: longitude (width) when the
    display is wider than tall, latitude (height) otherwise. Degrees come from a
    small-angle conversion on a sphere of EARTH_RADIUS_KM, with no correction for
    longitude convergence away from the equator.
    """
    _validate_positive("radius_km", radius_km)
    _validate_positive("aspect_ratio", aspect_ratio)

    shorter_span_km = radius_km * 2
    if aspect_ratio > 1:
        latitude_span_km = shorter_span_km
        longitude_span_km = shorter_span_km * aspect_ratio
    else:
        latitude_span_km = shorter_span_km / aspect_ratio
        longitude_span_km = shorter_span_km

    region = Region(
        center=center,
        latitude_delta=km_to_degrees(latitude_span_km),
        longitude_delta=km_to_degrees(longitude_span_km),
    )
    # extreme inputs can underflow to 0.0 or overflow to inf
    _validate_positive("latitude_delta", region.latitude_delta)
    _validate_positive("longitude_delta", region.longitude_delta)
    logger.debug(
        "region_computed",
        extra={
            "component": "map_engine",
            "radius_km": radius_km,
            "aspect_ratio": aspect_ratio,
            "latitude_delta": region.latitude_delta,
            "longitude_delta": region.longitude_delta,
        },
    )
    return region


def compute_region_for_display(
    center: GeoPoint,
    radius_km: float,
    display: AspectRatioProvider,
) -> Region:
    return compute_region(center, radius_km, display.aspect_ratio())


def _validate_positive(field: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{field} must be a finite number > 0")

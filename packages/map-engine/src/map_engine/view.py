from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

from map_engine.display import AspectRatioProvider
from map_engine.events import EventRecord
from map_engine.markers import Marker, build_markers
from map_engine.models import GeoPoint, MapOptions
from map_engine.recenter import CAMERA_ANIMATION_MS, RECENTER_DELAY_MS, MapHandle, RecenterScheduler
from map_engine.region import Region, compute_region_for_display

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapViewConfig:
    center: GeoPoint
    radius_km: float = 1.0
    recenter_delay_ms: int = RECENTER_DELAY_MS
    camera_animation_ms: int = CAMERA_ANIMATION_MS
    options: MapOptions = field(default_factory=MapOptions)


class EventMapView:
    def __init__(
        self,
        config: MapViewConfig,
        display: AspectRatioProvider,
        events: Sequence[EventRecord],
        map_handle: MapHandle,
        *,
        sleep_fn: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._initial_region = compute_region_for_display(config.center, config.radius_km, display)
        self._markers = build_markers(events)
        self._recenter = RecenterScheduler(
            map_handle,
            config.center,
            delay_ms=config.recenter_delay_ms,
            duration_ms=config.camera_animation_ms,
            sleep_fn=sleep_fn,
        )
        logger.info(
            "map_session_opened",
            extra={"component": "map_engine", "marker_count": len(self._markers)},
        )

    @property
    def initial_region(self) -> Region:
        return self._initial_region

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers)

    @property
    def options(self) -> MapOptions:
        return self._config.options

    @property
    def recenter_pending(self) -> bool:
        return self._recenter.pending

    def on_map_ready(self) -> asyncio.Task[None]:
        return self._recenter.on_map_ready()

    def close(self) -> None:
        self._recenter.close()
        logger.info("map_session_closed", extra={"component": "map_engine"})

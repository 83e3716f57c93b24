from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from map_engine.models import CameraCommand, GeoPoint

RECENTER_DELAY_MS = 500
CAMERA_ANIMATION_MS = 150

logger = logging.getLogger(__name__)


class MapHandle(Protocol):
    async def animate_camera(self, command: CameraCommand) -> None: ...


class RecenterScheduler:
    """One-shot camera recenter issued a fixed delay after the map reports ready.

    The delay lets the map widget finish its own initial layout animation. The
    pending command is owned by the view: cancel() or close() before it fires
    drops it, so nothing reaches a map handle that has been torn down.
    """

    def __init__(
        self,
        map_handle: MapHandle,
        center: GeoPoint,
        *,
        delay_ms: int = RECENTER_DELAY_MS,
        duration_ms: int = CAMERA_ANIMATION_MS,
        sleep_fn: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        self._map_handle = map_handle
        self._center = center
        self._delay_ms = delay_ms
        self._duration_ms = duration_ms
        self._sleep_fn = sleep_fn
        self._task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def on_map_ready(self) -> asyncio.Task[None]:
        if self._closed:
            raise RuntimeError("recenter scheduler is closed")
        if self.pending:
            self.cancel()
        self._task = asyncio.create_task(self._recenter_after_delay())
        self._task.add_done_callback(self._log_failure)
        logger.info(
            "recenter_scheduled",
            extra={"component": "map_engine", "delay_ms": self._delay_ms, "duration_ms": self._duration_ms},
        )
        return self._task

    def cancel(self) -> bool:
        if not self.pending:
            return False
        assert self._task is not None
        self._task.cancel()
        logger.info("recenter_cancelled", extra={"component": "map_engine"})
        return True

    def close(self) -> None:
        self._closed = True
        self.cancel()

    async def _recenter_after_delay(self) -> None:
        await self._sleep_fn(self._delay_ms / 1000)
        command = CameraCommand(center=self._center, duration_ms=self._duration_ms)
        await self._map_handle.animate_camera(command)
        logger.info(
            "recenter_fired",
            extra={
                "component": "map_engine",
                "latitude": self._center.latitude,
                "longitude": self._center.longitude,
            },
        )

    @staticmethod
    def _log_failure(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("recenter_failed", exc_info=exc, extra={"component": "map_engine"})

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel

from map_engine.display import AspectRatioProvider, DisplayMetricsError, FixedAspectRatio, ScreenDimensions
from map_engine.models import CameraCommand

from api.dependencies import get_map_service
from api.errors import map_engine_error
from api.observability import SESSION_CLOSED, SESSION_OPENED, SESSION_REJECTED
from api.response import error_response, success_response
from api.services.map_service import MapService, to_camera_command_item

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/map", tags=["map"])


class WebSocketMapHandle:
    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket

    async def animate_camera(self, command: CameraCommand) -> None:
        await self._websocket.send_json(
            {"type": "animate_camera", "data": to_camera_command_item(command).model_dump()}
        )


def _resolve_display(
    screen_width: float | None,
    screen_height: float | None,
    aspect_ratio: float | None,
) -> AspectRatioProvider:
    if aspect_ratio is not None:
        return FixedAspectRatio(aspect_ratio)
    return ScreenDimensions(width=screen_width, height=screen_height)


async def _receive_message(websocket: WebSocket) -> Any:
    """Decode the next frame as JSON, accepting text or binary frames."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE), message.get("reason"))
    payload = message.get("text")
    if payload is None:
        payload = message.get("bytes")
    if payload is None:
        raise ValueError("empty frame")
    return json.loads(payload)


async def _call_map_service(action: Callable[[], Awaitable[T]], meta: dict | None = None) -> dict:
    try:
        data = await action()
    except (DisplayMetricsError, ValueError) as exc:
        raise map_engine_error(exc) from exc
    return success_response(data.model_dump(), meta=meta or {})


@router.get("/region")
async def region(
    screen_width: float | None = Query(default=None, gt=0),
    screen_height: float | None = Query(default=None, gt=0),
    aspect_ratio: float | None = Query(default=None, gt=0),
    center_lat: float | None = Query(default=None, ge=-90, le=90),
    center_lng: float | None = Query(default=None, ge=-180, le=180),
    radius_km: float | None = Query(default=None, gt=0),
    service: MapService = Depends(get_map_service),
) -> dict:
    display = _resolve_display(screen_width, screen_height, aspect_ratio)
    return await _call_map_service(
        lambda: service.region(display, center_lat=center_lat, center_lng=center_lng, radius_km=radius_km),
    )


@router.get("/markers")
async def markers(service: MapService = Depends(get_map_service)) -> dict:
    result = await service.markers()
    return success_response(result.model_dump(), meta={"count": len(result.items)})


@router.get("/initial-view")
async def initial_view(
    screen_width: float | None = Query(default=None, gt=0),
    screen_height: float | None = Query(default=None, gt=0),
    aspect_ratio: float | None = Query(default=None, gt=0),
    service: MapService = Depends(get_map_service),
) -> dict:
    display = _resolve_display(screen_width, screen_height, aspect_ratio)
    return await _call_map_service(lambda: service.initial_view(display))


@router.websocket("/session")
async def map_session(
    websocket: WebSocket,
    screen_width: float | None = None,
    screen_height: float | None = None,
    aspect_ratio: float | None = None,
    service: MapService = Depends(get_map_service),
) -> None:
    await websocket.accept()
    collector = websocket.app.state.composite_metrics
    display = _resolve_display(screen_width, screen_height, aspect_ratio)
    try:
        view, description = service.open_view(display, WebSocketMapHandle(websocket))
    except (DisplayMetricsError, ValueError) as exc:
        logger.warning("map_session_rejected", extra={"component": "api", "reason": str(exc)})
        collector.observe_session(SESSION_REJECTED)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(exc))
        return

    collector.observe_session(SESSION_OPENED)
    try:
        await websocket.send_json({"type": "initial_view", "data": description.model_dump()})
        while True:
            try:
                message = await _receive_message(websocket)
            except ValueError:
                await websocket.send_json(
                    {"type": "error", **error_response("INVALID_MESSAGE", "message must be JSON")}
                )
                continue
            if isinstance(message, dict) and message.get("type") == "map_ready":
                view.on_map_ready()
                continue
            await websocket.send_json(
                {"type": "error", **error_response("UNKNOWN_MESSAGE", "expected a map_ready message")}
            )
    except WebSocketDisconnect:
        pass
    finally:
        view.close()
        collector.observe_session(SESSION_CLOSED)

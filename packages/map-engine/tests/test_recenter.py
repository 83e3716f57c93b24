from __future__ import annotations

import asyncio

import pytest

from map_engine.models import CameraCommand, GeoPoint
from map_engine.recenter import RecenterScheduler

CENTER = GeoPoint(latitude=49.271412, longitude=-122.9725585)


class RecordingMapHandle:
    def __init__(self) -> None:
        self.commands: list[CameraCommand] = []

    async def animate_camera(self, command: CameraCommand) -> None:
        self.commands.append(command)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class BlockingSleep:
    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def __call__(self, _seconds: float) -> None:
        self.started.set()
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_map_ready_recenters_after_delay() -> None:
    handle = RecordingMapHandle()
    sleep = RecordingSleep()
    scheduler = RecenterScheduler(handle, CENTER, sleep_fn=sleep)

    await scheduler.on_map_ready()

    assert sleep.delays == [0.5]
    assert handle.commands == [CameraCommand(center=CENTER, duration_ms=150)]
    assert scheduler.pending is False


@pytest.mark.asyncio
async def test_custom_delay_and_duration() -> None:
    handle = RecordingMapHandle()
    sleep = RecordingSleep()
    scheduler = RecenterScheduler(handle, CENTER, delay_ms=1200, duration_ms=300, sleep_fn=sleep)

    await scheduler.on_map_ready()

    assert sleep.delays == [1.2]
    assert handle.commands[0].duration_ms == 300


@pytest.mark.asyncio
async def test_cancel_before_fire_drops_command() -> None:
    handle = RecordingMapHandle()
    sleep = BlockingSleep()
    scheduler = RecenterScheduler(handle, CENTER, sleep_fn=sleep)

    task = scheduler.on_map_ready()
    await sleep.started.wait()
    assert scheduler.pending is True

    assert scheduler.cancel() is True
    with pytest.raises(asyncio.CancelledError):
        await task

    assert handle.commands == []
    assert scheduler.pending is False


@pytest.mark.asyncio
async def test_cancel_without_pending_is_noop() -> None:
    handle = RecordingMapHandle()
    scheduler = RecenterScheduler(handle, CENTER, sleep_fn=RecordingSleep())

    assert scheduler.cancel() is False
    await scheduler.on_map_ready()
    assert scheduler.cancel() is False
    assert len(handle.commands) == 1


@pytest.mark.asyncio
async def test_second_map_ready_replaces_pending_command() -> None:
    handle = RecordingMapHandle()
    sleep = BlockingSleep()
    scheduler = RecenterScheduler(handle, CENTER, sleep_fn=sleep)

    first = scheduler.on_map_ready()
    await sleep.started.wait()
    second = scheduler.on_map_ready()

    with pytest.raises(asyncio.CancelledError):
        await first
    assert first.cancelled()
    assert not second.done()
    scheduler.cancel()
    with pytest.raises(asyncio.CancelledError):
        await second


@pytest.mark.asyncio
async def test_closed_scheduler_rejects_map_ready() -> None:
    handle = RecordingMapHandle()
    sleep = BlockingSleep()
    scheduler = RecenterScheduler(handle, CENTER, sleep_fn=sleep)

    task = scheduler.on_map_ready()
    await sleep.started.wait()
    scheduler.close()

    with pytest.raises(asyncio.CancelledError):
        await task
    with pytest.raises(RuntimeError):
        scheduler.on_map_ready()
    assert handle.commands == []


def test_negative_delay_raises() -> None:
    with pytest.raises(ValueError):
        RecenterScheduler(RecordingMapHandle(), CENTER, delay_ms=-1)

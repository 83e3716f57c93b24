from __future__ import annotations

import math
from typing import Protocol


class DisplayMetricsError(Exception):
    """Raised when the display cannot report a usable aspect ratio."""


class AspectRatioProvider(Protocol):
    def aspect_ratio(self) -> float: ...


class ScreenDimensions(AspectRatioProvider):
    def __init__(self, width: float | None, height: float | None) -> None:
        self._width = width
        self._height = height

    def aspect_ratio(self) -> float:
        width = _require_dimension("width", self._width)
        height = _require_dimension("height", self._height)
        return width / height


class FixedAspectRatio(AspectRatioProvider):
    def __init__(self, value: float) -> None:
        self._value = value

    def aspect_ratio(self) -> float:
        return self._value


def _require_dimension(name: str, value: float | None) -> float:
    if value is None:
        raise DisplayMetricsError(f"screen {name} is unavailable")
    if not math.isfinite(value) or value <= 0:
        raise DisplayMetricsError(f"screen {name} must be > 0")
    return float(value)

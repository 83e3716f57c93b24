from __future__ import annotations

from dataclasses import dataclass

from map_engine.display import DisplayMetricsError


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int


def map_engine_error(exc: DisplayMetricsError | ValueError) -> ApiError:
    if isinstance(exc, DisplayMetricsError):
        return ApiError("DISPLAY_METRICS_UNAVAILABLE", str(exc), 422)
    return ApiError("VALIDATION_ERROR", str(exc), 422)

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    MAP_CENTER_LATITUDE: float = 49.271412
    MAP_CENTER_LONGITUDE: float = -122.9725585
    MAP_RADIUS_KM: float = 1.0
    RECENTER_DELAY_MS: int = 500
    CAMERA_ANIMATION_MS: int = 150
    MAP_PROVIDER: str = "google"
    EVENTS_PATH: str | None = None


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)

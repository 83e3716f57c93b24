"""Common runtime devkit for service infrastructure concerns."""

from devkit.config import ServiceSettings, load_settings
from devkit.observability import configure_otel, configure_probe_access_log_filter

__all__ = [
    "ServiceSettings",
    "configure_otel",
    "configure_probe_access_log_filter",
    "load_settings",
]

"""Public vscroll API contracts."""

from vscroll.api.logging import JsonFormatter, LoggingConfig
from vscroll.api.virtualization import (
    DEFAULTS,
    EMPTY_RANGE,
    INITIAL_SNAPSHOT,
    ItemPosition,
    RangeCalculatorPort,
    TelemetryObserver,
    TelemetrySamplerPort,
    TelemetrySnapshot,
    VirtualizationDefaults,
    VirtualizationOptions,
    VisibleRange,
)

__all__ = [
    "DEFAULTS",
    "EMPTY_RANGE",
    "INITIAL_SNAPSHOT",
    "ItemPosition",
    "JsonFormatter",
    "LoggingConfig",
    "RangeCalculatorPort",
    "TelemetryObserver",
    "TelemetrySamplerPort",
    "TelemetrySnapshot",
    "VirtualizationDefaults",
    "VirtualizationOptions",
    "VisibleRange",
]

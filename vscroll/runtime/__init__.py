"""Runtime modules: frame scheduling, telemetry sampling and ambient setup."""

from vscroll.runtime.config import (
    VirtualizationConfig,
    get_virtualization_config,
    initialize_virtualization_config,
    load_virtualization_config,
)
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.logging import configure_logging, get_logger, setup_logging
from vscroll.runtime.memory_probe import ProcessMemoryProbe
from vscroll.runtime.node_count import count_nodes
from vscroll.runtime.render_timing import MeasureEntry, PerformanceTimeline
from vscroll.runtime.telemetry import SamplerState, TelemetryCapabilities, TelemetrySampler

__all__ = [
    "FrameScheduler",
    "MeasureEntry",
    "PerformanceTimeline",
    "ProcessMemoryProbe",
    "SamplerState",
    "TelemetryCapabilities",
    "TelemetrySampler",
    "VirtualizationConfig",
    "configure_logging",
    "count_nodes",
    "get_logger",
    "get_virtualization_config",
    "initialize_virtualization_config",
    "load_virtualization_config",
    "setup_logging",
]

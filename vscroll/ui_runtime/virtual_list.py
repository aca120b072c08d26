"""Framework-neutral glue composing the range calculator and telemetry sampler."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from vscroll.api.virtualization import (
    EMPTY_RANGE,
    INITIAL_SNAPSHOT,
    ItemPosition,
    RangeCalculatorPort,
    TelemetrySamplerPort,
    TelemetrySnapshot,
    VirtualizationOptions,
    VisibleRange,
)
from vscroll.runtime.config import VirtualizationConfig, get_virtualization_config
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.telemetry import TelemetrySampler
from vscroll.ui_runtime.list_viewport import visible_items
from vscroll.ui_runtime.range_calculator import RangeCalculator

_LOG = logging.getLogger("vscroll.controller")

SamplerFactory = Callable[[FrameScheduler], TelemetrySamplerPort]

T = TypeVar("T")


def _default_sampler_factory(scheduler: FrameScheduler) -> TelemetrySamplerPort:
    return TelemetrySampler(scheduler=scheduler)


def options_from_config(
    viewport_height: float,
    *,
    config: VirtualizationConfig | None = None,
    calculator: RangeCalculatorPort | None = None,
) -> VirtualizationOptions:
    """Build consumer options from the active environment config."""
    resolved = config if config is not None else get_virtualization_config()
    return VirtualizationOptions(
        viewport_height=viewport_height,
        overscan=resolved.overscan,
        calculator=calculator,
        enable_telemetry=resolved.enable_telemetry,
    )


class VirtualListController:
    """Holds scroll state for one list and answers what to render.

    Scroll notifications are coalesced to one recomputation per frame: a new
    notification cancels the frame requested by the previous one.
    """

    def __init__(
        self,
        item_count: int,
        item_height: float,
        options: VirtualizationOptions,
        *,
        scheduler: FrameScheduler,
        sampler_factory: SamplerFactory = _default_sampler_factory,
    ) -> None:
        self._item_count = item_count
        self._item_height = item_height
        self._viewport_height = options.viewport_height
        self._overscan = options.overscan
        self._calculator: RangeCalculatorPort = options.calculator or RangeCalculator()
        self._scheduler = scheduler
        self._scroll_offset = 0.0
        self._scroll_frame: int | None = None
        self._range_key: tuple[float, float, float, float, float] | None = None
        self._range = EMPTY_RANGE
        self._extent_key: tuple[float, float] | None = None
        self._extent = 0.0
        self._metrics = INITIAL_SNAPSHOT
        self._sampler: TelemetrySamplerPort | None = None
        if options.enable_telemetry:
            self._sampler = sampler_factory(scheduler)
            self._sampler.start(self._on_metrics)

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def metrics(self) -> TelemetrySnapshot:
        return self._metrics

    @property
    def sampler(self) -> TelemetrySamplerPort | None:
        return self._sampler

    @property
    def visible_range(self) -> VisibleRange:
        key = (
            self._scroll_offset,
            self._viewport_height,
            self._item_count,
            self._item_height,
            self._overscan,
        )
        if key != self._range_key:
            self._range = self._calculator.compute_visible_range(*key)
            self._range_key = key
        return self._range

    @property
    def total_height(self) -> float:
        key = (self._item_count, self._item_height)
        if key != self._extent_key:
            self._extent = self._calculator.compute_total_extent(*key)
            self._extent_key = key
        return self._extent

    def item_position(self, index: int) -> ItemPosition:
        return self._calculator.compute_item_position(index, self._item_height)

    def visible_items(self, items: Sequence[T]) -> list[T]:
        return visible_items(items, self.visible_range)

    def on_scroll(self, offset: float) -> None:
        """Record a scroll notification; applied on the next frame."""
        if self._scroll_frame is not None:
            self._scheduler.cancel_frame(self._scroll_frame)
        self._scroll_frame = self._scheduler.request_frame(lambda _ts: self._apply_scroll(offset))

    def set_item_count(self, item_count: int) -> None:
        self._item_count = item_count

    def set_item_height(self, item_height: float) -> None:
        self._item_height = item_height

    def set_viewport_height(self, viewport_height: float) -> None:
        self._viewport_height = viewport_height

    def attach_container(self, container: object | None) -> None:
        """Point node counting at a new rendered subtree root."""
        if self._sampler is None:
            return
        self._sampler.stop()
        self._sampler.start(self._on_metrics, container)
        _LOG.debug("controller_container_attached attached=%s", container is not None)

    def close(self) -> None:
        if self._scroll_frame is not None:
            self._scheduler.cancel_frame(self._scroll_frame)
            self._scroll_frame = None
        if self._sampler is not None:
            self._sampler.stop()

    def _apply_scroll(self, offset: float) -> None:
        self._scroll_frame = None
        self._scroll_offset = offset

    def _on_metrics(self, snapshot: TelemetrySnapshot) -> None:
        self._metrics = snapshot

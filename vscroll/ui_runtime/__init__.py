"""List virtualization arithmetic and consumer glue."""

from vscroll.ui_runtime.list_viewport import (
    clamp_scroll_offset,
    scroll_offset_for_index,
    visible_items,
)
from vscroll.ui_runtime.range_calculator import (
    RangeCalculator,
    compute_item_position,
    compute_total_extent,
    compute_visible_range,
)
from vscroll.ui_runtime.virtual_list import VirtualListController, options_from_config

__all__ = [
    "RangeCalculator",
    "VirtualListController",
    "clamp_scroll_offset",
    "compute_item_position",
    "compute_total_extent",
    "compute_visible_range",
    "options_from_config",
    "scroll_offset_for_index",
    "visible_items",
]

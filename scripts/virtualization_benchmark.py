from __future__ import annotations

import argparse
from time import perf_counter

from vscroll.api.virtualization import TelemetrySnapshot, VirtualizationOptions
from vscroll.diagnostics.json_codec import dumps_text
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.logging import setup_logging
from vscroll.ui_runtime.virtual_list import VirtualListController


class _Row:
    """Stand-in for one materialized row node."""

    children: tuple[object, ...] = ()


class _Surface:
    """Rendered subtree root holding one node per materialized row."""

    def __init__(self) -> None:
        self.children: list[_Row] = []

    def render(self, count: int) -> None:
        self.children = [_Row() for _ in range(count)]


def _bench_scroll(
    *,
    item_count: int,
    item_height: float,
    viewport_height: float,
    overscan: int,
    frames: int,
    step_px: float,
) -> tuple[int, float, TelemetrySnapshot]:
    scheduler = FrameScheduler()
    controller = VirtualListController(
        item_count,
        item_height,
        VirtualizationOptions(
            viewport_height=viewport_height,
            overscan=overscan,
            enable_telemetry=True,
        ),
        scheduler=scheduler,
    )
    surface = _Surface()
    controller.attach_container(surface)
    max_rendered = 0
    compute_s = 0.0
    offset = 0.0
    for _ in range(frames):
        offset += step_px
        controller.on_scroll(offset)
        scheduler.advance(1000.0 / 60.0)
        start = perf_counter()
        rendered = controller.visible_range.count
        compute_s += perf_counter() - start
        surface.render(rendered)
        max_rendered = max(max_rendered, rendered)
    scheduler.advance(1000.0 / 60.0)
    metrics = controller.metrics
    controller.close()
    return max_rendered, (compute_s * 1000.0) / max(1, frames), metrics


def main() -> int:
    parser = argparse.ArgumentParser(description="Headless list virtualization benchmark.")
    parser.add_argument("--items", type=int, default=100_000)
    parser.add_argument("--item-height", type=float, default=50.0)
    parser.add_argument("--viewport-height", type=float, default=600.0)
    parser.add_argument("--overscan", type=int, default=3)
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--step-px", type=float, default=120.0)
    parser.add_argument("--json", action="store_true", help="Emit one JSON document instead of key=value lines.")
    args = parser.parse_args()

    setup_logging()
    max_rendered, ms_per_frame, metrics = _bench_scroll(
        item_count=args.items,
        item_height=args.item_height,
        viewport_height=args.viewport_height,
        overscan=args.overscan,
        frames=args.frames,
        step_px=args.step_px,
    )

    if args.json:
        payload = {
            "items": args.items,
            "max_rendered_rows": max_rendered,
            "range_ms_per_frame": ms_per_frame,
            "telemetry": metrics.as_dict(),
        }
        print(dumps_text(payload, pretty=True, sort_keys=True))
        return 0

    print(f"items={args.items}")
    print(f"max_rendered_rows={max_rendered}")
    print(f"range_ms_per_frame={ms_per_frame:.6f}")
    print(f"fps={metrics.fps}")
    print(f"memory_usage_mb={metrics.memory_usage_mb:.2f}")
    print(f"dom_node_count={metrics.dom_node_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Best-effort element counting for an opaque rendered-subtree handle."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger("vscroll.telemetry")


def _children_of(node: object) -> Iterable[object]:
    children = getattr(node, "children", None)
    if children is None:
        return ()
    if callable(children):
        children = children()
    if children is None:
        return ()
    return children


def count_nodes(container: object | None) -> int:
    """Count the container and every element below it; 0 when unknown."""
    if container is None:
        return 0
    try:
        descendant_count = getattr(container, "descendant_count", None)
        if callable(descendant_count):
            return max(0, int(descendant_count())) + 1
        total = 0
        seen: set[int] = set()
        stack: list[object] = [container]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            total += 1
            stack.extend(_children_of(node))
        return total
    except RECOVERABLE_RUNTIME_ERRORS:
        log_recoverable(_LOG, "telemetry_node_count_failed")
        return 0

"""Exception policy for optional platform facilities."""

from __future__ import annotations

import logging
from typing import TypeAlias

# Bounded set tolerated around memory, node-count and timing probes.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Record a tolerated exception without propagating it."""
    logger.log(level, message, exc_info=True)

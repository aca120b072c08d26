"""Process memory probing for telemetry snapshots."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from vscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger("vscroll.memory")

_BYTES_PER_MB = 1024.0 * 1024.0


@dataclass(slots=True)
class ProcessMemoryProbe:
    """Resident memory reader with a provider resolved once and cached."""

    provider: str | None = None
    psutil_mod: Any | None = None
    resource_mod: Any | None = None

    def available(self) -> bool:
        self._resolve_provider()
        return self.provider not in (None, "none")

    def read_mb(self) -> float | None:
        self._resolve_provider()

        if self.provider == "psutil" and self.psutil_mod is not None:
            try:
                process = self.psutil_mod.Process(os.getpid())
                return float(process.memory_info().rss) / _BYTES_PER_MB
            except RECOVERABLE_RUNTIME_ERRORS:
                self.psutil_mod = None
                self.provider = None
                log_recoverable(_LOG, "memory_psutil_probe_failed")
                self._resolve_provider(skip_psutil=True)

        if self.provider == "resource" and self.resource_mod is not None:
            try:
                getrusage = getattr(self.resource_mod, "getrusage", None)
                rusage_self = getattr(self.resource_mod, "RUSAGE_SELF", None)
                if not callable(getrusage) or rusage_self is None:
                    return None
                rss_raw = getattr(getrusage(rusage_self), "ru_maxrss", None)
                if not isinstance(rss_raw, (int, float)):
                    return None
                rss = float(rss_raw)
                # Linux reports KB, macOS reports bytes.
                if rss > _BYTES_PER_MB * 8:
                    return rss / _BYTES_PER_MB
                return rss / 1024.0
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "memory_resource_probe_failed")
                return None

        return None

    def _resolve_provider(self, *, skip_psutil: bool = False) -> None:
        if self.provider is not None:
            return
        if not skip_psutil:
            try:
                self.psutil_mod = import_module("psutil")
                self.provider = "psutil"
                return
            except RECOVERABLE_RUNTIME_ERRORS:
                self.psutil_mod = None
                log_recoverable(_LOG, "memory_psutil_unavailable")
        try:
            self.resource_mod = import_module("resource")
            self.provider = "resource"
        except RECOVERABLE_RUNTIME_ERRORS:
            self.resource_mod = None
            log_recoverable(_LOG, "memory_resource_unavailable")
            self.provider = "none"

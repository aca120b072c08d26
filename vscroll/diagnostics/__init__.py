"""Structured diagnostics export helpers."""

from vscroll.diagnostics.json_codec import dumps_bytes, dumps_text

__all__ = ["dumps_bytes", "dumps_text"]

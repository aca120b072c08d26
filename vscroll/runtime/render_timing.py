"""In-process performance timeline with named marks, measures and observers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter


@dataclass(frozen=True, slots=True)
class MeasureEntry:
    """Named duration between two marks, in milliseconds."""

    name: str
    start_ms: float
    duration_ms: float


MeasureObserver = Callable[[MeasureEntry], None]


class PerformanceTimeline:
    """Mark/measure facility for out-of-band render timing."""

    def __init__(self, *, time_source: Callable[[], float] | None = None) -> None:
        self._time_source = time_source or perf_counter
        self._marks: dict[str, float] = {}
        self._measures: dict[str, list[MeasureEntry]] = {}
        self._observers: dict[int, MeasureObserver] = {}
        self._next_observer_id = 1

    def now_ms(self) -> float:
        return float(self._time_source()) * 1000.0

    def mark(self, name: str) -> float:
        timestamp = self.now_ms()
        self._marks[name] = timestamp
        return timestamp

    def measure(self, name: str, start_mark: str, end_mark: str) -> MeasureEntry:
        """Record the duration between two marks; unknown marks raise `KeyError`."""
        start_ms = self._marks[start_mark]
        end_ms = self._marks[end_mark]
        entry = MeasureEntry(name=name, start_ms=start_ms, duration_ms=max(0.0, end_ms - start_ms))
        self._measures.setdefault(name, []).append(entry)
        for callback in tuple(self._observers.values()):
            callback(entry)
        return entry

    def entries_by_name(self, name: str) -> list[MeasureEntry]:
        return list(self._measures.get(name, ()))

    def clear_marks(self, *names: str) -> None:
        if not names:
            self._marks.clear()
            return
        for name in names:
            self._marks.pop(name, None)

    def clear_measures(self, name: str | None = None) -> None:
        if name is None:
            self._measures.clear()
            return
        self._measures.pop(name, None)

    def observe(self, callback: MeasureObserver) -> int:
        token = self._next_observer_id
        self._next_observer_id += 1
        self._observers[token] = callback
        return token

    def unobserve(self, token: int) -> None:
        self._observers.pop(token, None)

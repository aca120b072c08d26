from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from vscroll.runtime.config import VirtualizationConfig, set_virtualization_config
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.render_timing import PerformanceTimeline


@dataclass(slots=True)
class FakeNode:
    name: str = "div"
    children: list["FakeNode"] = field(default_factory=list)

    def add(self, *nodes: "FakeNode") -> "FakeNode":
        self.children.extend(nodes)
        return self


class FakeMemoryProbe:
    def __init__(self, value_mb: float | None = 42.123, *, available: bool = True) -> None:
        self.value_mb = value_mb
        self.is_available = available
        self.read_count = 0

    def available(self) -> bool:
        return self.is_available

    def read_mb(self) -> float | None:
        self.read_count += 1
        return self.value_mb


class ExplodingMemoryProbe:
    def available(self) -> bool:
        return True

    def read_mb(self) -> float | None:
        raise OSError("memory counters unavailable")


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def virtualization_config():
    config = VirtualizationConfig(
        overscan=3,
        enable_telemetry=False,
        telemetry_window_ms=1000.0,
        log_level="INFO",
        log_format="text",
        log_file=None,
    )
    set_virtualization_config(config)
    return config


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler(time_source=FakeClock(100.0))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1.0)


@pytest.fixture
def timeline(clock: FakeClock) -> PerformanceTimeline:
    return PerformanceTimeline(time_source=clock)


@pytest.fixture
def memory_probe() -> FakeMemoryProbe:
    return FakeMemoryProbe()


@pytest.fixture
def sample_tree() -> FakeNode:
    # container + 2 divs + 3 spans
    return FakeNode().add(
        FakeNode().add(FakeNode("span"), FakeNode("span")),
        FakeNode().add(FakeNode("span")),
    )


@pytest.fixture
def node_factory() -> type[FakeNode]:
    return FakeNode


@pytest.fixture
def exploding_memory_probe() -> ExplodingMemoryProbe:
    return ExplodingMemoryProbe()

from __future__ import annotations

import types

from vscroll.runtime import memory_probe as memory_probe_module
from vscroll.runtime.memory_probe import ProcessMemoryProbe


def test_psutil_provider_reports_rss_in_megabytes() -> None:
    fake_psutil = types.SimpleNamespace(
        Process=lambda _pid: types.SimpleNamespace(
            memory_info=lambda: types.SimpleNamespace(rss=64 * 1024 * 1024)
        )
    )
    probe = ProcessMemoryProbe(provider="psutil", psutil_mod=fake_psutil)
    assert probe.available()
    assert probe.read_mb() == 64.0


def test_psutil_failure_falls_back_to_resource(monkeypatch) -> None:
    def broken_process(_pid: int) -> object:
        raise OSError("access denied")

    fake_resource = types.SimpleNamespace(
        RUSAGE_SELF=0,
        getrusage=lambda _who: types.SimpleNamespace(ru_maxrss=2048),
    )
    monkeypatch.setattr(memory_probe_module, "import_module", lambda name: fake_resource)
    probe = ProcessMemoryProbe(
        provider="psutil",
        psutil_mod=types.SimpleNamespace(Process=broken_process),
    )
    assert probe.read_mb() == 2.0
    assert probe.provider == "resource"


def test_no_provider_reports_none(monkeypatch) -> None:
    def missing(name: str) -> object:
        raise ImportError(name)

    monkeypatch.setattr(memory_probe_module, "import_module", missing)
    probe = ProcessMemoryProbe()
    assert probe.read_mb() is None
    assert not probe.available()
    assert probe.provider == "none"


def test_real_process_probe_is_finite_and_non_negative() -> None:
    probe = ProcessMemoryProbe()
    value = probe.read_mb()
    assert value is None or value >= 0.0

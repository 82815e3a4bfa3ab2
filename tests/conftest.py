"""Shared fixtures and fake data sources for coreprobe tests."""

from pathlib import Path

import pytest

from coreprobe.errors import ProcessGoneError, SourceUnavailableError
from coreprobe.sources import (
    PlatformSources,
    PrimaryFrequencySource,
    ProcessListSource,
    ProcessNameSource,
    SecondaryFrequencySource,
)


class FakePrimary(PrimaryFrequencySource):
    def __init__(self, readings=None, error=None):
        self.readings = readings if readings is not None else {}
        self.error = error
        self.calls = 0

    def read_core_frequencies(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.readings)


class FakeSecondary(SecondaryFrequencySource):
    def __init__(self, readings=None, error=None):
        self.readings = readings if readings is not None else {}
        self.error = error
        self.calls = 0

    def read_core_frequencies(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.readings)


class FakeProcessList(ProcessListSource):
    def __init__(self, pids=None, error=None):
        self.pids = pids if pids is not None else []
        self.error = error

    def list_pids(self):
        if self.error is not None:
            raise self.error
        return list(self.pids)


class FakeNameSource(ProcessNameSource):
    """names/statuses map pid -> value; pids in gone raise ProcessGoneError."""

    def __init__(self, names=None, statuses=None, gone=()):
        self.names = names or {}
        self.statuses = statuses or {}
        self.gone = set(gone)

    def read_name(self, pid):
        if pid in self.gone:
            raise ProcessGoneError(pid)
        return self.names.get(pid)

    def read_status(self, pid):
        if pid in self.gone:
            raise ProcessGoneError(pid)
        return self.statuses.get(pid)


def make_sources(
    primary=None,
    secondary=None,
    process_list=None,
    process_name=None,
) -> PlatformSources:
    return PlatformSources(
        primary_frequency=primary or FakePrimary(),
        secondary_frequency=secondary or FakeSecondary(),
        process_list=process_list or FakeProcessList(),
        process_name=process_name or FakeNameSource(),
    )


@pytest.fixture
def fake_sources() -> PlatformSources:
    """A small, fully populated fake source set."""
    return make_sources(
        primary=FakePrimary({0: 2400.0, 1: 1800.0}),
        secondary=FakeSecondary({0: 1000.0}),
        process_list=FakeProcessList([1, 42, 7]),
        process_name=FakeNameSource(names={1: "init\n", 42: "bash\n", 7: "kthreadd\n"}),
    )


@pytest.fixture
def unavailable_sources() -> PlatformSources:
    """A source set where every source is missing."""
    return make_sources(
        primary=FakePrimary(error=SourceUnavailableError("primary")),
        secondary=FakeSecondary(error=SourceUnavailableError("secondary")),
        process_list=FakeProcessList(error=SourceUnavailableError("pids")),
    )


@pytest.fixture
def sysfs_tree(tmp_path: Path):
    """Build a fake /sys/devices/system/cpu tree: {core_id: khz text or None}."""

    def build(cores: dict[int, str | None], extra_dirs=()) -> Path:
        root = tmp_path / "sys" / "cpu"
        root.mkdir(parents=True)
        for name in extra_dirs:
            (root / name).mkdir()
        for core_id, khz in cores.items():
            core_dir = root / f"cpu{core_id}"
            core_dir.mkdir()
            if khz is not None:
                (core_dir / "cpufreq").mkdir()
                (core_dir / "cpufreq" / "scaling_cur_freq").write_text(khz)
        return root

    return build


@pytest.fixture
def proc_tree(tmp_path: Path):
    """Build a fake /proc tree: {pid: {"comm": text, "status": text}}."""

    def build(processes: dict[int, dict[str, str]], extra_entries=()) -> Path:
        root = tmp_path / "proc"
        root.mkdir()
        for name in extra_entries:
            (root / name).mkdir()
        for pid, files in processes.items():
            pid_dir = root / str(pid)
            pid_dir.mkdir()
            for filename, text in files.items():
                (pid_dir / filename).write_text(text)
        return root

    return build

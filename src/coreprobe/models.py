"""Data models for coreprobe."""

from dataclasses import dataclass

# Marks a core slot whose frequency could not be measured.
UNMEASURED = None

CoreFrequencySample = list[float | None]


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable (pid, display name) pair for one live process."""

    pid: int
    name: str


ProcessSnapshot = list[ProcessRecord]


@dataclass(slots=True)
class ProbeSnapshot:
    """One sampling cycle: per-core frequencies plus the process table."""

    frequencies: CoreFrequencySample
    processes: ProcessSnapshot
    timestamp: float

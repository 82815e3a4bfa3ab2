"""Platform data source interfaces and the factory that picks them."""

import logging
import platform
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from coreprobe.config import ProbeConfig

logger = logging.getLogger(__name__)


class PrimaryFrequencySource(ABC):
    """Per-core live clock interface."""

    @abstractmethod
    def read_core_frequencies(self) -> dict[int, float | None]:
        """
        Read the current clock of every logical core the OS exposes.

        Returns:
            Mapping of core id to MHz. Cores that were enumerated but could
            not be read map to None.

        Raises:
            SourceUnavailableError: If the interface does not exist.
        """


class SecondaryFrequencySource(ABC):
    """Global descriptor listing one frequency entry per logical core."""

    @abstractmethod
    def read_core_frequencies(self) -> dict[int, float]:
        """
        Parse the descriptor into a mapping of core id to MHz.

        Malformed entries are skipped rather than aborting the parse.

        Raises:
            SourceUnavailableError: If the descriptor cannot be read.
        """


class ProcessListSource(ABC):
    """Point-in-time listing of live process identifiers."""

    @abstractmethod
    def list_pids(self) -> list[int]:
        """
        Return the pids of all live processes.

        Raises:
            SourceUnavailableError: If processes cannot be enumerated.
        """


class ProcessNameSource(ABC):
    """Per-process name resolution."""

    @abstractmethod
    def read_name(self, pid: int) -> str | None:
        """
        Read the single-line process name, or None if it is unavailable.

        Raises:
            ProcessGoneError: If the process no longer exists.
        """

    @abstractmethod
    def read_status(self, pid: int) -> Mapping[str, str] | None:
        """
        Read the structured key-value status of a process.

        The mapping carries the process name under the "Name" key. Returns
        None if the status cannot be read.

        Raises:
            ProcessGoneError: If the process no longer exists.
        """


@dataclass(slots=True, frozen=True)
class PlatformSources:
    """The full capability set the samplers are written against."""

    primary_frequency: PrimaryFrequencySource
    secondary_frequency: SecondaryFrequencySource
    process_list: ProcessListSource
    process_name: ProcessNameSource


BACKENDS = ("auto", "procfs", "psutil")


def resolve_backend(backend: str, system: str | None = None) -> str:
    """Map "auto" to the concrete backend for the running system."""
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
    if backend != "auto":
        return backend

    system = system if system is not None else platform.system()
    return "procfs" if system == "Linux" else "psutil"


def get_platform_sources(
    config: ProbeConfig | None = None,
    system: str | None = None,
) -> PlatformSources:
    """
    Build the source set for the configured backend.

    Args:
        config: Probe configuration. Defaults to ProbeConfig().
        system: Override for platform.system().

    Returns:
        PlatformSources for the selected backend.

    Raises:
        ValueError: If the configured backend name is unknown.
    """
    config = config if config is not None else ProbeConfig()
    system = system if system is not None else platform.system()
    backend = resolve_backend(config.backend, system)
    logger.debug("Using %s data sources", backend)

    if backend == "procfs":
        from coreprobe.procfs import (
            CpuinfoFrequencySource,
            ProcfsNameSource,
            ProcfsProcessListSource,
            SysfsFrequencySource,
        )

        return PlatformSources(
            primary_frequency=SysfsFrequencySource(config.sysfs_cpu_root),
            secondary_frequency=CpuinfoFrequencySource(config.cpuinfo_path),
            process_list=ProcfsProcessListSource(config.proc_root),
            process_name=ProcfsNameSource(config.proc_root),
        )

    from coreprobe.portable import (
        PsutilAggregateFrequencySource,
        PsutilFrequencySource,
        PsutilNameSource,
        PsutilProcessListSource,
    )

    if system == "Windows":
        # psutil only reports one system-wide clock on Windows
        from coreprobe.windows import PowerInformationFrequencySource

        primary: PrimaryFrequencySource = PowerInformationFrequencySource()
    else:
        primary = PsutilFrequencySource()

    return PlatformSources(
        primary_frequency=primary,
        secondary_frequency=PsutilAggregateFrequencySource(),
        process_list=PsutilProcessListSource(),
        process_name=PsutilNameSource(),
    )

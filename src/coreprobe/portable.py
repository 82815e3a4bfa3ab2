"""Cross-platform data sources backed by psutil."""

import logging
import os

import psutil

from coreprobe.errors import ProcessGoneError, SourceUnavailableError
from coreprobe.sources import (
    PrimaryFrequencySource,
    ProcessListSource,
    ProcessNameSource,
    SecondaryFrequencySource,
)

logger = logging.getLogger(__name__)


def _cpu_freq(percpu: bool):
    try:
        return psutil.cpu_freq(percpu=percpu)
    except (AttributeError, NotImplementedError, OSError) as e:
        # cpu_freq is missing on some platforms and can fail on others
        raise SourceUnavailableError("psutil.cpu_freq", str(e)) from e


class PsutilFrequencySource(PrimaryFrequencySource):
    """psutil.cpu_freq(percpu=True).

    psutil reports entries by position, not by core id. The list is only
    accepted when it has one entry per logical CPU, which rejects the single
    system-wide entry some platforms return. On Linux with a CPU offline,
    psutil skips it in both counts, so later positions shift down; the
    procfs backend keys readings by the real cpuN id and is the default
    there.
    """

    def read_core_frequencies(self) -> dict[int, float | None]:
        per_core = _cpu_freq(percpu=True) or []
        logical = psutil.cpu_count(logical=True) or 0

        if not per_core:
            raise SourceUnavailableError("psutil.cpu_freq(percpu=True)", "no per-core data")
        if logical and len(per_core) != logical:
            raise SourceUnavailableError(
                "psutil.cpu_freq(percpu=True)",
                f"{len(per_core)} entries for {logical} logical CPUs",
            )

        return {
            core_id: freq.current if freq.current and freq.current > 0 else None
            for core_id, freq in enumerate(per_core)
        }


class PsutilAggregateFrequencySource(SecondaryFrequencySource):
    """System-wide psutil.cpu_freq() reported for every logical core."""

    def read_core_frequencies(self) -> dict[int, float]:
        freq = _cpu_freq(percpu=False)
        if freq is None:
            raise SourceUnavailableError("psutil.cpu_freq", "no data")

        logical = psutil.cpu_count(logical=True) or 1
        return {core_id: float(freq.current) for core_id in range(logical)}


class PsutilProcessListSource(ProcessListSource):
    """psutil.pids()."""

    def list_pids(self) -> list[int]:
        try:
            return [pid for pid in psutil.pids() if pid > 0]
        except (psutil.Error, OSError) as e:
            raise SourceUnavailableError("psutil.pids", str(e)) from e


class PsutilNameSource(ProcessNameSource):
    """Process.name(), falling back to the executable's basename."""

    def read_name(self, pid: int) -> str | None:
        try:
            return psutil.Process(pid).name()
        except psutil.ZombieProcess:
            return None
        except psutil.NoSuchProcess as e:
            raise ProcessGoneError(pid) from e
        except psutil.AccessDenied:
            return None

    def read_status(self, pid: int) -> dict[str, str] | None:
        try:
            exe = psutil.Process(pid).exe()
        except psutil.ZombieProcess:
            return None
        except psutil.NoSuchProcess as e:
            raise ProcessGoneError(pid) from e
        except (psutil.AccessDenied, OSError):
            return None

        if not exe:
            return None
        return {"Name": os.path.basename(exe)}

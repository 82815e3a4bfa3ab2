"""Linux data sources backed by sysfs and procfs."""

import logging
import re
from pathlib import Path

from coreprobe.errors import ProcessGoneError, SourceUnavailableError
from coreprobe.sources import (
    PrimaryFrequencySource,
    ProcessListSource,
    ProcessNameSource,
    SecondaryFrequencySource,
)

logger = logging.getLogger(__name__)

_CPU_DIR_RE = re.compile(r"^cpu([0-9]+)$")


class SysfsFrequencySource(PrimaryFrequencySource):
    """Per-core scaling_cur_freq files under /sys/devices/system/cpu.

    Values are stored in kHz and returned in MHz.
    """

    def __init__(self, sysfs_root: str = "/sys/devices/system/cpu") -> None:
        self._root = Path(sysfs_root)

    def _core_ids(self) -> list[int]:
        try:
            entries = list(self._root.iterdir())
        except OSError as e:
            raise SourceUnavailableError(str(self._root), e.strerror or str(e)) from e

        core_ids = []
        for entry in entries:
            match = _CPU_DIR_RE.match(entry.name)
            if match:
                core_ids.append(int(match.group(1)))
        return sorted(core_ids)

    def read_core_frequencies(self) -> dict[int, float | None]:
        readings: dict[int, float | None] = {}
        for core_id in self._core_ids():
            path = self._root / f"cpu{core_id}" / "cpufreq" / "scaling_cur_freq"
            try:
                khz = int(path.read_text().strip())
            except (OSError, ValueError):
                readings[core_id] = None
                continue
            readings[core_id] = khz / 1000.0 if khz > 0 else None
        return readings


class CpuinfoFrequencySource(SecondaryFrequencySource):
    """The "processor" / "cpu MHz" blocks of /proc/cpuinfo."""

    def __init__(self, path: str = "/proc/cpuinfo") -> None:
        self._path = Path(path)

    def read_core_frequencies(self) -> dict[int, float]:
        try:
            with self._path.open(errors="replace") as f:
                return parse_cpuinfo(f)
        except OSError as e:
            raise SourceUnavailableError(str(self._path), e.strerror or str(e)) from e


def parse_cpuinfo(lines) -> dict[int, float]:
    """
    Parse cpuinfo-formatted lines into a mapping of core id to MHz.

    A "cpu MHz" field belongs to the most recent "processor" header. Lines
    that fail to parse are skipped; a broken processor header clears the
    current core so its frequency is not attributed to the previous one.
    """
    frequencies: dict[int, float] = {}
    current: int | None = None

    for line in lines:
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()

        if key == "processor":
            try:
                current = int(value.strip())
            except ValueError:
                logger.debug("Skipping malformed cpuinfo line: %r", line)
                current = None
                continue
            if current < 0:
                current = None
        elif key == "cpu MHz" and current is not None:
            try:
                frequencies[current] = float(value.strip())
            except ValueError:
                logger.debug("Skipping malformed cpuinfo line: %r", line)

    return frequencies


class ProcfsProcessListSource(ProcessListSource):
    """Numeric directory entries of /proc."""

    def __init__(self, proc_root: str = "/proc") -> None:
        self._root = Path(proc_root)

    def list_pids(self) -> list[int]:
        try:
            names = [entry.name for entry in self._root.iterdir()]
        except OSError as e:
            raise SourceUnavailableError(str(self._root), e.strerror or str(e)) from e
        return [int(name) for name in names if name.isdigit() and int(name) > 0]


class ProcfsNameSource(ProcessNameSource):
    """/proc/<pid>/comm with /proc/<pid>/status as the structured fallback."""

    def __init__(self, proc_root: str = "/proc") -> None:
        self._root = Path(proc_root)

    def _read(self, pid: int, filename: str) -> str | None:
        process_dir = self._root / str(pid)
        try:
            return (process_dir / filename).read_text(errors="replace")
        except (FileNotFoundError, ProcessLookupError) as e:
            if not process_dir.exists():
                raise ProcessGoneError(pid) from e
            return None
        except OSError:
            # Permission denied or similar: the entry is unreadable
            return None

    def read_name(self, pid: int) -> str | None:
        text = self._read(pid, "comm")
        if text is None:
            return None
        return text.splitlines()[0] if text else ""

    def read_status(self, pid: int) -> dict[str, str] | None:
        text = self._read(pid, "status")
        if text is None:
            return None

        fields: dict[str, str] = {}
        for line in text.splitlines():
            key, sep, value = line.partition(":")
            if sep:
                fields[key.strip()] = value.strip()
        return fields

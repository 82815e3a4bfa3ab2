"""Frequency and process sampling for coreprobe."""

import logging
import math

from coreprobe.errors import ProcessGoneError, SourceUnavailableError
from coreprobe.models import UNMEASURED, CoreFrequencySample, ProcessRecord, ProcessSnapshot
from coreprobe.sources import (
    PlatformSources,
    PrimaryFrequencySource,
    ProcessListSource,
    ProcessNameSource,
    SecondaryFrequencySource,
    get_platform_sources,
)

logger = logging.getLogger(__name__)


def _to_slots(readings: dict[int, float | None]) -> CoreFrequencySample:
    """Lay readings out by core id; gaps and non-positive or non-finite values become UNMEASURED."""
    core_ids = [core_id for core_id in readings if core_id >= 0]
    if not core_ids:
        return []

    slots: CoreFrequencySample = [UNMEASURED] * (max(core_ids) + 1)
    for core_id in core_ids:
        mhz = readings[core_id]
        if mhz is not None and math.isfinite(mhz) and mhz > 0:
            slots[core_id] = float(mhz)
    return slots


class FrequencySampler:
    """
    Per-core clock frequency sampler.

    Tries the per-core live interface first and falls back to the aggregate
    descriptor when the live interface yields no positive reading. Never
    raises: an empty list means no frequency data is available.
    """

    def __init__(
        self,
        primary: PrimaryFrequencySource,
        secondary: SecondaryFrequencySource,
    ) -> None:
        self._primary = primary
        self._secondary = secondary

    @classmethod
    def from_sources(cls, sources: PlatformSources) -> "FrequencySampler":
        """Build a sampler from a platform source set."""
        return cls(sources.primary_frequency, sources.secondary_frequency)

    def sample(self) -> CoreFrequencySample:
        """Return one frequency reading (MHz) or UNMEASURED per logical core."""
        slots = self._sample_primary()
        if any(mhz is not UNMEASURED for mhz in slots):
            return slots

        logger.debug("Primary frequency tier gave no readings, trying secondary")
        return self._sample_secondary()

    def _sample_primary(self) -> CoreFrequencySample:
        try:
            readings = self._primary.read_core_frequencies()
        except (SourceUnavailableError, OSError, ValueError) as e:
            logger.debug("Primary frequency tier unavailable: %s", e)
            return []
        return _to_slots(readings)

    def _sample_secondary(self) -> CoreFrequencySample:
        try:
            readings = self._secondary.read_core_frequencies()
        except (SourceUnavailableError, OSError, ValueError) as e:
            logger.debug("Secondary frequency tier unavailable: %s", e)
            return []
        return _to_slots(readings)


class ProcessEnumerator:
    """
    Live process lister.

    Resolves each pid's name from the primary name source, falling back to
    the "Name" field of the structured status. Processes that exit mid-scan
    or have no resolvable name are skipped. Never raises.
    """

    def __init__(
        self,
        process_list: ProcessListSource,
        process_name: ProcessNameSource,
    ) -> None:
        self._process_list = process_list
        self._process_name = process_name

    @classmethod
    def from_sources(cls, sources: PlatformSources) -> "ProcessEnumerator":
        """Build an enumerator from a platform source set."""
        return cls(sources.process_list, sources.process_name)

    def enumerate(self) -> ProcessSnapshot:
        """Return the live processes sorted by ascending pid."""
        try:
            pids = self._process_list.list_pids()
        except (SourceUnavailableError, OSError) as e:
            logger.debug("Process listing unavailable: %s", e)
            return []

        records: dict[int, ProcessRecord] = {}
        for pid in pids:
            if pid in records:
                continue
            try:
                name = self._resolve_name(pid)
            except ProcessGoneError:
                # Exited after the listing was taken
                continue
            if name:
                records[pid] = ProcessRecord(pid=pid, name=name)

        return [records[pid] for pid in sorted(records)]

    def _resolve_name(self, pid: int) -> str | None:
        name = self._process_name.read_name(pid)
        if name and name.strip():
            return name.strip()

        status = self._process_name.read_status(pid)
        if not status:
            return None
        name = status.get("Name")
        return name.strip() if name else None


def create_samplers(
    sources: PlatformSources | None = None,
) -> tuple[FrequencySampler, ProcessEnumerator]:
    """Create both samplers over the same source set (platform default if None)."""
    sources = sources if sources is not None else get_platform_sources()
    return FrequencySampler.from_sources(sources), ProcessEnumerator.from_sources(sources)

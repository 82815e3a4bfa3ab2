"""Plain-terminal rendering: in-place redraw with ANSI cursor control."""

import sys
import time
from typing import TextIO

from coreprobe.models import UNMEASURED, CoreFrequencySample, ProcessSnapshot
from coreprobe.sampler import FrequencySampler, ProcessEnumerator

CURSOR_UP = "\x1b[{}A"
ERASE_BELOW = "\x1b[J"


def format_mhz(mhz: float | None) -> str:
    """Format a frequency in MHz as a human-readable string."""
    if mhz is UNMEASURED or mhz <= 0:
        return "N/A"
    if mhz >= 1000.0:
        return f"{mhz / 1000.0:.2f} GHz"
    return f"{mhz:.0f} MHz"


def trim_name(name: str, width: int = 50) -> str:
    """Truncate a process name to fit a column of the given width."""
    if width <= 0:
        return ""
    if len(name) <= width:
        return name
    if width == 1:
        return name[:1]
    return name[: width - 1] + "…"


def frame_lines(
    frequencies: CoreFrequencySample,
    processes: ProcessSnapshot,
    name_width: int = 50,
) -> list[str]:
    """Build the text lines of one frame."""
    lines = ["=== Current frequency per core ==="]
    if not frequencies:
        lines.append("Per-core frequency is not available on this system.")
    else:
        for core_id, mhz in enumerate(frequencies):
            lines.append(f"CPU {core_id}: {format_mhz(mhz)}")
    lines.append("")

    lines.append("=== Running processes (PID, Name) ===")
    for proc in processes:
        lines.append(f"{proc.pid}  {trim_name(proc.name, name_width)}")
    return lines


class PlainRenderer:
    """
    Writes frames to a stream and rewinds the cursor so each frame
    overwrites the previous one.
    """

    def __init__(self, stream: TextIO | None = None, rewind: bool = True) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._rewind = rewind

    def render(self, frequencies: CoreFrequencySample, processes: ProcessSnapshot) -> int:
        """Write one frame and return the number of lines written."""
        lines = frame_lines(frequencies, processes)
        if self._rewind:
            # Clear leftovers of a longer previous frame
            self._stream.write(ERASE_BELOW)
        self._stream.write("\n".join(lines) + "\n")
        if self._rewind:
            self._stream.write(CURSOR_UP.format(len(lines)) + "\r")
        self._stream.flush()
        return len(lines)


def run_plain(
    frequency_sampler: FrequencySampler,
    process_enumerator: ProcessEnumerator,
    renderer: PlainRenderer,
    interval: float = 1.0,
    iterations: int | None = None,
) -> None:
    """
    Sample, render and sleep until interrupted.

    Args:
        iterations: Stop after this many frames. None runs forever.
    """
    count = 0
    while iterations is None or count < iterations:
        renderer.render(frequency_sampler.sample(), process_enumerator.enumerate())
        count += 1
        if iterations is None or count < iterations:
            time.sleep(interval)

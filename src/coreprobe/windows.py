"""Windows per-core clock source backed by CallNtPowerInformation."""

import ctypes
import logging

import psutil

from coreprobe.errors import SourceUnavailableError
from coreprobe.sources import PrimaryFrequencySource

logger = logging.getLogger(__name__)

# POWER_INFORMATION_LEVEL.ProcessorInformation
PROCESSOR_INFORMATION = 11
STATUS_SUCCESS = 0


class ProcessorPowerInformation(ctypes.Structure):
    """PROCESSOR_POWER_INFORMATION; every field is a 32-bit ULONG."""

    _fields_ = [
        ("Number", ctypes.c_uint32),
        ("MaxMhz", ctypes.c_uint32),
        ("CurrentMhz", ctypes.c_uint32),
        ("MhzLimit", ctypes.c_uint32),
        ("MaxIdleState", ctypes.c_uint32),
        ("CurrentIdleState", ctypes.c_uint32),
    ]


def call_processor_power_information(count: int) -> list[ProcessorPowerInformation]:
    """
    Query PowrProf for one PROCESSOR_POWER_INFORMATION per logical CPU.

    Raises:
        SourceUnavailableError: If powrprof.dll cannot be loaded or the call
            returns a failure status.
    """
    try:
        powrprof = ctypes.WinDLL("powrprof.dll")
    except (AttributeError, OSError) as e:
        # WinDLL only exists on Windows
        raise SourceUnavailableError("powrprof.dll", str(e)) from e

    call = powrprof.CallNtPowerInformation
    call.argtypes = [
        ctypes.c_int,
        ctypes.c_void_p,
        ctypes.c_uint32,
        ctypes.c_void_p,
        ctypes.c_uint32,
    ]
    call.restype = ctypes.c_long

    buffer = (ProcessorPowerInformation * count)()
    status = call(PROCESSOR_INFORMATION, None, 0, ctypes.byref(buffer), ctypes.sizeof(buffer))
    if status != STATUS_SUCCESS:
        raise SourceUnavailableError("CallNtPowerInformation", f"status {status & 0xFFFFFFFF:#010x}")
    return list(buffer)


class PowerInformationFrequencySource(PrimaryFrequencySource):
    """CurrentMhz of each logical CPU from CallNtPowerInformation."""

    def read_core_frequencies(self) -> dict[int, float | None]:
        count = psutil.cpu_count(logical=True) or 0
        if count <= 0:
            raise SourceUnavailableError("psutil.cpu_count", "unknown logical CPU count")

        readings: dict[int, float | None] = {}
        for core_id, info in enumerate(call_processor_power_information(count)):
            readings[core_id] = float(info.CurrentMhz) if info.CurrentMhz > 0 else None
        return readings

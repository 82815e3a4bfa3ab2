"""Runtime configuration for coreprobe."""

import os
from dataclasses import dataclass

MIN_INTERVAL = 0.1


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def get_env(name: str, default, as_type: type = str):
    """Read an environment variable, converting it to as_type.

    Args:
        name: Environment variable name.
        default: Returned when the variable is unset or empty.
        as_type: Target type for the raw string.

    Raises:
        ConfigError: If the value cannot be converted.
    """
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return as_type(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(name, value, as_type) from e


@dataclass(slots=True)
class ProbeConfig:
    """Settings for the sampling sources, the display loop and logging."""

    interval: float = 1.0
    backend: str = "auto"
    sysfs_cpu_root: str = "/sys/devices/system/cpu"
    cpuinfo_path: str = "/proc/cpuinfo"
    proc_root: str = "/proc"
    log_level: str = "WARNING"
    log_file: str | None = None

    def __post_init__(self) -> None:
        self.interval = max(MIN_INTERVAL, self.interval)

    @classmethod
    def from_env(cls) -> "ProbeConfig":
        """Build a config from COREPROBE_* environment variables."""
        return cls(
            interval=get_env("COREPROBE_INTERVAL", 1.0, float),
            backend=get_env("COREPROBE_BACKEND", "auto"),
            log_level=get_env("COREPROBE_LOG_LEVEL", "WARNING"),
            log_file=get_env("COREPROBE_LOG_FILE", None),
        )

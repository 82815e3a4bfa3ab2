"""Tests for coreprobe configuration."""

import pytest

from coreprobe.config import MIN_INTERVAL, ConfigError, ProbeConfig, get_env


def test_defaults():
    """Defaults match a one-second Linux probe."""
    config = ProbeConfig()

    assert config.interval == 1.0
    assert config.backend == "auto"
    assert config.proc_root == "/proc"
    assert config.cpuinfo_path == "/proc/cpuinfo"
    assert config.sysfs_cpu_root == "/sys/devices/system/cpu"
    assert config.log_level == "WARNING"
    assert config.log_file is None


def test_interval_minimum():
    """Interval is clamped to the minimum."""
    assert ProbeConfig(interval=0.0).interval == MIN_INTERVAL


def test_from_env(monkeypatch):
    """COREPROBE_* variables override defaults."""
    monkeypatch.setenv("COREPROBE_INTERVAL", "2.5")
    monkeypatch.setenv("COREPROBE_BACKEND", "psutil")
    monkeypatch.setenv("COREPROBE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("COREPROBE_LOG_FILE", "/tmp/coreprobe.log")

    config = ProbeConfig.from_env()

    assert config.interval == 2.5
    assert config.backend == "psutil"
    assert config.log_level == "DEBUG"
    assert config.log_file == "/tmp/coreprobe.log"


def test_from_env_unset(monkeypatch):
    """Unset or empty variables fall back to defaults."""
    monkeypatch.delenv("COREPROBE_INTERVAL", raising=False)
    monkeypatch.setenv("COREPROBE_BACKEND", "")

    config = ProbeConfig.from_env()

    assert config.interval == 1.0
    assert config.backend == "auto"


def test_get_env_bad_value(monkeypatch):
    """Unconvertible values raise ConfigError."""
    monkeypatch.setenv("COREPROBE_INTERVAL", "soon")

    with pytest.raises(ConfigError, match="COREPROBE_INTERVAL"):
        get_env("COREPROBE_INTERVAL", 1.0, float)

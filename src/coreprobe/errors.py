"""Exceptions raised by coreprobe data sources."""


class ProbeError(Exception):
    """Base class for coreprobe errors."""


class SourceUnavailableError(ProbeError):
    """Raised when a whole data source is missing or unreadable."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        message = f"Source unavailable: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProcessGoneError(ProbeError):
    """Raised when a process exits between listing and name resolution."""

    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Process {pid} no longer exists")

"""Exception hierarchy for logpress."""

from __future__ import annotations

from pathlib import Path


class LogpressError(Exception):
    """Base class for all logpress errors."""


class ConfigError(LogpressError):
    """Invalid configuration, rejected before any traversal starts."""


class CompressionError(LogpressError):
    """A compressor failed to replace *path* with a compressed artifact."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ScanError(LogpressError):
    """Fatal condition that aborted a scan at *path*."""

    def __init__(self, path: Path | str, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause}")


class AlreadyRunningError(LogpressError):
    """Another logpress instance holds the PID file."""

    def __init__(self, pid_file: Path | str, pid: int | None) -> None:
        self.pid_file = Path(pid_file)
        self.pid = pid
        owner = f"as PID {pid} " if pid is not None else ""
        super().__init__(f"already running {owner}(lock: {self.pid_file})")

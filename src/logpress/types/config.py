"""Configuration types for logpress."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from logpress.core.sizes import normalize_min_size
from logpress.types.scan import ScanPolicy

DEFAULT_MIN_SIZE = 10
DEFAULT_MIN_AGE_DAYS = 7
DEFAULT_ALGORITHM = "gzip"
DEFAULT_LEVEL = 6
DEFAULT_NICE = 19


@dataclass(frozen=True, slots=True)
class Settings:
    """Fully resolved run configuration (CLI > env > TOML > defaults)."""

    directories: tuple[Path, ...]
    min_size: int = DEFAULT_MIN_SIZE  # raw value, see normalize_min_size
    min_age_days: int = DEFAULT_MIN_AGE_DAYS
    dry_run: bool = False
    algorithm: str = DEFAULT_ALGORITHM
    level: int = DEFAULT_LEVEL
    pid_file: Path | None = None
    log_file: str | None = None  # may contain strftime codes
    nice: int = DEFAULT_NICE

    def policy(self) -> ScanPolicy:
        return ScanPolicy(
            min_size_bytes=normalize_min_size(self.min_size),
            min_age_days=self.min_age_days,
            dry_run=self.dry_run,
        )

"""Scan policy, candidates, verdicts and the running statistics accumulator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from logpress.errors import ScanError


@dataclass(frozen=True, slots=True)
class ScanPolicy:
    """Resolved thresholds, fixed for the whole scan."""

    min_size_bytes: int = 0
    min_age_days: int = 0
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.min_size_bytes < 0:
            raise ValueError(f"min_size_bytes must be >= 0, got {self.min_size_bytes}")
        if self.min_age_days < 0:
            raise ValueError(f"min_age_days must be >= 0, got {self.min_age_days}")


@dataclass(frozen=True, slots=True)
class Candidate:
    """A regular ``.log`` file considered for compression."""

    path: Path
    size_bytes: int
    modified_at: float  # epoch seconds
    hard_link_count: int = 1


class Verdict(Enum):
    """Outcome of the eligibility check for a single candidate."""

    ELIGIBLE = "eligible"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_TOO_SMALL = "skipped_too_small"
    SKIPPED_HARD_LINKED = "skipped_hard_linked"
    SKIPPED_TOO_RECENT = "skipped_too_recent"


@dataclass(slots=True)
class ScanStats:
    """Byte counters shared by every level of a recursive scan.

    Updated after each processed file so that a scan aborted partway through
    still reports everything completed before the failure.
    """

    uncompressed_bytes: int = 0
    compressed_bytes: int = 0
    file_count: int = 0

    def record(self, uncompressed: int, compressed: int = 0) -> None:
        if uncompressed < 0 or compressed < 0:
            raise ValueError("size deltas must be non-negative")
        self.uncompressed_bytes += uncompressed
        self.compressed_bytes += compressed
        self.file_count += 1

    @property
    def saved_bytes(self) -> int:
        return self.uncompressed_bytes - self.compressed_bytes

    @property
    def ratio(self) -> float:
        """Compressed size as a fraction of the original (0.0 when nothing seen)."""
        if not self.uncompressed_bytes:
            return 0.0
        return self.compressed_bytes / self.uncompressed_bytes


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Terminal result of a scan: final or partial stats plus an optional error."""

    stats: ScanStats
    error: ScanError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class ScanSink(Protocol):
    """Receives progress, skip warnings and the final summary."""

    def info(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

"""Public types for logpress."""

from logpress.types.config import Settings
from logpress.types.scan import (
    Candidate,
    ScanOutcome,
    ScanPolicy,
    ScanSink,
    ScanStats,
    Verdict,
)

__all__ = [
    "Candidate",
    "ScanOutcome",
    "ScanPolicy",
    "ScanSink",
    "ScanStats",
    "Settings",
    "Verdict",
]

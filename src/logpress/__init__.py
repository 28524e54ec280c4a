"""logpress: compress stale, oversized log files in place.

Usage:
    from logpress import ScanPolicy, Scanner, create_compressor

    policy = ScanPolicy(min_size_bytes=10 * 1024, min_age_days=7)
    outcome = Scanner(policy, create_compressor("gzip")).scan(["/var/log/myapp"])
    print(outcome.stats.uncompressed_bytes, outcome.stats.compressed_bytes)
"""

__version__ = "0.3.0"

from logpress.compressors import Compressor, StreamCompressor, create_compressor  # noqa: E402
from logpress.core.eligibility import evaluate  # noqa: E402
from logpress.core.scanner import LoggingSink, Scanner, scan  # noqa: E402
from logpress.core.sizes import normalize_min_size  # noqa: E402
from logpress.errors import (  # noqa: E402
    AlreadyRunningError,
    CompressionError,
    ConfigError,
    LogpressError,
    ScanError,
)
from logpress.types import (  # noqa: E402
    Candidate,
    ScanOutcome,
    ScanPolicy,
    ScanSink,
    ScanStats,
    Settings,
    Verdict,
)

__all__ = [
    # Core API
    "Scanner",
    "scan",
    "evaluate",
    "normalize_min_size",
    "LoggingSink",
    # Compression
    "Compressor",
    "StreamCompressor",
    "create_compressor",
    # Types
    "Candidate",
    "ScanOutcome",
    "ScanPolicy",
    "ScanSink",
    "ScanStats",
    "Settings",
    "Verdict",
    # Errors
    "AlreadyRunningError",
    "CompressionError",
    "ConfigError",
    "LogpressError",
    "ScanError",
]

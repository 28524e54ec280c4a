"""Traversal engine: recursive scan, filtering and compression of log files."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from logpress.compressors.base import Compressor
from logpress.core.eligibility import describe, evaluate
from logpress.core.sizes import format_size
from logpress.errors import CompressionError, ScanError
from logpress.types.scan import Candidate, ScanOutcome, ScanPolicy, ScanSink, ScanStats, Verdict

LOG_SUFFIX = ".log"

logger = logging.getLogger(__name__)


class LoggingSink:
    """ScanSink forwarding to the ``logpress.scan`` logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logging.getLogger("logpress.scan")

    def info(self, message: str) -> None:
        self._log.info(message)

    def warning(self, message: str) -> None:
        self._log.warning(message)


class Scanner:
    """Walks root directories and compresses eligible ``.log`` files.

    Each directory is handled files-first: every matching file at that level
    is evaluated (and compressed when eligible) before descending into its
    subdirectories, one at a time, in name order. This is a depth-first walk
    with a per-node files/subdirectories ordering, not a breadth-first one.

    A single :class:`ScanStats` instance is threaded through the whole walk
    and updated after every file, so the stats in a failed
    :class:`ScanOutcome` reflect exactly the work completed before the error.

    Parameters
    ----------
    policy:
        Size/age thresholds and the dry-run flag.
    compressor:
        Replaces eligible files. Never called in dry-run mode.
    sink:
        Receives progress lines and skip warnings. Defaults to logging.
    stats:
        Accumulator to update; a fresh one is created when omitted.
    clock:
        Returns "now" as epoch seconds; sampled once per :meth:`scan`.
    """

    def __init__(
        self,
        policy: ScanPolicy,
        compressor: Compressor,
        *,
        sink: ScanSink | None = None,
        stats: ScanStats | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._policy = policy
        self._compressor = compressor
        self._sink = sink or LoggingSink()
        self._stats = stats if stats is not None else ScanStats()
        self._clock = clock
        self._now = clock()

    @property
    def stats(self) -> ScanStats:
        return self._stats

    @property
    def policy(self) -> ScanPolicy:
        return self._policy

    def scan(self, roots: Iterable[Path | str]) -> ScanOutcome:
        """Scan each root in order. Stops at the first fatal error."""
        self._now = self._clock()
        try:
            for root in roots:
                self.scan_directory(Path(root))
        except ScanError as exc:
            logger.error("Scan aborted: %s", exc)
            return ScanOutcome(stats=self._stats, error=exc)
        return ScanOutcome(stats=self._stats)

    def scan_directory(self, directory: Path) -> None:
        """Process *directory*'s log files, then recurse into its subdirectories.

        Raises :class:`ScanError` on any listing, stat or compression failure.
        """
        try:
            directory = directory.resolve(strict=True)
        except OSError as exc:
            raise ScanError(directory, exc) from exc
        if not directory.is_dir():
            raise ScanError(directory, "not a directory")

        logger.debug("Entering %s", directory)
        files, subdirs = self._list(directory)
        for path in files:
            self._process_file(path)
        for subdir in subdirs:
            self.scan_directory(subdir)

    # -- Internals ---------------------------------------------------------

    @staticmethod
    def _list(directory: Path) -> tuple[list[Path], list[Path]]:
        files: list[Path] = []
        subdirs: list[Path] = []
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
            for entry in entries:
                if entry.is_file(follow_symlinks=False):
                    if entry.name.endswith(LOG_SUFFIX):
                        files.append(Path(entry.path))
                elif entry.is_dir(follow_symlinks=False):
                    subdirs.append(Path(entry.path))
        except OSError as exc:
            raise ScanError(directory, exc) from exc
        return files, subdirs

    @staticmethod
    def _candidate(path: Path) -> Candidate:
        try:
            st = path.lstat()
        except OSError as exc:
            raise ScanError(path, exc) from exc
        return Candidate(
            path=path,
            size_bytes=st.st_size,
            modified_at=st.st_mtime,
            hard_link_count=st.st_nlink,
        )

    def _process_file(self, path: Path) -> None:
        candidate = self._candidate(path)
        verdict = evaluate(candidate, self._policy, self._now)
        if verdict is not Verdict.ELIGIBLE:
            self._sink.warning(describe(verdict, candidate, self._policy, self._now))
            return

        size = candidate.size_bytes
        if self._policy.dry_run:
            self._sink.info(f"compressing {path} [{format_size(size)}] (dry run)")
            self._stats.record(size)
            return

        self._sink.info(f"compressing {path} [{format_size(size)}]")
        try:
            compressed = self._compressor.compress(path)
        except CompressionError as exc:
            raise ScanError(path, exc.reason) from exc
        self._stats.record(size, compressed)
        logger.debug("%s: %d -> %d bytes", path, size, compressed)


def scan(
    roots: Iterable[Path | str],
    policy: ScanPolicy,
    compressor: Compressor,
    *,
    sink: ScanSink | None = None,
    stats: ScanStats | None = None,
) -> ScanOutcome:
    """Convenience wrapper: build a :class:`Scanner` and run it over *roots*."""
    return Scanner(policy, compressor, sink=sink, stats=stats).scan(roots)

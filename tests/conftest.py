"""Test fixtures: log file factory, recording sink and a scripted compressor."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from logpress.compressors.base import Compressor
from logpress.errors import CompressionError

DAY = 86400
NOW = 1_700_000_000.0


class RecordingSink:
    """ScanSink that keeps every message for assertions."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.warnings: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


class FakeCompressor(Compressor):
    """Deterministic compressor for testing.

    "Compresses" a file to a tenth of its size (rounded down), writing a
    ``.gz`` placeholder and removing the original. Paths listed in
    *fail_on* raise :class:`CompressionError` instead.

    Usage:
        compressor = FakeCompressor(fail_on={tmp_path / "c.log"})
    """

    name = "fake"
    suffix = ".gz"

    def __init__(self, fail_on: set[Path] | None = None) -> None:
        self.calls: list[Path] = []
        self._fail_on = {p.resolve() for p in (fail_on or set())}

    def compress(self, path: Path) -> int:
        self.calls.append(path)
        if path.resolve() in self._fail_on:
            raise CompressionError(path, "simulated failure")
        size = path.stat().st_size // 10
        self.target_for(path).write_bytes(b"\0" * size)
        path.unlink()
        return size


@pytest.fixture
def make_log() -> Callable[..., Path]:
    """Factory writing *size* bytes to *path* with an mtime *age_days* before NOW."""

    def _make(path: Path, size: int = 4096, age_days: float = 30) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        mtime = NOW - age_days * DAY
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_compressor() -> FakeCompressor:
    return FakeCompressor()


@pytest.fixture
def make_compressor() -> Callable[..., FakeCompressor]:
    return FakeCompressor


@pytest.fixture
def clock() -> Callable[[], float]:
    return lambda: NOW


@pytest.fixture(autouse=True)
def _reset_logpress_logging():
    """Drop handlers installed by configure_logging so tests don't leak streams."""
    yield
    root = logging.getLogger("logpress")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)

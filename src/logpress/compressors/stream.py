"""StreamCompressor: gzip/bzip2/xz via the stdlib codec modules."""

from __future__ import annotations

import bz2
import gzip
import lzma
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import IO

from logpress.compressors.base import Compressor, copy_metadata
from logpress.errors import CompressionError

_CHUNK_SIZE = 1024 * 1024


def _open_gzip(fileobj: IO[bytes], level: int) -> IO[bytes]:
    # No embedded name (it would be the temp file's) and mtime=0; the artifact
    # itself carries the real mtime.
    return gzip.GzipFile(filename="", fileobj=fileobj, mode="wb", compresslevel=level, mtime=0)


def _open_bz2(fileobj: IO[bytes], level: int) -> IO[bytes]:
    return bz2.BZ2File(fileobj, mode="wb", compresslevel=max(1, level))


def _open_xz(fileobj: IO[bytes], level: int) -> IO[bytes]:
    return lzma.LZMAFile(fileobj, mode="wb", preset=level)


class StreamCompressor(Compressor):
    """Streams a file through a codec into a temp file, then swaps it into place.

    The original is only unlinked after the artifact has been fsynced and
    renamed onto its final name, so a failure at any step leaves the original
    untouched.
    """

    def __init__(
        self,
        name: str,
        suffix: str,
        opener: Callable[[IO[bytes], int], IO[bytes]],
        *,
        level: int = 6,
    ) -> None:
        if not 0 <= level <= 9:
            raise ValueError(f"compression level must be 0-9, got {level}")
        self.name = name
        self.suffix = suffix
        self._opener = opener
        self._level = level

    @property
    def level(self) -> int:
        return self._level

    def compress(self, path: Path) -> int:
        path = Path(path)
        target = self.target_for(path)
        if target.exists():
            raise CompressionError(path, f"{target.name} already exists")

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=self.suffix + ".tmp", dir=path.parent,
            )
            with os.fdopen(fd, "wb") as raw, path.open("rb") as src:
                with self._opener(raw, self._level) as dst:
                    shutil.copyfileobj(src, dst, _CHUNK_SIZE)
                raw.flush()
                os.fsync(raw.fileno())
            copy_metadata(path, Path(tmp_name))
            os.replace(tmp_name, target)
            tmp_name = None
            path.unlink()
            return target.stat().st_size
        except OSError as exc:
            raise CompressionError(path, str(exc)) from exc
        finally:
            if tmp_name is not None:
                _discard(tmp_name)

    def __repr__(self) -> str:
        return f"StreamCompressor(name={self.name!r}, level={self._level})"


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass


def gzip_compressor(level: int = 6) -> StreamCompressor:
    return StreamCompressor("gzip", ".gz", _open_gzip, level=level)


def bzip2_compressor(level: int = 6) -> StreamCompressor:
    return StreamCompressor("bzip2", ".bz2", _open_bz2, level=level)


def xz_compressor(level: int = 6) -> StreamCompressor:
    return StreamCompressor("xz", ".xz", _open_xz, level=level)

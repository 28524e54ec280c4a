"""Compressor ABC and metadata helpers shared by all algorithms."""

from __future__ import annotations

import logging
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class Compressor(ABC):
    """Replaces a file in place with a compressed artifact.

    Concrete sub-classes implement :meth:`compress`. The scanner only relies
    on the returned size and on :class:`~logpress.errors.CompressionError`
    being raised on failure, so algorithms are interchangeable.
    """

    #: Short registry name, e.g. ``"gzip"``.
    name: str = ""
    #: Suffix appended to the original file name, e.g. ``".gz"``.
    suffix: str = ""

    def target_for(self, path: Path) -> Path:
        return path.with_name(path.name + self.suffix)

    @abstractmethod
    def compress(self, path: Path) -> int:
        """Compress *path*, remove the original and return the artifact size."""
        ...


def copy_metadata(src: Path, dst: Path) -> None:
    """Give *dst* the permissions, timestamps and (when allowed) owner of *src*."""
    st = src.stat()
    shutil.copystat(src, dst)
    if not hasattr(os, "chown"):
        return
    try:
        os.chown(dst, st.st_uid, st.st_gid)
    except PermissionError as exc:
        logger.warning("Cannot preserve ownership of %s: %s", src, exc)

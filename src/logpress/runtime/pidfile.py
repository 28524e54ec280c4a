"""PidFile: single-instance lock backed by a PID file."""

from __future__ import annotations

import logging
import os
import tempfile
import time
from pathlib import Path

import psutil

from logpress.errors import AlreadyRunningError

logger = logging.getLogger(__name__)

# An empty lock younger than this may still be in the middle of being written.
EMPTY_LOCK_GRACE_SECONDS = 30.0


def is_process_running(pid: int) -> bool:
    """Check if a process with given PID is running."""
    if pid <= 0:
        return False
    try:
        return psutil.pid_exists(pid)
    except (psutil.Error, OSError):
        return False


def _parse_pid(content: str) -> int | None:
    first_line = content.split("\n", 1)[0].strip()
    return int(first_line) if first_line.isdigit() else None


class PidFile:
    """Exclusive PID file held for the lifetime of a run.

    The file is written under a temporary name and hard-linked into place, so
    other instances never observe a half-written lock. A lock left behind by
    a dead process (or one whose contents cannot be parsed) is considered
    stale: it is removed with a warning and acquisition is retried once.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._held = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def held(self) -> bool:
        return self._held

    def __enter__(self) -> PidFile:
        self.acquire()
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def acquire(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        for _attempt in range(2):
            if self._publish():
                self._held = True
                logger.debug("Acquired PID file %s", self._path)
                return
            self._clear_stale()
        raise AlreadyRunningError(self._path, self._read_pid())

    def release(self) -> None:
        """Remove the PID file if it still belongs to this process."""
        if not self._held:
            return
        self._held = False
        if self._read_pid() != os.getpid():
            logger.warning("PID file %s was replaced by another process; leaving it", self._path)
            return
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass

    def _publish(self) -> bool:
        """Link a fully written PID file into place. False if the name is taken."""
        fd, tmp = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(f"{os.getpid()}\n")
            os.chmod(tmp, 0o644)
            try:
                os.link(tmp, self._path)
            except FileExistsError:
                return False
            return True
        finally:
            os.unlink(tmp)

    def _snapshot(self) -> tuple[int, int, float, str] | None:
        """(device, inode, mtime, content) of the current lock, or None if gone."""
        try:
            st = self._path.stat()
        except FileNotFoundError:
            return None
        try:
            content = self._path.read_text()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            content = ""
        return st.st_dev, st.st_ino, st.st_mtime, content

    def _read_pid(self) -> int | None:
        snapshot = self._snapshot()
        return _parse_pid(snapshot[3]) if snapshot else None

    def _clear_stale(self) -> None:
        snapshot = self._snapshot()
        if snapshot is None:
            return
        _dev, _ino, mtime, content = snapshot
        pid = _parse_pid(content)
        if pid is not None and is_process_running(pid):
            raise AlreadyRunningError(self._path, pid)
        if pid is None and not content.strip() and time.time() - mtime < EMPTY_LOCK_GRACE_SECONDS:
            raise AlreadyRunningError(self._path, None)

        if self._snapshot() != snapshot:
            logger.debug("PID file %s changed while checking it; retrying", self._path)
            return
        if pid is None:
            logger.warning("Removing unreadable PID file %s", self._path)
        else:
            logger.warning("Removing stale PID file %s (process %d is not running)", self._path, pid)
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass

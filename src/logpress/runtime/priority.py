"""Lower CPU and I/O scheduling priority of the current process."""

from __future__ import annotations

import logging

import psutil

logger = logging.getLogger(__name__)


def lower_priority(increment: int) -> bool:
    """Renice the process by *increment* and move it to the idle I/O class.

    Returns True when both adjustments succeeded. Failures are logged as
    warnings; running at normal priority is never fatal.
    """
    if increment <= 0:
        logger.debug("Priority adjustment disabled")
        return False

    process = psutil.Process()
    ok = True
    try:
        process.nice(process.nice() + increment)
        logger.debug("Niceness is now %d", process.nice())
    except (psutil.AccessDenied, OSError) as exc:
        logger.warning("Cannot lower CPU priority: %s", exc)
        ok = False

    idle_class = getattr(psutil, "IOPRIO_CLASS_IDLE", None)
    if idle_class is None or not hasattr(process, "ionice"):
        logger.debug("I/O scheduling classes not supported here; I/O priority unchanged")
        return False
    try:
        process.ionice(idle_class)
    except (psutil.AccessDenied, OSError) as exc:
        logger.warning("Cannot lower I/O priority: %s", exc)
        return False
    return ok

"""Process environment: logging, priority and the single-instance lock."""

from logpress.runtime.logsetup import configure_logging
from logpress.runtime.pidfile import PidFile
from logpress.runtime.priority import lower_priority

__all__ = ["PidFile", "configure_logging", "lower_priority"]

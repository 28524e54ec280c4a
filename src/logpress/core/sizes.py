"""Size threshold normalization and human-readable byte formatting."""

from __future__ import annotations

KIB = 1024

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def normalize_min_size(value: int) -> int:
    """Turn a user-supplied minimum size into a byte threshold.

    ``0`` matches every file (even empty ones) and ``1`` every non-empty
    file. Values from 2 up to 1023 are kibibytes; 1024 and above are bytes.
    """
    if value < 0:
        raise ValueError(f"minimum size must be >= 0, got {value}")
    if value <= 1:
        return value
    if value < KIB:
        return value * KIB
    return value


def format_size(num_bytes: int) -> str:
    """Render *num_bytes* as e.g. ``"512 B"`` or ``"3.4 MiB"``."""
    size = float(num_bytes)
    for unit in _UNITS:
        if abs(size) < KIB or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.1f} {unit}"
        size /= KIB
    return f"{size:.1f} {_UNITS[-1]}"

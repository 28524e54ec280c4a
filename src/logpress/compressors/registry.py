"""Compressor registry and factory."""

from __future__ import annotations

from collections.abc import Callable

from logpress.compressors.base import Compressor
from logpress.compressors.stream import bzip2_compressor, gzip_compressor, xz_compressor

# ---------------------------------------------------------------------------
# Algorithm catalogue
# ---------------------------------------------------------------------------

COMPRESSORS: dict[str, Callable[[int], Compressor]] = {
    "gzip": gzip_compressor,
    "bzip2": bzip2_compressor,
    "xz": xz_compressor,
}

ALIASES: dict[str, str] = {
    "gz": "gzip",
    "bz2": "bzip2",
    "lzma": "xz",
}

DEFAULT_ALGORITHM = "gzip"


def resolve_algorithm(name: str) -> str:
    """Map a name or alias onto a registered algorithm. Raises ValueError if unknown."""
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in COMPRESSORS:
        known = ", ".join(sorted(COMPRESSORS))
        raise ValueError(f"Unknown compression algorithm '{name}' (known: {known})")
    return key


def create_compressor(name: str = DEFAULT_ALGORITHM, level: int = 6) -> Compressor:
    """Build the compressor registered under *name*."""
    return COMPRESSORS[resolve_algorithm(name)](level)

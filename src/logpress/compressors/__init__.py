"""Pluggable compression algorithms."""

from logpress.compressors.base import Compressor
from logpress.compressors.registry import COMPRESSORS, create_compressor
from logpress.compressors.stream import StreamCompressor

__all__ = ["COMPRESSORS", "Compressor", "StreamCompressor", "create_compressor"]

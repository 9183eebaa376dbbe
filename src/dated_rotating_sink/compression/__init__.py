"""Compression of retired log files."""
from __future__ import annotations

from dated_rotating_sink.compression.compressor import (
    CompressionError,
    PathLocks,
    compress_logfile,
)

__all__ = [
    "CompressionError",
    "PathLocks",
    "compress_logfile",
]

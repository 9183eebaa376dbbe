"""Filename policy for date-stamped log files."""
from __future__ import annotations

from dated_rotating_sink.naming.policy import (
    COMPRESSED_SUFFIX,
    TIMESTAMP_FORMAT,
    FilenamePolicy,
    split_base,
)

__all__ = [
    "COMPRESSED_SUFFIX",
    "TIMESTAMP_FORMAT",
    "FilenamePolicy",
    "split_base",
]

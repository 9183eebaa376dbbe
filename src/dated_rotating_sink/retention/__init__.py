"""Discovery and retention of dated log files."""
from __future__ import annotations

from dated_rotating_sink.retention.index import DatedFile, LogfileIndex
from dated_rotating_sink.retention.sweeper import RetentionSweeper, SweepError

__all__ = [
    "DatedFile",
    "LogfileIndex",
    "RetentionSweeper",
    "SweepError",
]

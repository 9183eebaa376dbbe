"""The rotating sink and its logging adapter."""
from __future__ import annotations

from dated_rotating_sink.sink.handler import DatedFileHandler
from dated_rotating_sink.sink.rotating import (
    RotatingSink,
    SinkCloseError,
    SinkOpenError,
)

__all__ = [
    "DatedFileHandler",
    "RotatingSink",
    "SinkCloseError",
    "SinkOpenError",
]

"""dated-rotating-sink — Self-rotating, date-stamped log sink.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import dated_rotating_sink as drs
>>> drs.__version__
'0.1.0'
>>> sink = drs.open_sink("/tmp/service.log")
>>> sink.write(b"hello\\n")
6
>>> sink.close()
"""
from __future__ import annotations

__version__: str = "0.1.0"

from dated_rotating_sink.convenience import attach_handler, open_sink
from dated_rotating_sink.errors import DatedSinkError

# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------
from dated_rotating_sink.naming.policy import (
    COMPRESSED_SUFFIX,
    TIMESTAMP_FORMAT,
    FilenamePolicy,
)

# ---------------------------------------------------------------------------
# Retention
# ---------------------------------------------------------------------------
from dated_rotating_sink.retention.index import DatedFile, LogfileIndex
from dated_rotating_sink.retention.sweeper import RetentionSweeper, SweepError

# ---------------------------------------------------------------------------
# Compression
# ---------------------------------------------------------------------------
from dated_rotating_sink.compression.compressor import CompressionError, compress_logfile

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from dated_rotating_sink.config.loader import (
    ConfigLoader,
    ConfigProvider,
    FileConfigProvider,
    RetentionConfig,
)

# ---------------------------------------------------------------------------
# Sink
# ---------------------------------------------------------------------------
from dated_rotating_sink.sink.handler import DatedFileHandler
from dated_rotating_sink.sink.rotating import RotatingSink, SinkCloseError, SinkOpenError

__all__ = [
    "__version__",
    "DatedSinkError",
    "attach_handler",
    "open_sink",
    # Naming
    "COMPRESSED_SUFFIX",
    "TIMESTAMP_FORMAT",
    "FilenamePolicy",
    # Retention
    "DatedFile",
    "LogfileIndex",
    "RetentionSweeper",
    "SweepError",
    # Compression
    "CompressionError",
    "compress_logfile",
    # Configuration
    "ConfigLoader",
    "ConfigProvider",
    "FileConfigProvider",
    "RetentionConfig",
    # Sink
    "DatedFileHandler",
    "RotatingSink",
    "SinkCloseError",
    "SinkOpenError",
]

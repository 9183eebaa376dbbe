"""Convenience API for dated-rotating-sink — quickstart helpers.

Example
-------
::

    from dated_rotating_sink import open_sink
    sink = open_sink("service.log")
    sink.write(b"hello\\n")
    sink.close()

"""
from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from dated_rotating_sink.config.loader import FileConfigProvider, RetentionConfig
from dated_rotating_sink.sink.handler import DatedFileHandler
from dated_rotating_sink.sink.rotating import Clock, RotatingSink

DEFAULT_FORMAT: str = "%(asctime)s %(levelname)s %(name)s %(message)s"


def open_sink(
    filename: str | PathLike[str],
    config_path: str | PathLike[str] | None = None,
    clock: Clock | None = None,
) -> RotatingSink:
    """Open a rotating sink for *filename*.

    Parameters
    ----------
    filename:
        Base log path, e.g. ``"logs/service.log"``.  Files are written as
        ``logs/service-YYYYMMDD.log``.
    config_path:
        Optional YAML file with ``max_files`` / ``compress_files``.  It is
        re-read on every rotation.  Defaults apply when omitted.
    clock:
        Optional replacement for :meth:`datetime.now`.
    """
    config = (
        FileConfigProvider(Path(config_path))
        if config_path is not None
        else RetentionConfig()
    )
    return RotatingSink(Path(filename), config=config, clock=clock)


def attach_handler(
    sink: RotatingSink,
    logger_name: str | None = None,
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
) -> DatedFileHandler:
    """Route a logger's records into *sink* and return the new handler.

    Parameters
    ----------
    sink:
        Destination sink.  Closing the handler closes the sink.
    logger_name:
        Logger to attach to.  ``None`` means the root logger.
    level:
        Level set on the handler.
    fmt:
        Format string for :class:`logging.Formatter`.
    """
    handler = DatedFileHandler(sink, level=level)
    handler.setFormatter(logging.Formatter(fmt))
    logging.getLogger(logger_name).addHandler(handler)
    return handler

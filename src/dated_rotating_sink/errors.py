"""Exception hierarchy shared by the sink, compressor and sweeper."""
from __future__ import annotations

from pathlib import Path


class DatedSinkError(Exception):
    """Base class for every error raised by dated-rotating-sink."""


class PathError(DatedSinkError):
    """An error tied to one file on disk.

    Attributes
    ----------
    path:
        The file the failed operation targeted.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")

"""Gzip compression of retired log files.

:func:`compress_logfile` streams a file through gzip into a temporary file,
renames the result into place and only then deletes the original.  A failed
compression leaves the original untouched and never leaves a truncated
archive under the final ``.gz`` name.

Calls for the same path are serialized through a process-wide lock registry,
and a source that no longer exists is treated as already compressed.  Two
rotations racing on the same outgoing file therefore end with exactly one
archive and no error.

Example
-------
>>> from pathlib import Path
>>> compress_logfile(Path("/var/log/app-20240110.log"))
PosixPath('/var/log/app-20240110.log.gz')
"""
from __future__ import annotations

import gzip
import logging
import os
import shutil
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from dated_rotating_sink.errors import PathError
from dated_rotating_sink.naming.policy import FilenamePolicy

logger = logging.getLogger(__name__)

_TEMP_SUFFIX: str = ".tmp"


class CompressionError(PathError):
    """Raised when a log file could not be compressed.

    The original file is left in place.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Failed to compress log file")


class PathLocks:
    """Registry of per-path locks.

    Locks are created on first use and discarded once no thread holds or
    waits for them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, path: Path) -> Iterator[None]:
        """Hold the lock for *path* for the duration of the block."""
        key = Path(os.path.abspath(path))
        with self._guard:
            lock, users = self._locks.get(key, (threading.Lock(), 0))
            self._locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, users = self._locks[key]
                if users == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_PATH_LOCKS = PathLocks()


def compress_logfile(path: Path, locks: PathLocks | None = None) -> Path | None:
    """Compress *path* into ``path.gz`` and delete the original.

    Parameters
    ----------
    path:
        The file to compress.
    locks:
        Lock registry used to serialize calls per path.  Defaults to the
        process-wide registry.

    Returns
    -------
    Path | None
        Path of the compressed file, or ``None`` when *path* no longer
        exists (already compressed or removed).

    Raises
    ------
    CompressionError:
        When reading, compressing or renaming failed.  The original file is
        still in place.
    """
    path = Path(path)
    target = FilenamePolicy.compressed_name(path)
    temporary = target.with_name(target.name + _TEMP_SUFFIX)

    registry = locks if locks is not None else _PATH_LOCKS
    with registry.hold(path):
        try:
            source = path.open("rb")
        except FileNotFoundError:
            logger.debug("Nothing to compress, %s is already gone", path)
            return None
        except OSError as exc:
            raise CompressionError(path) from exc

        try:
            with source, gzip.open(temporary, "wb") as sink:
                shutil.copyfileobj(source, sink)
            os.replace(temporary, target)
        except OSError as exc:
            temporary.unlink(missing_ok=True)
            raise CompressionError(path) from exc

        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise CompressionError(path) from exc

    logger.info("Compressed %s to %s", path, target)
    return target

"""Self-rotating, date-stamped byte sink.

A :class:`RotatingSink` looks like a binary file to its callers, but every
write first checks which dated file is current.  When the day changes the
sink closes the old file, opens the new one and starts a background thread
that compresses the retired file and prunes old ones.

Thread-safety is achieved with a threading.Lock: the current-file check, the
close/open sequence, the buffered write, flush and close are mutually
exclusive.  Compression and cleanup run outside that lock so a rotating
write returns as soon as the new file is open.

Example
-------
>>> from pathlib import Path
>>> with RotatingSink(Path("/var/log/app.log")) as sink:
...     sink.write(b"service started\\n")
16
"""
from __future__ import annotations

import io
import logging
import os
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable

from dated_rotating_sink.compression.compressor import CompressionError, compress_logfile
from dated_rotating_sink.config.loader import ConfigProvider, RetentionConfig
from dated_rotating_sink.errors import PathError
from dated_rotating_sink.naming.policy import FilenamePolicy
from dated_rotating_sink.retention.sweeper import RetentionSweeper, SweepError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_BUFFER_SIZE: int = io.DEFAULT_BUFFER_SIZE
FILE_MODE: int = 0o664


class SinkOpenError(PathError):
    """Raised when the dated log file cannot be opened or created.

    The sink is left without a handle; the next write retries the open.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Failed to open log file")


class SinkCloseError(PathError):
    """Raised when flushing or closing a log file fails."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Failed to flush/close log file")


def _open_for_append(path: str | os.PathLike[str], flags: int) -> int:
    return os.open(path, flags, FILE_MODE)


class RotatingSink:
    """Byte sink that writes to ``<stem>-<YYYYMMDD><ext>`` for the current day.

    Parameters
    ----------
    base:
        Configured log path, extension included.  The dated files are
        created next to it.
    config:
        Provider of the retention count and compression toggle.  Consulted
        on every rotation.  Defaults to :class:`RetentionConfig` defaults.
    clock:
        Zero-argument callable returning "now".  Defaults to
        :meth:`datetime.now` (local time).
    buffer_size:
        Size of the write buffer in bytes.

    Raises
    ------
    SinkOpenError:
        When today's file cannot be opened.
    """

    def __init__(
        self,
        base: Path,
        config: ConfigProvider | None = None,
        clock: Clock | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._policy = FilenamePolicy(Path(base))
        self._config: ConfigProvider = config if config is not None else RetentionConfig()
        self._clock: Clock = clock or datetime.now
        self._buffer_size = buffer_size
        self._sweeper = RetentionSweeper(self._policy, self._clock)
        self._lock = threading.Lock()
        self._handle: BinaryIO | None = None
        self._path: Path = self._policy.current_name(self._clock())
        self._closed = False
        self._maintenance: list[threading.Thread] = []
        self._maintenance_lock = threading.Lock()
        self._open(self._path)

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def write(self, data: bytes) -> int:
        """Write *data* to the file that is current now.

        Returns
        -------
        int
            Number of bytes accepted by the buffer.

        Raises
        ------
        ValueError:
            When the sink has been closed.
        SinkOpenError:
            When the current file could not be opened.  Nothing was written.
        SinkCloseError:
            When the previous file could not be flushed or closed.  The new
            file is open, but nothing was written by this call.
        """
        with self._lock:
            if self._closed:
                raise ValueError("write to closed sink")
            now = self._clock()
            current = self._policy.current_name(now)
            if self._handle is None or current != self._path:
                self._rotate(current, now)
            return self._handle.write(data)  # type: ignore[union-attr]

    def flush(self) -> None:
        """Flush buffered bytes to the current file."""
        with self._lock:
            if self._handle is not None:
                self._handle.flush()

    def close(self) -> None:
        """Flush and close the current file.  Safe to call more than once.

        Raises
        ------
        SinkCloseError:
            When the buffer could not be flushed or the file closed.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._close_handle()

    def writable(self) -> bool:
        return not self._closed

    def __enter__(self) -> RotatingSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Background maintenance
    # ------------------------------------------------------------------

    def join_maintenance(self, timeout: float | None = None) -> bool:
        """Wait for the compression/cleanup threads started so far.

        Parameters
        ----------
        timeout:
            Overall time limit in seconds, or ``None`` to wait indefinitely.

        Returns
        -------
        bool
            ``True`` when every thread has finished.
        """
        with self._maintenance_lock:
            threads = list(self._maintenance)
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in threads:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(remaining)
        return not any(thread.is_alive() for thread in threads)

    def run_maintenance(self, now: datetime | None = None) -> None:
        """Compress yesterday's file (when enabled) and sweep old files.

        Runs on a background thread after every rotation; may also be
        called directly.  Failures are logged, never raised.
        """
        try:
            self._maintain(now or self._clock())
        except Exception:
            # Config providers may raise arbitrary exceptions.
            logger.exception("Maintenance of log files for %s failed", self._policy.base)

    def _maintain(self, now: datetime) -> None:
        if self._config.compression_enabled():
            retired = self._policy.previous_name(now)
            try:
                compress_logfile(retired)
            except CompressionError as exc:
                logger.error("%s (%s)", exc, exc.__cause__)
        try:
            self._sweeper.sweep(self._config.retention_count())
        except SweepError as exc:
            logger.error("Cleanup of old log files incomplete: %s", exc)
        except (OSError, ValueError) as exc:
            logger.error("Cleanup of old log files for %s failed: %s", self._policy.base, exc)

    def _start_maintenance(self, now: datetime) -> None:
        thread = threading.Thread(
            target=self.run_maintenance,
            args=(now,),
            daemon=True,
            name="dated-sink-maintenance",
        )
        with self._maintenance_lock:
            self._maintenance = [t for t in self._maintenance if t.is_alive()]
            self._maintenance.append(thread)
        thread.start()

    # ------------------------------------------------------------------
    # Internal helpers (called with self._lock held)
    # ------------------------------------------------------------------

    def _rotate(self, current: Path, now: datetime) -> None:
        """Switch the handle to *current*, scheduling maintenance on success."""
        previous = self._path
        close_error: SinkCloseError | None = None
        try:
            self._close_handle()
        except SinkCloseError as exc:
            logger.error("%s (%s)", exc, exc.__cause__)
            close_error = exc

        self._open(current)

        if current != previous:
            logger.info("Rotated log file %s -> %s", previous, current)
            self._start_maintenance(now)
        if close_error is not None:
            raise close_error

    def _open(self, path: Path) -> None:
        try:
            handle = open(path, "ab", buffering=self._buffer_size, opener=_open_for_append)
        except OSError as exc:
            raise SinkOpenError(path) from exc
        self._handle = handle
        self._path = path
        logger.debug("Opened log file %s", path)

    def _close_handle(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as exc:
            raise SinkCloseError(self._path) from exc

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Path of the file most recently opened for writing."""
        return self._path

    @property
    def closed(self) -> bool:
        """``True`` once :meth:`close` has been called."""
        return self._closed

    @property
    def policy(self) -> FilenamePolicy:
        """The naming policy of this sink."""
        return self._policy

    @property
    def config(self) -> ConfigProvider:
        """The retention configuration consulted on rotation."""
        return self._config

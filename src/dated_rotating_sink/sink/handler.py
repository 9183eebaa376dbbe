"""Stdlib logging adapter for :class:`RotatingSink`.

Lets ``logging`` records target a rotating sink without the formatting layer
knowing anything about rotation.

Example
-------
>>> import logging
>>> from pathlib import Path
>>> handler = DatedFileHandler(RotatingSink(Path("/var/log/app.log")))
>>> handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
>>> logging.getLogger().addHandler(handler)
"""
from __future__ import annotations

import logging

from dated_rotating_sink.sink.rotating import RotatingSink


class DatedFileHandler(logging.Handler):
    """A logging handler that writes formatted records to a rotating sink.

    Parameters
    ----------
    sink:
        The destination sink.
    encoding:
        Text encoding applied to each formatted record.
    owns_sink:
        When ``True`` (the default) closing the handler closes the sink.
    """

    terminator: str = "\n"

    def __init__(
        self,
        sink: RotatingSink,
        encoding: str = "utf-8",
        owns_sink: bool = True,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._sink = sink
        self._encoding = encoding
        self._owns_sink = owns_sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record) + self.terminator
            self._sink.write(message.encode(self._encoding))
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        with self.lock:  # type: ignore[union-attr]
            if not self._sink.closed:
                self._sink.flush()

    def close(self) -> None:
        with self.lock:  # type: ignore[union-attr]
            try:
                if self._owns_sink:
                    self._sink.close()
            finally:
                super().close()

    @property
    def sink(self) -> RotatingSink:
        """The sink records are written to."""
        return self._sink

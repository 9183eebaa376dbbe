"""Count-based retention of dated log files.

The sweeper keeps the ``max_files`` most recent dated files and deletes the
rest.  The file that is active at sweep time is never deleted and is not
counted against ``max_files``, so a sweep can safely run while a sink keeps
writing.

Deletion failures do not stop a sweep.  Every remaining candidate is still
attempted and the failures are reported together in one :class:`SweepError`.

Example
-------
>>> from pathlib import Path
>>> sweeper = RetentionSweeper(FilenamePolicy(Path("/var/log/app.log")))
>>> removed = sweeper.sweep(max_files=5)
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from dated_rotating_sink.errors import DatedSinkError
from dated_rotating_sink.naming.policy import FilenamePolicy
from dated_rotating_sink.retention.index import DatedFile, LogfileIndex

logger = logging.getLogger(__name__)


class SweepError(DatedSinkError):
    """Raised when one or more files could not be deleted during a sweep.

    Attributes
    ----------
    failures:
        ``(path, error)`` pairs, one for every failed deletion.
    """

    def __init__(self, failures: list[tuple[Path, OSError]]) -> None:
        self.failures = failures
        details = "; ".join(f"{path}: {error}" for path, error in failures)
        super().__init__(f"Failed to delete {len(failures)} log file(s): {details}")


class RetentionSweeper:
    """Deletes dated files beyond a retention count.

    Parameters
    ----------
    policy:
        Naming policy of the sink whose files are swept.
    clock:
        Zero-argument callable returning "now".  Decides which file is
        active and therefore protected.  Defaults to :meth:`datetime.now`.
    """

    def __init__(
        self,
        policy: FilenamePolicy,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._policy = policy
        self._index = LogfileIndex(policy)
        self._clock = clock or datetime.now

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def sweep(self, max_files: int) -> list[Path]:
        """Delete every dated file beyond the ``max_files`` most recent.

        Parameters
        ----------
        max_files:
            Number of most recent files to keep.  ``0`` keeps only the
            active file.

        Returns
        -------
        list[Path]
            Paths that were deleted, most recent first.

        Raises
        ------
        ValueError:
            When *max_files* is negative.
        SweepError:
            When at least one deletion failed.
        OSError:
            When the directory cannot be listed.
        """
        if max_files < 0:
            raise ValueError(f"max_files must be >= 0, got {max_files}")

        active = self._policy.current_name(self._clock())
        removed: list[Path] = []
        failures: list[tuple[Path, OSError]] = []
        for dated in self.candidates(max_files, active):
            try:
                dated.path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not delete old log file %s: %s", dated.path, exc)
                failures.append((dated.path, exc))
                continue
            logger.info("Deleted old log file %s", dated.path)
            removed.append(dated.path)

        if failures:
            raise SweepError(failures)
        return removed

    def candidates(self, max_files: int, active: Path) -> list[DatedFile]:
        """Return the files ranked beyond *max_files*, most recent first.

        *active* is excluded before ranking, so it neither occupies one of
        the kept slots nor appears in the result.
        """
        ranked = sorted(
            (dated for dated in self._index.scan() if dated.path != active),
            key=DatedFile.sort_key,
            reverse=True,
        )
        return ranked[max_files:]

    @property
    def index(self) -> LogfileIndex:
        """The index used to discover files."""
        return self._index

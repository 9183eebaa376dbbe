"""Discovery of dated log files on disk.

The index lists every file in the sink's directory that looks like a dated
log file for the configured base path and extracts the embedded date::

    app-20240110.log       -> 2024-01-10
    app-20240109.log.gz    -> 2024-01-09

Files that share the stem but do not follow the naming scheme are skipped
with a warning.  They never abort a scan.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from dated_rotating_sink.naming.policy import (
    COMPRESSED_SUFFIX,
    TIMESTAMP_FORMAT,
    FilenamePolicy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatedFile:
    """A discovered log file and the date embedded in its name.

    Attributes
    ----------
    path:
        Full path of the file.
    date:
        Date parsed from the ``YYYYMMDD`` part of the filename.
    """

    path: Path
    date: date

    @property
    def compressed(self) -> bool:
        """``True`` when the file carries the compressed suffix."""
        return self.path.name.endswith(COMPRESSED_SUFFIX)

    def sort_key(self) -> tuple[date, str]:
        """Ordering key: date first, filename as a deterministic tiebreak."""
        return (self.date, self.path.name)


class LogfileIndex:
    """Scans a directory for the dated files belonging to one base path.

    Parameters
    ----------
    policy:
        Naming policy of the sink whose files are indexed.
    """

    def __init__(self, policy: FilenamePolicy) -> None:
        self._policy = policy
        self._pattern = re.compile(
            re.escape(policy.prefix)
            + r"(\d{8})"
            + re.escape(policy.extension)
            + "(?:" + re.escape(COMPRESSED_SUFFIX) + ")?"
        )

    def scan(self) -> list[DatedFile]:
        """Return every dated file currently on disk, in no particular order.

        Raises
        ------
        OSError:
            When the directory cannot be listed (missing, permission denied).
        """
        results: list[DatedFile] = []
        stem_name = self._policy.stem_name
        for entry in self._policy.directory.iterdir():
            if not entry.name.startswith(stem_name) or not entry.is_file():
                continue
            dated = self.parse(entry)
            if dated is not None:
                results.append(dated)
        return results

    def parse(self, path: Path) -> DatedFile | None:
        """Parse one candidate path, returning ``None`` when it does not fit."""
        match = self._pattern.fullmatch(path.name)
        if match is None:
            logger.warning(
                "Skipping %s: name does not match %s<YYYYMMDD>%s",
                path,
                self._policy.prefix,
                self._policy.extension,
            )
            return None
        try:
            parsed = datetime.strptime(match.group(1), TIMESTAMP_FORMAT).date()
        except ValueError as exc:
            logger.warning("Skipping %s: invalid date: %s", path, exc)
            return None
        return DatedFile(path=path, date=parsed)

    @property
    def policy(self) -> FilenamePolicy:
        """The naming policy this index scans for."""
        return self._policy

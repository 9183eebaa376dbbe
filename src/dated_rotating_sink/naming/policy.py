"""Date-stamped filename policy.

Maps a configured base path and a point in time to the concrete path of the
log file for that day.  The extension of the base path is preserved and the
date is inserted between the stem and the extension::

    /var/log/app.log  ->  /var/log/app-20240111.log

The policy is pure: it performs no I/O and holds no mutable state.

Example
-------
>>> from datetime import datetime
>>> from pathlib import Path
>>> policy = FilenamePolicy(Path("/var/log/app.log"))
>>> policy.current_name(datetime(2024, 1, 11))
PosixPath('/var/log/app-20240111.log')
>>> policy.previous_name(datetime(2024, 1, 11))
PosixPath('/var/log/app-20240110.log')
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

TIMESTAMP_FORMAT: str = "%Y%m%d"
COMPRESSED_SUFFIX: str = ".gz"
SEPARATOR: str = "-"


def split_base(base: Path) -> tuple[str, str]:
    """Split the final segment of *base* into ``(stem_name, extension)``.

    The extension is everything from the last dot of the final path segment
    onward.  A segment without a dot has no extension.
    """
    name = base.name
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


@dataclass(frozen=True)
class FilenamePolicy:
    """Naming rules for one rotating sink.

    Parameters
    ----------
    base:
        The configured log path, extension included (``app.log``).
    """

    base: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", Path(self.base))

    @property
    def stem_name(self) -> str:
        """Final path segment without its extension."""
        return split_base(self.base)[0]

    @property
    def extension(self) -> str:
        """Extension of the base path, including the leading dot."""
        return split_base(self.base)[1]

    @property
    def directory(self) -> Path:
        """Directory holding the dated files."""
        return self.base.parent

    @property
    def prefix(self) -> str:
        """Filename prefix shared by every dated file (``app-``)."""
        return self.stem_name + SEPARATOR

    def name_for(self, moment: datetime) -> Path:
        """Return the dated path for the day containing *moment*."""
        stamp = moment.strftime(TIMESTAMP_FORMAT)
        return self.base.with_name(f"{self.prefix}{stamp}{self.extension}")

    def current_name(self, now: datetime) -> Path:
        """Path of the active file at *now*."""
        return self.name_for(now)

    def previous_name(self, now: datetime) -> Path:
        """Path of the file that was active 24 hours before *now*."""
        return self.name_for(now - timedelta(hours=24))

    @staticmethod
    def compressed_name(path: Path) -> Path:
        """Path of the compressed form of *path*."""
        return path.with_name(path.name + COMPRESSED_SUFFIX)

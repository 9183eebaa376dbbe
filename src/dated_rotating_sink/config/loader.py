"""Retention configuration with Pydantic v2 validation.

The sink asks its configuration for two values every time it rotates:

- ``retention_count()`` — how many dated files to keep (default ``5``)
- ``compression_enabled()`` — whether to gzip the retired file (default ``True``)

Any object with those two methods is a :class:`ConfigProvider`.  Two are
provided:

- :class:`RetentionConfig` — a validated, fixed configuration.
- :class:`FileConfigProvider` — re-reads a YAML file on each call so edits
  take effect on the next rotation.  Unreadable or unparsable values fall
  back to the defaults instead of failing, since the caller is a background
  maintenance thread.

Example YAML
------------
.. code-block:: yaml

    max_files: 14
    compress_files: "on"

The legacy ``MaxFiles`` / ``CompressFiles`` keys are accepted as well.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml
from pydantic import AliasChoices, BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILES: int = 5
DEFAULT_COMPRESS_FILES: bool = True

_MAX_FILES_KEYS: tuple[str, ...] = ("max_files", "MaxFiles")
_COMPRESS_FILES_KEYS: tuple[str, ...] = ("compress_files", "compress", "CompressFiles")

_TRUE_WORDS: frozenset[str] = frozenset({"on", "true", "yes", "t", "y", "1"})
_FALSE_WORDS: frozenset[str] = frozenset({"off", "false", "no", "f", "n", "0"})


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of the two settings the sink consults on rotation."""

    def retention_count(self) -> int:
        """Number of dated files to keep besides the active one."""
        ...

    def compression_enabled(self) -> bool:
        """Whether the retired file should be compressed."""
        ...


# ---------------------------------------------------------------------------
# Lenient parsing
# ---------------------------------------------------------------------------


def parse_max_files(raw: object) -> int:
    """Interpret *raw* as a retention count, falling back to the default.

    Accepts non-negative integers and integer strings.  Empty values fall
    back silently; anything else falls back with a warning.
    """
    if raw is None or raw == "":
        return DEFAULT_MAX_FILES
    if isinstance(raw, bool):
        logger.warning("Ignoring boolean max_files %r, using %d", raw, DEFAULT_MAX_FILES)
        return DEFAULT_MAX_FILES
    try:
        value = raw if isinstance(raw, int) else int(str(raw).strip())
    except ValueError:
        logger.warning("Could not parse max_files %r, using %d", raw, DEFAULT_MAX_FILES)
        return DEFAULT_MAX_FILES
    if value < 0:
        logger.warning("Negative max_files %d, using %d", value, DEFAULT_MAX_FILES)
        return DEFAULT_MAX_FILES
    return value


def parse_compress_files(raw: object) -> bool:
    """Interpret *raw* as the compression toggle, falling back to ``True``.

    Strings are matched case-insensitively against ``on/off``,
    ``true/false``, ``yes/no``, ``t/f``, ``y/n`` and ``1/0``.
    """
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return DEFAULT_COMPRESS_FILES
    word = str(raw).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    if word:
        logger.warning("Could not parse compress_files %r, using %s", raw, DEFAULT_COMPRESS_FILES)
    return DEFAULT_COMPRESS_FILES


def _first_present(raw: dict[str, object], keys: tuple[str, ...]) -> object:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class RetentionConfig(BaseModel):
    """Validated retention settings.

    Also usable directly as a :class:`ConfigProvider`.
    """

    model_config = {"extra": "allow"}

    max_files: int = Field(
        default=DEFAULT_MAX_FILES,
        ge=0,
        validation_alias=AliasChoices(*_MAX_FILES_KEYS),
    )
    compress: bool = Field(
        default=DEFAULT_COMPRESS_FILES,
        validation_alias=AliasChoices(*_COMPRESS_FILES_KEYS),
    )

    def retention_count(self) -> int:
        return self.max_files

    def compression_enabled(self) -> bool:
        return self.compress


class FileConfigProvider:
    """Reads retention settings from a YAML file on every call.

    Parameters
    ----------
    config_path:
        Path to the YAML file.  A missing file yields the defaults.
    """

    def __init__(self, config_path: Path) -> None:
        self._config_path = Path(config_path)

    def retention_count(self) -> int:
        return parse_max_files(_first_present(self._read(), _MAX_FILES_KEYS))

    def compression_enabled(self) -> bool:
        return parse_compress_files(_first_present(self._read(), _COMPRESS_FILES_KEYS))

    def snapshot(self) -> RetentionConfig:
        """Return the current file contents as a fixed :class:`RetentionConfig`."""
        return RetentionConfig(
            max_files=self.retention_count(),
            compress=self.compression_enabled(),
        )

    def _read(self) -> dict[str, object]:
        """Load the YAML mapping, or an empty dict when it is unusable."""
        try:
            with self._config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except FileNotFoundError:
            logger.debug("Config file %s not found, using defaults", self._config_path)
            return {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Could not read config file %s: %s", self._config_path, exc)
            return {}
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Config file %s is not a mapping, using defaults", self._config_path)
            return {}
        return raw

    @property
    def config_path(self) -> Path:
        """The YAML file this provider reads."""
        return self._config_path


class ConfigLoader:
    """Loads and strictly validates retention YAML configuration.

    Unlike :class:`FileConfigProvider`, invalid input raises.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load_string("max_files: 7")
    >>> config.max_files
    7
    """

    def load(self, config_path: Path) -> RetentionConfig:
        """Load and validate a YAML file.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ValueError:
            When the YAML content fails Pydantic validation.
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Retention config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        return RetentionConfig.model_validate(raw)

    def load_string(self, yaml_content: str) -> RetentionConfig:
        """Load and validate a YAML string directly."""
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return RetentionConfig.model_validate(raw)

    def defaults(self) -> RetentionConfig:
        """Return a configuration with all defaults applied."""
        return RetentionConfig()

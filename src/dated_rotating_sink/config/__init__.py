"""Retention configuration providers."""
from __future__ import annotations

from dated_rotating_sink.config.loader import (
    DEFAULT_COMPRESS_FILES,
    DEFAULT_MAX_FILES,
    ConfigLoader,
    ConfigProvider,
    FileConfigProvider,
    RetentionConfig,
    parse_compress_files,
    parse_max_files,
)

__all__ = [
    "DEFAULT_COMPRESS_FILES",
    "DEFAULT_MAX_FILES",
    "ConfigLoader",
    "ConfigProvider",
    "FileConfigProvider",
    "RetentionConfig",
    "parse_compress_files",
    "parse_max_files",
]

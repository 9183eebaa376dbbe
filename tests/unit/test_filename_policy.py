"""Tests for FilenamePolicy."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from dated_rotating_sink.naming.policy import FilenamePolicy, split_base


# ---------------------------------------------------------------------------
# split_base
# ---------------------------------------------------------------------------


class TestSplitBase:
    @pytest.mark.parametrize(
        ("base", "expected"),
        [
            ("app.log", ("app", ".log")),
            ("/var/log/app.log", ("app", ".log")),
            ("app.tar.log", ("app.tar", ".log")),
            ("app", ("app", "")),
            ("logs.d/app", ("app", "")),
            (".log", ("", ".log")),
        ],
    )
    def test_split(self, base: str, expected: tuple[str, str]) -> None:
        assert split_base(Path(base)) == expected


# ---------------------------------------------------------------------------
# current_name / previous_name
# ---------------------------------------------------------------------------


class TestNames:
    def test_current_name_inserts_date_before_extension(self) -> None:
        policy = FilenamePolicy(Path("/var/log/app.log"))
        assert policy.current_name(datetime(2024, 1, 11, 23, 59)) == Path(
            "/var/log/app-20240111.log"
        )

    def test_previous_name_is_24_hours_earlier(self) -> None:
        policy = FilenamePolicy(Path("/var/log/app.log"))
        assert policy.previous_name(datetime(2024, 1, 11, 0, 0)) == Path(
            "/var/log/app-20240110.log"
        )

    def test_previous_name_crosses_year_boundary(self) -> None:
        policy = FilenamePolicy(Path("app.log"))
        assert policy.previous_name(datetime(2024, 1, 1, 8)) == Path("app-20231231.log")

    def test_date_is_zero_padded(self) -> None:
        policy = FilenamePolicy(Path("app.log"))
        assert policy.current_name(datetime(2024, 3, 5)).name == "app-20240305.log"

    def test_no_extension(self) -> None:
        policy = FilenamePolicy(Path("logs/app"))
        assert policy.current_name(datetime(2024, 1, 11)) == Path("logs/app-20240111")

    def test_accepts_string_base(self) -> None:
        policy = FilenamePolicy("logs/app.log")  # type: ignore[arg-type]
        assert policy.base == Path("logs/app.log")

    def test_deterministic(self) -> None:
        policy = FilenamePolicy(Path("app.log"))
        moment = datetime(2024, 1, 11, 12)
        assert policy.current_name(moment) == policy.current_name(moment)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_compressed_name_appends_suffix(self) -> None:
        assert FilenamePolicy.compressed_name(Path("logs/app-20240110.log")) == Path(
            "logs/app-20240110.log.gz"
        )

    def test_prefix_and_directory(self) -> None:
        policy = FilenamePolicy(Path("/var/log/app.log"))
        assert policy.prefix == "app-"
        assert policy.directory == Path("/var/log")
        assert policy.extension == ".log"
        assert policy.stem_name == "app"

"""Tests for LogfileIndex."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pytest

from dated_rotating_sink.naming.policy import FilenamePolicy
from dated_rotating_sink.retention.index import DatedFile, LogfileIndex


@pytest.fixture()
def index(tmp_path: Path) -> LogfileIndex:
    return LogfileIndex(FilenamePolicy(tmp_path / "app.log"))


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).touch()


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------


class TestScan:
    def test_empty_directory(self, index: LogfileIndex) -> None:
        assert index.scan() == []

    def test_one_record_per_valid_file(self, index: LogfileIndex, tmp_path: Path) -> None:
        _touch(tmp_path, "app-20240101.log", "app-20240102.log", "app-20240103.log")
        found = sorted(index.scan(), key=DatedFile.sort_key)
        assert [d.date for d in found] == [
            date(2024, 1, 1),
            date(2024, 1, 2),
            date(2024, 1, 3),
        ]
        assert found[0].path == tmp_path / "app-20240101.log"

    def test_compressed_files_included(self, index: LogfileIndex, tmp_path: Path) -> None:
        _touch(tmp_path, "app-20240101.log.gz", "app-20240102.log")
        found = {d.path.name: d for d in index.scan()}
        assert found["app-20240101.log.gz"].compressed is True
        assert found["app-20240101.log.gz"].date == date(2024, 1, 1)
        assert found["app-20240102.log"].compressed is False

    @pytest.mark.parametrize(
        "name",
        [
            "app.log",
            "app-2024011.log",
            "app-202401011.log",
            "app-2024O101.log",
            "app-20240101.txt",
            "app-20240101.log.bak",
            "app20240101.log",
        ],
    )
    def test_malformed_names_skipped(
        self, index: LogfileIndex, tmp_path: Path, name: str
    ) -> None:
        _touch(tmp_path, name, "app-20240105.log")
        found = index.scan()
        assert [d.path.name for d in found] == ["app-20240105.log"]

    def test_invalid_date_skipped_with_warning(
        self,
        index: LogfileIndex,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        _touch(tmp_path, "app-20241399.log")
        with caplog.at_level(logging.WARNING):
            assert index.scan() == []
        assert "app-20241399.log" in caplog.text

    def test_unrelated_files_ignored_silently(
        self,
        index: LogfileIndex,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        _touch(tmp_path, "other-20240101.log", "notes.txt")
        with caplog.at_level(logging.WARNING):
            assert index.scan() == []
        assert caplog.records == []

    def test_directories_skipped(self, index: LogfileIndex, tmp_path: Path) -> None:
        (tmp_path / "app-20240101.log").mkdir()
        assert index.scan() == []

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        index = LogfileIndex(FilenamePolicy(tmp_path / "missing" / "app.log"))
        with pytest.raises(FileNotFoundError):
            index.scan()

    def test_extensionless_base(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app-20240101", "app-20240102.gz")
        index = LogfileIndex(FilenamePolicy(tmp_path / "app"))
        assert sorted(d.path.name for d in index.scan()) == [
            "app-20240101",
            "app-20240102.gz",
        ]


# ---------------------------------------------------------------------------
# DatedFile
# ---------------------------------------------------------------------------


class TestDatedFile:
    def test_sort_key_breaks_ties_by_name(self) -> None:
        plain = DatedFile(Path("app-20240101.log"), date(2024, 1, 1))
        packed = DatedFile(Path("app-20240101.log.gz"), date(2024, 1, 1))
        assert sorted([packed, plain], key=DatedFile.sort_key) == [plain, packed]

    def test_is_frozen(self) -> None:
        dated = DatedFile(Path("app-20240101.log"), date(2024, 1, 1))
        with pytest.raises((AttributeError, TypeError)):
            dated.date = date(2024, 1, 2)  # type: ignore[misc]

"""Shared fixtures for dated-rotating-sink tests."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest


class FakeClock:
    """Controllable replacement for :meth:`datetime.now`."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 11, 12, 0, 0))

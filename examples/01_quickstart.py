#!/usr/bin/env python3
"""Example: Quickstart — dated-rotating-sink

Minimal working example: open a rotating sink, route the standard logging
module into it, and simulate a day change to trigger rotation, compression
and cleanup.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install dated-rotating-sink
"""
from __future__ import annotations

import logging
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import dated_rotating_sink as drs


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 11, 9, 0)

    def __call__(self) -> datetime:
        return self.now


def main() -> None:
    print(f"dated-rotating-sink version: {drs.__version__}")

    with tempfile.TemporaryDirectory() as directory:
        clock = _Clock()

        # Step 1: Open a sink and attach it to a logger
        sink = drs.RotatingSink(
            Path(directory) / "service.log",
            config=drs.RetentionConfig(max_files=3, compress=True),
            clock=clock,
        )
        handler = drs.attach_handler(sink, "quickstart", fmt="%(levelname)s %(message)s")
        log = logging.getLogger("quickstart")
        log.setLevel(logging.INFO)
        print(f"Writing to {sink.path.name}")

        # Step 2: Log a few records on the first day
        for i in range(3):
            log.info("request %d handled", i)

        # Step 3: Midnight passes; the next record rotates the file
        clock.now += timedelta(days=1)
        log.info("first request of the new day")
        sink.join_maintenance(timeout=5)
        print(f"Rotated to {sink.path.name}")

        handler.close()
        print("\nFiles on disk:")
        for path in sorted(Path(directory).iterdir()):
            print(f"  {path.name}")


if __name__ == "__main__":
    main()

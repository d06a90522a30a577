"""Lightweight logging setup for the CLI."""

import logging
import os
import sys


def configure_logging(level: int | None = None) -> None:
    # Configure root logger once; stderr only, stdout carries fetched values.
    if level is None:
        name = os.getenv("DEPOT_LOG_LEVEL", "WARNING").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

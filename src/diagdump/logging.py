"""Logging setup helpers for diagdump."""

from __future__ import annotations

import logging

LOGGER_NAME = "diagdump"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(LOGGER_NAME).setLevel(level)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)

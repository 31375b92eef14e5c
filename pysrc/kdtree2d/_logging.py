# _logging.py
"""Package logger shared by the index modules."""

from __future__ import annotations

import logging

LOGGER_NAME = "kdtree2d"

_base = logging.getLogger(LOGGER_NAME)

if not _base.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(name)s] %(levelname)s: %(message)s")
    handler.setFormatter(formatter)
    _base.addHandler(handler)
    _base.setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    return _base if name is None else _base.getChild(str(name))


def set_debug(enabled: bool) -> None:
    _base.setLevel(logging.DEBUG if enabled else logging.WARNING)

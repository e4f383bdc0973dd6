"""Structured logging helpers."""

from __future__ import annotations

import json
import logging
import math
import os
import sys
import time
from typing import Any

import numpy as np

DEBUG_ENV_VAR = 'FEATURE_DROPOUT_DEBUG'


def _jsonable(value: Any) -> Any:
    # nan and inf metrics are logged as null
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def json_log(message: str, **extra: Any) -> str:
    """
    Return a JSON-formatted log string.

    numpy scalars are unwrapped, non-finite floats become ``null`` and any
    other value json cannot encode (paths, for instance) is written as str.
    """
    payload = {'ts': time.time(), 'msg': message, **_jsonable(extra)}
    return json.dumps(payload, ensure_ascii=False, allow_nan=False, default=str)


class _StdoutHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stdout`` is when the record is emitted."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger following project conventions."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = _StdoutHandler()
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)

    level = logging.DEBUG if os.getenv(DEBUG_ENV_VAR) else logging.INFO
    logger.setLevel(level)
    return logger

"""Logging setup for the smoke runner.

Shares the server's JSON line format but leaves uvicorn alone and quiets
httpx. Idempotent: calling setup_logging() multiple times won't duplicate
handlers.
"""
from __future__ import annotations

import logging
import os
import sys

from bookserver.logging_conf import JsonFormatter, get_logger

__all__ = ["setup_logging", "get_logger"]

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | int = _DEFAULT_LEVEL) -> None:
    root = logging.getLogger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if root.handlers:
        return
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    root.setLevel(level)
    root.addHandler(handler)
    # httpx logs every request at INFO; the summary already covers that.
    logging.getLogger("httpx").setLevel(logging.WARNING)

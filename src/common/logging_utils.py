"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point for the CLI plus the small
helpers every module uses to emit structured DEBUG traces: ``extra_context``
builds the ``extra=`` mapping, ``is_debug_enabled`` guards expensive traces,
``safe_url`` strips credentials before URLs reach a log line, and ``Timer``
measures durations.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_HANDLER_MARKER = "_added_by_configure_logging"
_SENSITIVE_KEYS = ("token", "key", "secret", "password", "auth", "signature")


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level`` when given, otherwise from the
    ``AUTOUPDATER_LOG_LEVEL`` environment variable, defaulting to INFO.
    Repeated calls replace the handlers installed by earlier calls.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    root = logging.getLogger()
    root.setLevel(level_value)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(Constants.LOG_FORMAT)
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when ``logger`` would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping fields whose value is None."""
    return {key: value for key, value in fields.items() if value is not None}


def redact(value: str) -> str:
    """Mask everything but the first and last two characters of ``value``."""
    if len(value) <= 4:
        return "****"
    return f"{value[:2]}****{value[-2:]}"


def safe_url(url: str) -> str:
    """Return ``url`` without userinfo and with sensitive query values masked."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    query = parts.query
    if query:
        cleaned = []
        for pair in query.split("&"):
            name, sep, value = pair.partition("=")
            if sep and any(marker in name.lower() for marker in _SENSITIVE_KEYS):
                value = redact(value)
            cleaned.append(f"{name}{sep}{value}")
        query = "&".join(cleaned)
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed time so far (or total once the block exited)."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)

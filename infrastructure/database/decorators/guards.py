"""
Repository Operation Guards
===========================

These decorators fix the failure contract of every repository method:

- ``read_guard(fallback)``: a storage error is logged and the method returns
  ``fallback`` (a callable such as ``list`` or ``dict`` is called so each
  failure gets a fresh object). Reads never raise.
- ``write_guard``: a storage error is logged and the method returns
  ``False``. Writes report success or failure as a boolean only.
- ``insert_guard``: inserts that hand back the new row id return ``None``
  on a storage error.

Architecture:
    Service -> Repository method -> @read_guard / @write_guard -> SQLite
"""

from __future__ import annotations

import functools
import logging
import sqlite3
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

STORAGE_ERRORS: tuple[type[BaseException], ...] = (sqlite3.Error,)


def _resolve(fallback: Any) -> Any:
    return fallback() if callable(fallback) else fallback


def read_guard(fallback: Any = None) -> Callable[[F], F]:
    """Degrade a read to ``fallback`` when the storage layer fails."""

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except STORAGE_ERRORS as exc:
                logger.error("Read %s failed: %s", fn.__qualname__, exc)
                return _resolve(fallback)

        return cast(F, wrapper)

    return decorator


def write_guard(fn: F) -> F:
    """Turn a storage failure during a write into ``False``."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> bool:
        try:
            return bool(fn(*args, **kwargs))
        except STORAGE_ERRORS as exc:
            logger.error("Write %s failed: %s", fn.__qualname__, exc)
            return False

    return cast(F, wrapper)


def insert_guard(fn: F) -> F:
    """Like ``write_guard`` for inserts that return the new row id: failure is ``None``."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except STORAGE_ERRORS as exc:
            logger.error("Insert %s failed: %s", fn.__qualname__, exc)
            return None

    return cast(F, wrapper)

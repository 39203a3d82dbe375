from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.exceptions import DuplicateRecordError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def unique_violation_as_duplicate():
    """Re-raise MySQL duplicate-key errors as DuplicateRecordError."""
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if getattr(e, "errno", None) == MYSQL_DUPLICATE_KEY_ERRNO:
            raise DuplicateRecordError(str(e)) from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_placeholders(values: Iterable[object]) -> str:
    """'%s,%s,...' for an IN (...) clause; callers must not pass an empty list."""
    n = len(list(values))
    if n == 0:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * n)

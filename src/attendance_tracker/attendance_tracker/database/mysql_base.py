from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, label: str = "query", dictionary: bool = True):
    """Open a connection + cursor, commit on success, roll back on error.

    Driver errors are re-raised as StoreError. When the factory has an
    observer, the elapsed time of the whole block is reported under `label`.
    """

    started = time.perf_counter()
    success = False
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        _report(conn_factory, label, started, success)
        raise StoreError(f"Cannot connect to database: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
            success = True
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StoreError(f"Database error during {label}: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
        _report(conn_factory, label, started, success)


def _report(conn_factory: DatabaseConnection, label: str, started: float, success: bool) -> None:
    observer = conn_factory.observer
    if observer is None:
        return
    duration_ms = (time.perf_counter() - started) * 1000.0
    observer.track_db_query(label, duration_ms, success)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])

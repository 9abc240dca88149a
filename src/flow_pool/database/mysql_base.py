from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Errors that mean "the store could not answer", as opposed to a bad statement.
TRANSIENT_ERRORS = (mysql_errors.InterfaceError, mysql_errors.OperationalError)


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error as exc:
        logger.warning("rollback failed: %s", exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except TRANSIENT_ERRORS as exc:
        raise StoreUnavailableError(f"Database unavailable: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except TRANSIENT_ERRORS as exc:
        _rollback_quietly(conn)
        raise StoreUnavailableError(f"Database unavailable: {exc}") from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])

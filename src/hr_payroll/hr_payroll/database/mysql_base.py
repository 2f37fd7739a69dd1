from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConcurrentModification, StorageUnavailable, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_LOCK_ERRNOS = {errorcode.ER_LOCK_WAIT_TIMEOUT, errorcode.ER_LOCK_DEADLOCK}


def _translate(exc: mysql.connector.Error) -> Exception:
    if getattr(exc, "errno", None) in _LOCK_ERRNOS:
        return ConcurrentModification(f"Row lock not acquired: {exc.msg}")
    return StorageUnavailable(f"Database unavailable: {exc.msg}")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Open a connection and cursor for a single unit of work.

    Commits when the block exits normally and rolls back otherwise, so a
    failed write never leaves partial rows behind.
    """
    try:
        conn = conn_factory.connect()
    except (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError) as exc:
        logger.error("database connect failed: %s", exc)
        raise _translate(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except (mysql.connector.errors.OperationalError, mysql.connector.errors.InterfaceError) as exc:
        conn.rollback()
        raise _translate(exc) from exc
    except mysql.connector.errors.IntegrityError as exc:
        conn.rollback()
        if getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY:
            raise ValidationError("Already recorded") from exc
        raise
    except mysql.connector.errors.DatabaseError as exc:
        conn.rollback()
        if getattr(exc, "errno", None) in _LOCK_ERRNOS:
            raise _translate(exc) from exc
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")

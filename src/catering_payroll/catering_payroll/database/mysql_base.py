from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import format_minutes, normalize_time
from ..core.constants import MINUTES_PER_DAY
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, roll back on any error.

    Multi-row writes issued inside a single ``with`` block are therefore atomic.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        logger.debug("rolling back transaction on %s", conn_factory.config.describe())
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def mysql_time_to_hhmm(value: Any) -> Optional[str]:
    """Render a TIME column as ``HH:mm``.

    mysql-connector hands TIME back as ``timedelta``; other drivers and string
    columns may give ``time`` or ``'08:30:00'``.
    """
    if value is None:
        return None
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60
        return format_minutes(minutes % MINUTES_PER_DAY)
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return normalize_time(value) or None

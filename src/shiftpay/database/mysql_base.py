"""Cursor and row helpers shared by the MySQL repositories."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import parse_clock
from .connection import ConnectionFactory


@contextmanager
def db_cursor(factory: ConnectionFactory):
    """Yield ``(conn, dict_cursor)``; commit on success, roll back on any error."""

    conn = factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def in_clause(values: Sequence[Any]) -> str:
    """``%s`` placeholders for ``IN (...)``; callers skip the query when empty."""
    return ",".join(["%s"] * len(values))


def optional_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as Decimal; NULL stays None."""
    return None if value is None else float(value)


def to_date(value: Any) -> Optional[date]:
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, datetime):
        return value.date()
    return date.fromisoformat(str(value))


def to_clock(value: Any) -> Optional[time]:
    # The C extension returns TIME columns as timedelta (they may exceed 24h).
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)
    return parse_clock(value)

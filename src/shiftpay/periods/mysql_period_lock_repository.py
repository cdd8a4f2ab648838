from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..core.constants import LOCKED_PERIOD_SETTING
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchone
from .model import PayrollPeriod, PeriodLock
from .repository import PeriodLockRepository


class MySQLPeriodLockRepository(PeriodLockRepository):
    """Keeps the lock as a JSON document in the key/value ``settings`` table."""

    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get(self) -> Optional[PeriodLock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_value FROM settings WHERE setting_key=%s", (LOCKED_PERIOD_SETTING,))
            r = fetchone(cur)
        if not r or not r.get("setting_value"):
            return None

        data = json.loads(r["setting_value"])
        return PeriodLock(
            period=PayrollPeriod(start=parse_iso_date(data["start"]), end=parse_iso_date(data["end"])),
            locked_at=datetime.fromisoformat(data["locked_at"]),
            locked_by=data.get("locked_by") or "",
        )

    def save(self, lock: Optional[PeriodLock]) -> None:
        value = None
        if lock is not None:
            value = json.dumps(
                {
                    "start": lock.period.start.isoformat(),
                    "end": lock.period.end.isoformat(),
                    "locked_at": lock.locked_at.isoformat(timespec="seconds"),
                    "locked_by": lock.locked_by,
                }
            )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_key, setting_value) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (LOCKED_PERIOD_SETTING, value),
            )

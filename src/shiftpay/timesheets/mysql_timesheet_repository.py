from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DayType, EntryStatus
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, to_clock, to_date
from .model import TimesheetEntry
from .repository import TimesheetRepository

_COLUMNS = "entry_id, employee_id, work_date, clock_in, clock_out, break_minutes, day_type, status, note"


def _row_to_entry(r: Dict[str, Any]) -> TimesheetEntry:
    return TimesheetEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        work_date=to_date(r["work_date"]),
        clock_in=to_clock(r.get("clock_in")),
        clock_out=to_clock(r.get("clock_out")),
        break_minutes=int(r.get("break_minutes") or 0),
        day_type=DayType(r.get("day_type") or DayType.WORK.value),
        status=EntryStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimesheetEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timesheet_entries WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_for_period(
        self,
        *,
        employee_ids: Sequence[int],
        start_date: date,
        end_date: date,
        status: Optional[EntryStatus] = EntryStatus.ACTIVE,
    ) -> Sequence[TimesheetEntry]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []
        placeholders = in_clause(ids)
        sql = f"""
            SELECT {_COLUMNS}
            FROM timesheet_entries
            WHERE employee_id IN ({placeholders}) AND work_date BETWEEN %s AND %s
        """
        params: list = [*ids, start_date, end_date]
        if status is not None:
            sql += " AND status=%s"
            params.append(status.value)
        sql += " ORDER BY employee_id, work_date"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_entry(r) for r in fetchall(cur)]

    def upsert(self, entry: TimesheetEntry) -> TimesheetEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timesheet_entries
                    (employee_id, work_date, clock_in, clock_out, break_minutes, day_type, status, note)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    entry_id=LAST_INSERT_ID(entry_id),
                    clock_in=VALUES(clock_in),
                    clock_out=VALUES(clock_out),
                    break_minutes=VALUES(break_minutes),
                    day_type=VALUES(day_type),
                    status=VALUES(status),
                    note=VALUES(note)
                """,
                (
                    entry.employee_id,
                    entry.work_date,
                    entry.clock_in,
                    entry.clock_out,
                    int(entry.break_minutes),
                    entry.day_type.value,
                    entry.status.value,
                    entry.note,
                ),
            )
            return replace(entry, entry_id=int(cur.lastrowid))

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, optional_float, to_clock
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, hourly_rate, per_shift_amount, salary,
    shift_start, shift_end, break_minutes, is_active
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        hourly_rate=optional_float(r.get("hourly_rate")),
        per_shift_amount=optional_float(r.get("per_shift_amount")),
        salary=optional_float(r.get("salary")),
        shift_start=to_clock(r["shift_start"]),
        shift_end=to_clock(r["shift_end"]),
        break_minutes=int(r.get("break_minutes") or 0),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_many(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []
        placeholders = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders})", tuple(ids))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_all(self, *, active_only: bool = True) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees"
        if active_only:
            sql += " WHERE is_active=1"
        sql += " ORDER BY name"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [_row_to_employee(r) for r in fetchall(cur)]

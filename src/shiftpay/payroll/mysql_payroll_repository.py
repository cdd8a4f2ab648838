from __future__ import annotations

import json
from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.serializers import to_json
from ..core.enums import CompensationMode, DayType, NightStatus, PaymentStatus
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, optional_float, to_date
from .model import DayBreakdown, PayrollEntry
from .repository import PayrollRepository

_MONEY_FIELDS = (
    "hourly_rate",
    "base_pay",
    "overtime_pay",
    "gross_pay",
    "total_deductions",
    "advance_deductions",
    "loan_deductions",
    "net_pay",
    "adjustment_amount",
)

_INT_FIELDS = (
    "working_days",
    "total_billable_minutes",
    "total_regular_minutes",
    "total_overtime_minutes",
)

_COLUMNS = (
    "entry_id, employee_id, period_start, period_end, compensation_mode, "
    + ", ".join(_MONEY_FIELDS + _INT_FIELDS)
    + ", days_json, status, paid_at, paid_net_pay, is_adjusted, created_at, updated_at"
)


def _days_from_json(raw: Optional[str]) -> tuple[DayBreakdown, ...]:
    if not raw:
        return ()
    return tuple(
        DayBreakdown(
            work_date=parse_iso_date(d["work_date"]),
            day_type=DayType(d["day_type"]),
            billable_minutes=int(d["billable_minutes"]),
            regular_minutes=int(d["regular_minutes"]),
            overtime_minutes=int(d["overtime_minutes"]),
            dinner_break_deduction=int(d["dinner_break_deduction"]),
            night_status=NightStatus(d["night_status"]) if d.get("night_status") else None,
        )
        for d in json.loads(raw)
    )


def _row_to_entry(r: Dict[str, Any]) -> PayrollEntry:
    return PayrollEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        period_start=to_date(r["period_start"]),
        period_end=to_date(r["period_end"]),
        compensation_mode=CompensationMode(r["compensation_mode"]),
        **{name: float(r[name] or 0) for name in _MONEY_FIELDS},
        **{name: int(r[name] or 0) for name in _INT_FIELDS},
        days=_days_from_json(r.get("days_json")),
        status=PaymentStatus(r["status"]),
        paid_at=r.get("paid_at"),
        paid_net_pay=optional_float(r.get("paid_net_pay")),
        is_adjusted=bool(r.get("is_adjusted")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def get_for_employee_and_period(self, employee_id: int, period_start: date) -> Optional[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_entries WHERE employee_id=%s AND period_start=%s",
                (int(employee_id), period_start),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_for_period(
        self,
        period_start: date,
        *,
        employee_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[PayrollEntry]:
        sql = f"SELECT {_COLUMNS} FROM payroll_entries WHERE period_start=%s"
        params: list = [period_start]
        if employee_ids is not None:
            ids = [int(i) for i in employee_ids]
            if not ids:
                return []
            sql += f" AND employee_id IN ({in_clause(ids)})"
            params.extend(ids)
        sql += " ORDER BY employee_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_covering(self, employee_id: int, day: date) -> Sequence[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_entries
                WHERE employee_id=%s AND period_start<=%s AND period_end>=%s
                ORDER BY period_start
                """,
                (int(employee_id), day, day),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_paid_for_employee(self, employee_id: int) -> Sequence[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_entries
                WHERE employee_id=%s AND status=%s
                ORDER BY period_start DESC
                """,
                (int(employee_id), PaymentStatus.PAID.value),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def save(self, entry: PayrollEntry) -> PayrollEntry:
        values = {
            "employee_id": entry.employee_id,
            "period_start": entry.period_start,
            "period_end": entry.period_end,
            "compensation_mode": entry.compensation_mode.value,
            **{name: getattr(entry, name) for name in _MONEY_FIELDS + _INT_FIELDS},
            "days_json": json.dumps(to_json(list(entry.days))),
            "status": entry.status.value,
            "paid_at": entry.paid_at,
            "paid_net_pay": entry.paid_net_pay,
            "is_adjusted": int(entry.is_adjusted),
            "created_at": entry.created_at or now_local(),
            "updated_at": entry.updated_at or entry.created_at or now_local(),
        }
        columns = ", ".join(values)
        placeholders = in_clause(values)
        # created_at is written once, on insert
        updates = ", ".join(
            f"{c}=VALUES({c})" for c in values if c not in ("employee_id", "period_start", "created_at")
        )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO payroll_entries ({columns})
                VALUES ({placeholders})
                ON DUPLICATE KEY UPDATE entry_id=LAST_INSERT_ID(entry_id), {updates}
                """,
                tuple(values.values()),
            )
            entry_id = int(cur.lastrowid)

        saved = self.get_by_id(entry_id)
        return saved or replace(entry, entry_id=entry_id)

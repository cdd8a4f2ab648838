from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AdvanceStatus, DeductionStatus, DeductionType
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, to_date
from .model import Advance, Deduction
from .repository import AdvanceRepository, DeductionRepository

_DEDUCTION_COLUMNS = """
    deduction_id, employee_id, period_start, period_end, deduction_type,
    amount, description, status, linked_advance_id
"""


def _row_to_deduction(r: Dict[str, Any]) -> Deduction:
    return Deduction(
        deduction_id=int(r["deduction_id"]),
        employee_id=int(r["employee_id"]),
        period_start=to_date(r["period_start"]),
        period_end=to_date(r["period_end"]),
        deduction_type=DeductionType(r["deduction_type"]),
        amount=float(r["amount"]),
        description=r.get("description"),
        status=DeductionStatus(r["status"]),
        linked_advance_id=int(r["linked_advance_id"]) if r.get("linked_advance_id") is not None else None,
    )


def _row_to_advance(r: Dict[str, Any]) -> Advance:
    return Advance(
        advance_id=int(r["advance_id"]),
        employee_id=int(r["employee_id"]),
        amount=float(r["amount"]),
        date_issued=to_date(r["date_issued"]),
        reason=r.get("reason"),
        status=AdvanceStatus(r["status"]),
    )


class MySQLDeductionRepository(DeductionRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, deduction_id: int) -> Optional[Deduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_DEDUCTION_COLUMNS} FROM deductions WHERE deduction_id=%s", (int(deduction_id),))
            r = fetchone(cur)
            return _row_to_deduction(r) if r else None

    def list_for_period(
        self,
        *,
        employee_ids: Sequence[int],
        period_start: date,
        period_end: date,
        status: Optional[DeductionStatus] = DeductionStatus.ACTIVE,
    ) -> Sequence[Deduction]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []
        placeholders = in_clause(ids)
        sql = f"""
            SELECT {_DEDUCTION_COLUMNS}
            FROM deductions
            WHERE employee_id IN ({placeholders}) AND period_start=%s AND period_end=%s
        """
        params: list = [*ids, period_start, period_end]
        if status is not None:
            sql += " AND status=%s"
            params.append(status.value)
        sql += " ORDER BY deduction_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_deduction(r) for r in fetchall(cur)]

    def list_for_advance(self, advance_id: int) -> Sequence[Deduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_DEDUCTION_COLUMNS} FROM deductions WHERE linked_advance_id=%s",
                (int(advance_id),),
            )
            return [_row_to_deduction(r) for r in fetchall(cur)]

    def create(self, deduction: Deduction) -> Deduction:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO deductions
                    (employee_id, period_start, period_end, deduction_type, amount, description, status, linked_advance_id)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    deduction.employee_id,
                    deduction.period_start,
                    deduction.period_end,
                    deduction.deduction_type.value,
                    deduction.amount,
                    deduction.description,
                    deduction.status.value,
                    deduction.linked_advance_id,
                ),
            )
            return replace(deduction, deduction_id=int(cur.lastrowid))

    def set_status(self, deduction_id: int, status: DeductionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE deductions SET status=%s WHERE deduction_id=%s", (status.value, int(deduction_id)))
            return cur.rowcount > 0


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, advance_id: int) -> Optional[Advance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, employee_id, amount, date_issued, reason, status
                FROM advances WHERE advance_id=%s
                """,
                (int(advance_id),),
            )
            r = fetchone(cur)
            return _row_to_advance(r) if r else None

    def list(self, *, employee_id: Optional[int] = None) -> Sequence[Advance]:
        sql = "SELECT advance_id, employee_id, amount, date_issued, reason, status FROM advances"
        params: tuple = ()
        if employee_id is not None:
            sql += " WHERE employee_id=%s"
            params = (int(employee_id),)
        sql += " ORDER BY date_issued DESC, advance_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_advance(r) for r in fetchall(cur)]

    def create(self, advance: Advance) -> Advance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO advances(employee_id, amount, date_issued, reason, status)
                VALUES (%s,%s,%s,%s,%s)
                """,
                (advance.employee_id, advance.amount, advance.date_issued, advance.reason, advance.status.value),
            )
            return replace(advance, advance_id=int(cur.lastrowid))

    def set_status(self, advance_id: int, status: AdvanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE advances SET status=%s WHERE advance_id=%s", (status.value, int(advance_id)))
            return cur.rowcount > 0

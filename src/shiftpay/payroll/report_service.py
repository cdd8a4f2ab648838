from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.money import round_money
from ..employees.repository import EmployeeRepository
from ..periods.model import PayrollPeriod
from .service import PayrollService

REGISTER_FIELDS = [
    "employee_id",
    "name",
    "compensation_mode",
    "working_days",
    "worked_hours",
    "overtime_hours",
    "base_pay",
    "overtime_pay",
    "gross_pay",
    "advance_deductions",
    "loan_deductions",
    "total_deductions",
    "net_pay",
    "status",
    "adjustment_amount",
]


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class PayrollReportService:
    """Payroll register for one period: one row per employee plus column totals."""

    def __init__(self, payroll: PayrollService, employees: EmployeeRepository):
        self._payroll = payroll
        self._employees = employees

    def build_register(
        self,
        period: PayrollPeriod,
        *,
        employee_ids: Optional[Sequence[int]] = None,
        refresh: bool = False,
    ) -> ReportData:
        employees = {e.employee_id: e for e in self._employees.list_all()}
        ids = list(employee_ids) if employee_ids is not None else list(employees)
        entries = self._payroll.recalculate_bulk(ids, period, force=refresh)

        rows: list[dict] = []
        for entry in entries:
            employee = employees.get(entry.employee_id)
            rows.append(
                {
                    "employee_id": entry.employee_id,
                    "name": employee.name if employee else "-",
                    "compensation_mode": entry.compensation_mode.value,
                    "working_days": entry.working_days,
                    "worked_hours": _hhmm(entry.total_billable_minutes),
                    "overtime_hours": _hhmm(entry.total_overtime_minutes),
                    "base_pay": entry.base_pay,
                    "overtime_pay": entry.overtime_pay,
                    "gross_pay": entry.gross_pay,
                    "advance_deductions": entry.advance_deductions,
                    "loan_deductions": entry.loan_deductions,
                    "total_deductions": entry.total_deductions,
                    "net_pay": entry.net_pay,
                    "status": entry.status.value,
                    "adjustment_amount": entry.adjustment_amount if entry.is_adjusted else 0.0,
                }
            )

        rows.sort(key=lambda r: r["name"])
        summary = {
            "period_start": period.start.isoformat(),
            "period_end": period.end.isoformat(),
            "employees": len(rows),
            "gross_pay": round_money(sum(r["gross_pay"] for r in rows)),
            "total_deductions": round_money(sum(r["total_deductions"] for r in rows)),
            "net_pay": round_money(sum(r["net_pay"] for r in rows)),
            "paid": sum(1 for r in rows if r["status"] == "Paid"),
        }
        return ReportData(rows=rows, summary=summary)

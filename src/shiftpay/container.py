from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .core.constants import PERIOD_ANCHOR, PERIOD_LENGTH_DAYS
from .database.connection import ConnectionFactory, DBConfig
from .deductions.advance_service import AdvanceService
from .deductions.mysql_deduction_repository import MySQLAdvanceRepository, MySQLDeductionRepository
from .deductions.repository import AdvanceRepository, DeductionRepository
from .deductions.service import DeductionService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.calculator.standard_calculator import StandardShiftCalculator
from .payroll.model import PayrollPolicy
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.report_service import PayrollReportService
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .periods.mysql_period_lock_repository import MySQLPeriodLockRepository
from .periods.repository import PeriodLockRepository
from .periods.service import PeriodService
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    timesheets_repo: TimesheetRepository
    deductions_repo: DeductionRepository
    advances_repo: AdvanceRepository
    payroll_repo: PayrollRepository
    period_locks_repo: PeriodLockRepository

    timesheet_service: TimesheetService
    deduction_service: DeductionService
    advance_service: AdvanceService
    period_service: PeriodService
    payroll_service: PayrollService
    payroll_report_service: PayrollReportService

    conn: Optional[ConnectionFactory] = None


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    timesheets_repo: TimesheetRepository,
    deductions_repo: DeductionRepository,
    advances_repo: AdvanceRepository,
    payroll_repo: PayrollRepository,
    period_locks_repo: PeriodLockRepository,
    policy: Optional[PayrollPolicy] = None,
    period_anchor: date = PERIOD_ANCHOR,
    period_days: int = PERIOD_LENGTH_DAYS,
    conn: Optional[ConnectionFactory] = None,
) -> Container:
    period_service = PeriodService(period_locks_repo, anchor=period_anchor, length_days=period_days)
    payroll_service = PayrollService(
        employees_repo,
        timesheets_repo,
        deductions_repo,
        payroll_repo,
        calculator=StandardShiftCalculator(),
        policy=policy or PayrollPolicy(),
    )

    return Container(
        employees_repo=employees_repo,
        timesheets_repo=timesheets_repo,
        deductions_repo=deductions_repo,
        advances_repo=advances_repo,
        payroll_repo=payroll_repo,
        period_locks_repo=period_locks_repo,
        timesheet_service=TimesheetService(timesheets_repo, employees_repo),
        deduction_service=DeductionService(deductions_repo, employees_repo),
        advance_service=AdvanceService(advances_repo, deductions_repo, employees_repo, period_service),
        period_service=period_service,
        payroll_service=payroll_service,
        payroll_report_service=PayrollReportService(payroll_service, employees_repo),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    policy: Optional[PayrollPolicy] = None,
    period_anchor: date = PERIOD_ANCHOR,
    period_days: int = PERIOD_LENGTH_DAYS,
) -> Container:
    conn = ConnectionFactory(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        timesheets_repo=MySQLTimesheetRepository(conn),
        deductions_repo=MySQLDeductionRepository(conn),
        advances_repo=MySQLAdvanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        period_locks_repo=MySQLPeriodLockRepository(conn),
        policy=policy,
        period_anchor=period_anchor,
        period_days=period_days,
        conn=conn,
    )

from datetime import time

from shiftpay.core.enums import CompensationMode
from shiftpay.employees.model import Employee
from shiftpay.payroll.factory import PayStrategyFactory
from shiftpay.payroll.strategies.hourly_strategy import HourlyPayStrategy
from shiftpay.payroll.strategies.per_shift_strategy import PerShiftPayStrategy
from shiftpay.payroll.strategies.salary_strategy import SalaryPayStrategy


def test_factory_picks_strategy_by_compensation_inputs():
    factory = PayStrategyFactory()

    per_shift = Employee(employee_id=1, name="A", per_shift_amount=500.0, hourly_rate=40.0)
    hourly = Employee(employee_id=2, name="B", hourly_rate=40.0)
    salaried = Employee(employee_id=3, name="C", salary=9000.0)

    assert isinstance(factory.for_employee(per_shift, working_days=3), PerShiftPayStrategy)
    assert isinstance(factory.for_employee(hourly, working_days=3), HourlyPayStrategy)
    assert isinstance(factory.for_employee(salaried, working_days=3), SalaryPayStrategy)


def test_per_shift_employee_without_shifts_falls_back_to_hourly_rate():
    employee = Employee(employee_id=1, name="A", per_shift_amount=500.0, hourly_rate=40.0)

    assert isinstance(PayStrategyFactory().for_employee(employee, working_days=0), HourlyPayStrategy)


def test_per_shift_with_empty_standard_day_pays_flat_amount():
    employee = Employee(employee_id=1, name="A", per_shift_amount=400.0, shift_start=time(9), shift_end=time(9))

    pay = PerShiftPayStrategy(PayStrategyFactory().calculator).base_pay(employee, worked_minutes=300, working_days=2)

    assert pay.amount == 800.0
    assert pay.hourly_rate == 50.0
    assert pay.mode == CompensationMode.PER_SHIFT


def test_salary_strategy_ignores_hours():
    employee = Employee(employee_id=3, name="C", salary=4800.0)

    pay = SalaryPayStrategy().base_pay(employee, worked_minutes=0, working_days=0)

    assert pay.amount == 4800.0
    assert pay.hourly_rate == 20.0

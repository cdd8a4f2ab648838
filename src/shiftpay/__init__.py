"""shiftpay package.

Timesheet and payroll engine organised by feature modules (employees,
timesheets, deductions, periods, payroll) with a thin Flask controller layer
over service and repository layers.
"""

"""Example: payroll through the service layer, without Flask.

Controllers are thin; the use cases live in the services wired by the container.
"""

import importlib

from shiftpay.container import build_container
from shiftpay.settings import get_settings_module


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    period = container.period_service.current_period()
    for entry in container.payroll_service.recalculate_bulk([1, 2, 3], period):
        print(entry.employee_id, entry.working_days, entry.gross_pay, entry.net_pay, entry.status.value)


if __name__ == "__main__":
    main()

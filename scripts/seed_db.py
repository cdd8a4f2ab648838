from __future__ import annotations

import importlib

from shiftpay.database.bootstrap import ensure_demo_employees
from shiftpay.database.connection import DBConfig
from shiftpay.settings import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    added = ensure_demo_employees(db_config)
    print(f"OK: Seeded demo employees -> {DBConfig.from_dict(db_config).describe()} (added={added})")


if __name__ == "__main__":
    main()

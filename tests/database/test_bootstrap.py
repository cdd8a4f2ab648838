from datetime import date, time, timedelta

from shiftpay.database.bootstrap import SCHEMA_PATH, split_statements
from shiftpay.database.connection import DBConfig
from shiftpay.database.mysql_base import in_clause, to_clock, to_date


def test_schema_creates_every_table():
    statements = list(split_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    created = [s.split("(")[0].split()[-1] for s in statements if s.upper().startswith("CREATE TABLE")]
    assert set(created) == {"employees", "timesheet_entries", "advances", "deductions", "payroll_entries", "settings"}
    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)


def test_payroll_timestamps_are_written_by_the_application():
    assert "ON UPDATE" not in SCHEMA_PATH.read_text(encoding="utf-8").upper()


def test_split_statements_skips_comments_and_blanks():
    sql = "-- header\nCREATE TABLE a (x INT);\n\n-- note\nCREATE TABLE b (y INT);\n"

    assert list(split_statements(sql)) == ["CREATE TABLE a (x INT)", "CREATE TABLE b (y INT)"]


def test_db_config_defaults_and_description():
    cfg = DBConfig.from_dict({"host": "db", "user": "pay", "database": "payroll"})

    assert cfg.port == 3306
    assert cfg.describe() == "pay@db:3306/payroll"
    assert "database" not in cfg.connect_kwargs(with_database=False)


def test_row_converters():
    assert to_clock(timedelta(hours=20, minutes=30)) == time(20, 30)
    assert to_clock("08:15:00") == time(8, 15)
    assert to_clock(None) is None
    assert to_date("2025-12-08") == date(2025, 12, 8)
    assert to_date(date(2025, 12, 8)) == date(2025, 12, 8)
    assert in_clause([1, 2, 3]) == "%s,%s,%s"

"""Schema and demo-data setup, used on startup and by ``scripts/``."""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import Iterator

from .connection import ConnectionFactory, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEMO_EMPLOYEES = (
    # name, hourly_rate, per_shift_amount, salary, shift_start, shift_end, break_minutes
    ("Ravi Kumar", None, 800, None, "09:00", "18:00", 60),
    ("Anita Shah", 120, None, None, "09:00", "18:00", 60),
    ("Suresh Patel", None, None, 24000, "10:00", "19:00", 60),
)


def split_statements(sql: str) -> Iterator[str]:
    """DDL statements of a schema file.

    ``--`` comment lines are dropped; statements end at ``;``. The schema holds
    no string literals containing ``;``.
    """

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for stmt in "\n".join(lines).split(";"):
        if stmt.strip():
            yield stmt.strip()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(ConnectionFactory(target).connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    """Create the database and every table; safe to re-run (``IF NOT EXISTS``)."""

    ensure_database_exists(db_config)
    factory = ConnectionFactory(DBConfig.from_dict(db_config))

    with closing(factory.connect()) as conn:
        cur = conn.cursor()
        for stmt in split_statements(Path(schema_path).read_text(encoding="utf-8")):
            cur.execute(stmt)
        conn.commit()
    logger.info("Schema applied to %s", factory.config.describe())


def ensure_demo_employees(db_config: dict) -> int:
    """Insert the demo employees if missing. Returns how many were added."""

    added = 0
    with closing(ConnectionFactory(DBConfig.from_dict(db_config)).connect()) as conn:
        cur = conn.cursor()
        for name, hourly, per_shift, salary, start, end, break_minutes in DEMO_EMPLOYEES:
            cur.execute("SELECT employee_id FROM employees WHERE name=%s", (name,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO employees (name, hourly_rate, per_shift_amount, salary, shift_start, shift_end, break_minutes)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (name, hourly, per_shift, salary, start, end, break_minutes),
            )
            added += 1
        conn.commit()
    if added:
        logger.info("Added %d demo employees", added)
    return added


def list_tables(db_config: dict) -> list[str]:
    with closing(ConnectionFactory(DBConfig.from_dict(db_config)).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

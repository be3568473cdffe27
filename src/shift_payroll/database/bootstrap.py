from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter (handles ';' inside quotes, skips '--' comment lines).
    buf: list[str] = []
    in_single = False

    for line in sql.splitlines(keepends=True):
        if not in_single and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if ch == "'":
                in_single = not in_single
            if ch == ";" and not in_single:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(config: DBConfig) -> None:
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s@%s/%s", config.user, config.host, config.database)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

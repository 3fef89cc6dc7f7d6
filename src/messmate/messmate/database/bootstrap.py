from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _apply_sql_file(db_config: dict, path: Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, Path(schema_path))
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, Path(seed_path))
    logger.info("Applied seed %s", seed_path)


def ensure_admin_accounts(db_config: dict, *, admin_emails: Sequence[str], default_password: str) -> int:
    """Make sure every configured admin e-mail has an account with role=admin.

    Existing accounts are promoted; missing ones are created with ``default_password``.
    Returns how many accounts were touched.
    """

    emails = sorted({e.strip().lower() for e in admin_emails if e and e.strip()})
    if not emails:
        return 0

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    touched = 0
    try:
        cur = conn.cursor(dictionary=True)
        for email in emails:
            cur.execute("SELECT user_id, role FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                if existing["role"] != Role.ADMIN.value:
                    cur.execute("UPDATE users SET role=%s WHERE user_id=%s", (Role.ADMIN.value, existing["user_id"]))
                    touched += 1
                continue

            cur.execute(
                """
                INSERT INTO users (email, name, password_hash, role, created_by)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (
                    email,
                    email.split("@")[0],
                    generate_password_hash(default_password),
                    Role.ADMIN.value,
                    "bootstrap",
                ),
            )
            touched += 1

        conn.commit()
    finally:
        conn.close()

    logger.info("Admin accounts ensured (%d changed)", touched)
    return touched


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

from __future__ import annotations

import logging
import re
import secrets
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector

from ..auth.passwords.verifier import hash_password
from ..core.constants import DEFAULT_DEPARTMENT_NAME
from .connection import DBConfig

logger = logging.getLogger(__name__)

# (name, email, password, is_admin)
DEMO_ACCOUNTS: tuple[tuple[str, str, str, bool], ...] = (
    ("Protocol Admin", "admin@protocol.local", "admin123", True),
    ("Protocol Member", "member@protocol.local", "member123", False),
)


@contextmanager
def _connect(db_config: dict, *, with_database: bool = True) -> Iterator:
    target = DBConfig.from_dict(db_config)
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "connection_timeout": target.connect_timeout,
        "use_pure": True,
    }
    if with_database:
        params["database"] = target.database
    conn = mysql.connector.connect(**params)
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the script.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    count = 0
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    return count


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    with _connect(db_config, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %s schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("Applied %s seed statements from %s", count, seed_path)


def ensure_demo_accounts(db_config: dict, *, department_name: str = DEFAULT_DEPARTMENT_NAME) -> None:
    """Create (or reset) the demo admin and member and link them to the department."""
    with _connect(db_config) as conn:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT dept_id FROM departments WHERE name=%s", (department_name,))
        dept = cur.fetchone()
        if not dept:
            cur.execute("INSERT INTO departments (name) VALUES (%s)", (department_name,))
            dept_id = int(cur.lastrowid)
        else:
            dept_id = int(dept["dept_id"])

        for name, email, password, is_admin in DEMO_ACCOUNTS:
            password_hash = hash_password(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = existing["user_id"]
                cur.execute("UPDATE users SET name=%s, password=%s WHERE user_id=%s", (name, password_hash, user_id))
            else:
                user_id = secrets.token_hex(12)
                cur.execute(
                    "INSERT INTO users (user_id, email, name, password) VALUES (%s, %s, %s, %s)",
                    (user_id, email, name, password_hash),
                )

            cur.execute(
                """
                INSERT INTO department_members (dept_id, user_id, is_admin)
                VALUES (%s, %s, %s)
                ON DUPLICATE KEY UPDATE is_admin=VALUES(is_admin)
                """,
                (dept_id, user_id, 1 if is_admin else 0),
            )

        conn.commit()
    logger.info("Demo accounts ready for %s", department_name)


def list_tables(db_config: dict) -> list[str]:
    with _connect(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

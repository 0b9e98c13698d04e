from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DepartmentMembership, User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, name, password, is_super_user
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=str(row["user_id"]),
                email=row["email"],
                name=row.get("name") or "",
                password_hash=row.get("password") or "",
                is_super_user=bool(row.get("is_super_user")),
            )

    def get_department(self, name: str) -> Optional[DepartmentMembership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, name FROM departments WHERE name=%s", (name,))
            dept = fetchone(cur)
            if not dept:
                return None

            cur.execute(
                "SELECT user_id, is_admin FROM department_members WHERE dept_id=%s",
                (int(dept["dept_id"]),),
            )
            rows = fetchall(cur)
            return DepartmentMembership(
                dept_id=int(dept["dept_id"]),
                dept_name=dept["name"],
                admin_ids=frozenset(str(r["user_id"]) for r in rows if r.get("is_admin")),
                member_ids=frozenset(str(r["user_id"]) for r in rows if not r.get("is_admin")),
            )

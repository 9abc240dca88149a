from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, email, full_name, account_code
                FROM users
                WHERE {where}=%s
                """,
                (value,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=str(row["user_id"]),
                email=row["email"],
                full_name=row.get("full_name"),
                account_code=row.get("account_code"),
            )

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one("user_id", str(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def set_account_code(self, user_id: str, code: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET account_code=%s WHERE user_id=%s", (code, str(user_id)))
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when the value is unchanged.
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (str(user_id),))
            return fetchone(cur) is not None

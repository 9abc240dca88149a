from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import RegistrationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Registration
from .repository import RegistrationRepository


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_user(self, user_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT registration_id, user_id, username, email, account_code, status, registered_at, expires_at
                FROM registrations
                WHERE user_id=%s
                ORDER BY registered_at DESC, registration_id DESC
                LIMIT 1
                """,
                (str(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Registration(
                registration_id=int(r["registration_id"]),
                user_id=str(r["user_id"]),
                username=r["username"],
                email=r["email"],
                account_code=r.get("account_code"),
                status=RegistrationStatus(r["status"]),
                registered_at=r["registered_at"],
                expires_at=r["expires_at"],
            )

    def create(
        self,
        *,
        user_id: str,
        username: str,
        email: str,
        account_code: Optional[str],
        registered_at: datetime,
        expires_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registrations(user_id, username, email, account_code, status, registered_at, expires_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(user_id),
                    username,
                    email,
                    account_code,
                    RegistrationStatus.ACTIVE.value,
                    registered_at,
                    expires_at,
                ),
            )
            return int(cur.lastrowid)

    def update_account_code(self, registration_id: int, code: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE registrations SET account_code=%s WHERE registration_id=%s",
                (code, int(registration_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM registrations WHERE registration_id=%s", (int(registration_id),))
            return fetchone(cur) is not None

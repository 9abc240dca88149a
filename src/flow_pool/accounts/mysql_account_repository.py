from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import AccountStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Account, Credentials
from .repository import AccountRepository

_COLUMNS = "account_id, code, email, password, capacity, occupancy, status, created_at, updated_at"


def _to_account(r: dict) -> Account:
    return Account(
        account_id=int(r["account_id"]),
        code=r["code"],
        credentials=Credentials(identity=r["email"], secret=r["password"]),
        capacity=int(r["capacity"]),
        occupancy=int(r["occupancy"]),
        status=AccountStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM flow_accounts WHERE {where}=%s", (value,))
            r = fetchone(cur)
            return _to_account(r) if r else None

    def get_by_id(self, account_id: int) -> Optional[Account]:
        return self._get_one("account_id", int(account_id))

    def get_by_code(self, code: str) -> Optional[Account]:
        return self._get_one("code", code)

    def get_by_email(self, email: str) -> Optional[Account]:
        return self._get_one("email", email)

    def list_all(self) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM flow_accounts ORDER BY created_at DESC, account_id DESC")
            return [_to_account(r) for r in fetchall(cur)]

    def list_by_status(self, status: AccountStatus) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM flow_accounts
                WHERE status=%s
                ORDER BY occupancy ASC, code ASC
                """,
                (status.value,),
            )
            return [_to_account(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        code: str,
        email: str,
        password: str,
        capacity: int,
        status: AccountStatus = AccountStatus.ACTIVE,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO flow_accounts(code, email, password, capacity, occupancy, status)
                    VALUES(%s,%s,%s,%s,0,%s)
                    """,
                    (code, email, password, int(capacity), status.value),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError as exc:
            # Lost a race with another admin adding the same code/email.
            raise ValidationError(f"Code {code} or email already exists in pool") from exc

    def update_details(
        self,
        *,
        account_id: int,
        email: Optional[str] = None,
        password: Optional[str] = None,
        status: Optional[AccountStatus] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if email is not None:
            sets.append("email=%s")
            params.append(email)
        if password is not None:
            sets.append("password=%s")
            params.append(password)
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        sets.append("updated_at=CURRENT_TIMESTAMP")
        params.append(int(account_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE flow_accounts SET {', '.join(sets)} WHERE account_id=%s", tuple(params))
            return cur.rowcount > 0

    def delete_by_id(self, account_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM flow_accounts WHERE account_id=%s", (int(account_id),))
            return cur.rowcount > 0

    # The two methods below are the only writers of `occupancy`. Each is a single
    # guarded UPDATE so the capacity check and the increment happen atomically.

    def try_acquire(self, code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE flow_accounts
                SET occupancy = occupancy + 1
                WHERE code=%s AND status='active' AND occupancy < capacity
                """,
                (code,),
            )
            return cur.rowcount == 1

    def try_release(self, code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE flow_accounts
                SET occupancy = occupancy - 1
                WHERE code=%s AND status='active' AND occupancy > 0
                """,
                (code,),
            )
            return cur.rowcount == 1

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import normalize_code, normalize_email, require_non_empty
from ..core.constants import DEFAULT_ACCOUNT_CAPACITY
from ..core.enums import AccountStatus
from ..core.exceptions import AccountNotFoundError, ValidationError
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Use case: manage the pool of flow accounts (admin)."""

    def __init__(self, accounts: AccountRepository, *, capacity: int = DEFAULT_ACCOUNT_CAPACITY):
        if int(capacity) <= 0:
            raise ValueError("capacity must be a positive integer")
        self._accounts = accounts
        self._capacity = int(capacity)

    def list_accounts(self) -> Sequence[Account]:
        return self._accounts.list_all()

    def get_active_by_code(self, code: str) -> Account:
        code = normalize_code(code)
        account = self._accounts.get_by_code(code)
        if not account or not account.is_active:
            raise AccountNotFoundError(code)
        return account

    def add_account(self, *, email: str, password: str, code: str) -> Account:
        email = normalize_email(email)
        code = normalize_code(code)
        password = require_non_empty(password, "Password")

        if self._accounts.get_by_code(code):
            raise ValidationError(f"Code {code} already exists")
        if self._accounts.get_by_email(email):
            raise ValidationError("Email already exists in pool")

        account_id = self._accounts.create(
            code=code,
            email=email,
            password=password,
            capacity=self._capacity,
        )
        logger.info("added flow account %s (id=%s, capacity=%d)", code, account_id, self._capacity)
        account = self._accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(code)
        return account

    def update_account(
        self,
        account_id: int,
        *,
        email: Optional[str] = None,
        password: Optional[str] = None,
        status: Optional[AccountStatus | str] = None,
    ) -> Account:
        existing = self._accounts.get_by_id(int(account_id))
        if not existing:
            raise AccountNotFoundError(str(account_id), f"Flow account #{account_id} not found")

        if email is not None:
            email = normalize_email(email)
            other = self._accounts.get_by_email(email)
            if other and other.account_id != existing.account_id:
                raise ValidationError("Email already exists in pool")
        if password is not None:
            password = require_non_empty(password, "Password")
        if status is not None and not isinstance(status, AccountStatus):
            try:
                status = AccountStatus(str(status).strip().lower())
            except ValueError:
                raise ValidationError(f"Unknown account status: {status}")

        self._accounts.update_details(
            account_id=existing.account_id,
            email=email,
            password=password,
            status=status,
        )
        if status is not None and status != existing.status:
            logger.info("flow account %s status %s -> %s", existing.code, existing.status.value, status.value)

        updated = self._accounts.get_by_id(existing.account_id)
        if updated is None:
            raise AccountNotFoundError(existing.code)
        return updated

    def remove_account(self, account_id: int) -> None:
        """Physically delete an account.

        Users still bound to its code keep a dangling binding; releasing them is
        a no-op on the ledger side.
        """
        existing = self._accounts.get_by_id(int(account_id))
        if not existing:
            raise AccountNotFoundError(str(account_id), f"Flow account #{account_id} not found")
        if not self._accounts.delete_by_id(existing.account_id):
            raise AccountNotFoundError(existing.code)
        if existing.occupancy:
            logger.warning(
                "removed flow account %s while %d user(s) still hold it",
                existing.code,
                existing.occupancy,
            )
        else:
            logger.info("removed flow account %s", existing.code)

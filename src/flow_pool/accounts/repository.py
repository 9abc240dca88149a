from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AccountStatus
from .model import Account


class AccountRepository(Protocol):
    """Persistence interface for flow accounts.

    Note (DIP): services depend on this interface, not on a concrete database.
    `try_acquire` / `try_release` must be atomic conditional updates.
    """

    def get_by_id(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Account]:
        """Newest first."""

        raise NotImplementedError

    def list_by_status(self, status: AccountStatus) -> Sequence[Account]:
        raise NotImplementedError

    def create(
        self,
        *,
        code: str,
        email: str,
        password: str,
        capacity: int,
        status: AccountStatus = AccountStatus.ACTIVE,
    ) -> int:
        raise NotImplementedError

    def update_details(
        self,
        *,
        account_id: int,
        email: Optional[str] = None,
        password: Optional[str] = None,
        status: Optional[AccountStatus] = None,
    ) -> bool:
        """Administrative update; must never touch occupancy."""

        raise NotImplementedError

    def delete_by_id(self, account_id: int) -> bool:
        raise NotImplementedError

    def try_acquire(self, code: str) -> bool:
        """occupancy += 1 only if active and occupancy < capacity at write time."""

        raise NotImplementedError

    def try_release(self, code: str) -> bool:
        """occupancy -= 1 only if active and occupancy > 0 at write time."""

        raise NotImplementedError

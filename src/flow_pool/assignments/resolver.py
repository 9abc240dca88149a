from __future__ import annotations

from typing import Optional

from ..accounts.repository import AccountRepository
from ..core.enums import AccountStatus
from ..core.exceptions import (
    AccountFullError,
    AccountInactiveError,
    AccountNotFoundError,
    PoolExhaustedError,
)
from .model import Resolution


class AssignmentResolver:
    """Decide which account a user should be bound to. Read-only."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def resolve(self, explicit_code: Optional[str] = None, exclude_code: Optional[str] = None) -> Resolution:
        """Return the target account.

        With `explicit_code` the named account must exist, be active and have a
        free slot. Without it, the active account with the fewest holders wins,
        ties going to the smaller code.

        `exclude_code` is the code the user currently holds. It does not affect
        filtering; it only flags the resolution as `unchanged` when the target is
        that same account.
        """
        if explicit_code:
            account = self._accounts.get_by_code(explicit_code)
            if account is None:
                raise AccountNotFoundError(explicit_code)
            if not account.is_active:
                raise AccountInactiveError(explicit_code)
            if account.is_full:
                raise AccountFullError(account.code, account.occupancy, account.capacity)
        else:
            candidates = [
                a for a in self._accounts.list_by_status(AccountStatus.ACTIVE)
                if a.is_active and not a.is_full
            ]
            if not candidates:
                raise PoolExhaustedError()
            account = min(candidates, key=lambda a: (a.occupancy, a.code))

        return Resolution(account=account, unchanged=bool(exclude_code) and account.code == exclude_code)

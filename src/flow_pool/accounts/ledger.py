from __future__ import annotations

import logging

from ..core.exceptions import (
    AccountFullError,
    AccountInactiveError,
    AccountNotFoundError,
)
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountingLedger:
    """Occupancy transitions for flow accounts.

    acquire: +1, refused at capacity. release: -1, floored at zero.
    Both delegate to a single conditional update in the repository; no value
    read earlier in the request is ever reused to compute the new count.
    """

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def acquire(self, code: str) -> Account:
        """Take one slot on `code` and return the account as stored afterwards."""
        if self._accounts.try_acquire(code):
            account = self._accounts.get_by_code(code)
            if account is None:
                # Deleted between the update and this read; the slot went with it.
                raise AccountNotFoundError(code)
            logger.info("acquired slot on %s (%d/%d)", code, account.occupancy, account.capacity)
            return account

        # The guarded update matched nothing: find out which precondition failed.
        account = self._accounts.get_by_code(code)
        if account is None:
            raise AccountNotFoundError(code)
        if not account.is_active:
            raise AccountInactiveError(code)
        logger.info("refused slot on %s: full (%d/%d)", code, account.occupancy, account.capacity)
        raise AccountFullError(code, account.occupancy, account.capacity)

    def release(self, code: str) -> bool:
        """Give back one slot on `code`.

        An account already at zero, missing or inactive is a no-op so that it
        never blocks a user's release. Returns True only when a slot was
        actually freed. StoreUnavailableError propagates: the caller must not
        drop the binding when the counter could not be written.
        """
        released = self._accounts.try_release(code)
        if released:
            logger.info("released slot on %s", code)
        else:
            logger.info("release on %s was a no-op (missing, inactive or already at zero)", code)
        return released

from __future__ import annotations

import logging
from typing import Optional

from mysql.connector import errors as mysql_errors

from ..accounts.ledger import AccountingLedger
from ..accounts.model import Account
from ..accounts.repository import AccountRepository
from ..common.validators import normalize_code, normalize_email, optional_code, require_non_empty
from ..core.constants import DEFAULT_AUTO_ASSIGN_ATTEMPTS
from ..core.exceptions import (
    AccountFullError,
    DomainError,
    ReassignmentInterruptedError,
    UserNotFoundError,
)
from ..users.repository import UserRepository
from .model import AssignmentResult
from .resolver import AssignmentResolver
from .stores.base import AssignmentStore

logger = logging.getLogger(__name__)

# Anything a store call can fail with.
STORE_FAILURES = (DomainError, mysql_errors.Error)


class AssignmentService:
    """Use case: bind users to flow accounts, move them, release them.

    Every step is a separate short store call; there is no transaction spanning
    the account and assignment stores. A failed step is undone so counters and
    bindings agree. A released slot taken by someone else before it could be
    re-acquired cannot be undone: the user is left unassigned and gets
    ReassignmentInterruptedError.
    """

    def __init__(
        self,
        store: AssignmentStore,
        resolver: AssignmentResolver,
        ledger: AccountingLedger,
        accounts: AccountRepository,
        users: UserRepository,
        *,
        max_attempts: int = DEFAULT_AUTO_ASSIGN_ATTEMPTS,
    ):
        self._store = store
        self._resolver = resolver
        self._ledger = ledger
        self._accounts = accounts
        self._users = users
        self._max_attempts = max(1, int(max_attempts))

    def _result(self, account: Account, *, previous_code: Optional[str], unchanged: bool) -> AssignmentResult:
        return AssignmentResult(
            code=account.code,
            credentials=account.credentials,
            previous_code=previous_code,
            unchanged=unchanged,
        )

    def _require_user(self, user_id: str) -> str:
        user_id = require_non_empty(user_id, "User id")
        if not self._users.get_by_id(user_id):
            raise UserNotFoundError(user_id)
        return user_id

    def get_current(self, user_id: str) -> Optional[str]:
        return self._store.get_current(self._require_user(user_id))

    def assign(self, user_id: str, explicit_code: Optional[str] = None) -> AssignmentResult:
        user_id = self._require_user(user_id)
        explicit_code = optional_code(explicit_code)

        current = self._store.get_current(user_id)

        # Same account again: no counter changes, even if it is full right now.
        if explicit_code and current == explicit_code:
            account = self._accounts.get_by_code(explicit_code)
            if account and account.is_active:
                logger.info("user %s already holds %s", user_id, explicit_code)
                return self._result(account, previous_code=current, unchanged=True)

        resolution = self._resolver.resolve(explicit_code, exclude_code=current)
        if resolution.unchanged:
            logger.info("user %s already holds %s", user_id, resolution.account.code)
            return self._result(resolution.account, previous_code=current, unchanged=True)

        released = self._ledger.release(current) if current else False

        # An explicitly named account that filled up meanwhile is a plain
        # failure. For auto-selection another caller won the race, so pick
        # again from fresh counters until a slot is taken or the pool is empty.
        target_code = resolution.account.code
        attempts = 0
        try:
            while True:
                try:
                    target = self._ledger.acquire(target_code)
                    break
                except AccountFullError:
                    attempts += 1
                    if explicit_code or attempts >= self._max_attempts:
                        raise
                    logger.info("%s filled up concurrently, picking again (attempt %d)", target_code, attempts + 1)
                    target_code = self._resolver.resolve().account.code
        except STORE_FAILURES as exc:
            if released:
                self._restore_previous(user_id, current, target_code, exc)
            raise

        try:
            self._store.set_current(user_id, target.code)
        except STORE_FAILURES as exc:
            # Binding not written: the user still points at `current`.
            self._give_back(target.code)
            if released:
                self._restore_previous(user_id, current, target.code, exc)
            raise

        logger.info("assigned user %s to %s (previous=%s)", user_id, target.code, current)
        return self._result(target, previous_code=current, unchanged=False)

    def _give_back(self, code: str) -> None:
        try:
            self._ledger.release(code)
        except STORE_FAILURES as exc:
            logger.error("could not give back slot on %s: %s", code, exc)

    def _restore_previous(self, user_id: str, previous: str, target_code: str, cause: Exception) -> None:
        """Try to take back the slot released a moment ago.

        Success: the caller re-raises `cause` and the user keeps `previous`.
        Failure: the binding is cleared so it matches the counters, and the
        caller gets ReassignmentInterruptedError.
        """
        try:
            self._ledger.acquire(previous)
        except STORE_FAILURES as exc:
            logger.warning(
                "user %s lost slot on %s while moving to %s (%s); now unassigned",
                user_id,
                previous,
                target_code,
                exc,
            )
            try:
                self._store.set_current(user_id, None)
            except STORE_FAILURES as clear_exc:
                logger.error("user %s still bound to %s without a slot: %s", user_id, previous, clear_exc)
            raise ReassignmentInterruptedError(previous, target_code, cause) from cause
        logger.info("restored user %s on %s after failing to move to %s", user_id, previous, target_code)

    def release(self, user_id: str) -> bool:
        """Clear the user's assignment. Returns False when there was nothing to release."""
        user_id = self._require_user(user_id)
        current = self._store.get_current(user_id)
        if not current:
            logger.info("user %s has no account code, nothing to release", user_id)
            return False

        released = self._ledger.release(current)
        try:
            self._store.set_current(user_id, None)
        except STORE_FAILURES:
            if released:
                self._take_back(user_id, current)
            raise
        logger.info("released user %s from %s", user_id, current)
        return True

    def _take_back(self, user_id: str, code: str) -> None:
        try:
            self._ledger.acquire(code)
        except STORE_FAILURES as exc:
            logger.error("user %s still bound to %s without a slot: %s", user_id, code, exc)

    def reassign_by_identity(self, identity: str, explicit_code: str) -> AssignmentResult:
        """Assign by the user's e-mail instead of id; the code is mandatory here."""
        email = normalize_email(identity)
        code = normalize_code(explicit_code)

        user = self._users.get_by_email(email)
        if not user:
            raise UserNotFoundError(email)
        return self.assign(user.user_id, code)

from __future__ import annotations

import logging
from typing import Callable, Optional

from ...common.datetime_utils import now_local, validity_window
from ...core.constants import DEFAULT_REGISTRATION_USERNAME, DEFAULT_REGISTRATION_VALIDITY_DAYS
from ...core.exceptions import UserNotFoundError
from ...users.repository import UserRepository
from ..repository import RegistrationRepository
from .base import AssignmentStore

logger = logging.getLogger(__name__)


class RegistrationAssignmentStore(AssignmentStore):
    """Code kept on the user's latest registration row.

    The row is created lazily on the first assignment, with a fixed validity
    window that later reassignments do not extend.
    """

    def __init__(
        self,
        registrations: RegistrationRepository,
        users: UserRepository,
        *,
        validity_days: int = DEFAULT_REGISTRATION_VALIDITY_DAYS,
        clock: Callable = now_local,
    ):
        self._registrations = registrations
        self._users = users
        self._validity_days = int(validity_days)
        self._clock = clock

    def get_current(self, user_id: str) -> Optional[str]:
        registration = self._registrations.get_latest_for_user(user_id)
        if not registration:
            return None
        return registration.account_code or None

    def set_current(self, user_id: str, code: Optional[str]) -> None:
        registration = self._registrations.get_latest_for_user(user_id)
        if registration:
            self._registrations.update_account_code(registration.registration_id, code)
            return

        if code is None:
            # Nothing to clear.
            return

        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        registered_at, expires_at = validity_window(self._clock(), self._validity_days)
        registration_id = self._registrations.create(
            user_id=user.user_id,
            username=user.display_name or DEFAULT_REGISTRATION_USERNAME,
            email=user.email,
            account_code=code,
            registered_at=registered_at,
            expires_at=expires_at,
        )
        logger.info("created registration #%s for user %s (expires %s)", registration_id, user_id, expires_at.date())

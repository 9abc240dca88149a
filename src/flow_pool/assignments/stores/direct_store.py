from __future__ import annotations

from typing import Optional

from ...core.exceptions import UserNotFoundError
from ...users.repository import UserRepository
from .base import AssignmentStore


class DirectAssignmentStore(AssignmentStore):
    """Code kept in a nullable column on the user row."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_current(self, user_id: str) -> Optional[str]:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user.account_code or None

    def set_current(self, user_id: str, code: Optional[str]) -> None:
        if not self._users.set_account_code(user_id, code):
            raise UserNotFoundError(user_id)

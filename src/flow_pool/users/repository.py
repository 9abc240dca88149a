from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): the service layer depends on this interface, not a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def set_account_code(self, user_id: str, code: Optional[str]) -> bool:
        """Returns False when the user does not exist."""

        raise NotImplementedError

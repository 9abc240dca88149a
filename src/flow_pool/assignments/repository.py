from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Registration


class RegistrationRepository(Protocol):
    def get_latest_for_user(self, user_id: str) -> Optional[Registration]:
        """Most recently registered row wins (there may be historical ones)."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_account_code(self, registration_id: int, code: Optional[str]) -> bool:
        raise NotImplementedError

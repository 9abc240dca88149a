from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..accounts.model import Account, Credentials
from ..core.enums import RegistrationStatus


@dataclass(frozen=True)
class Registration:
    """Per-user registration row that carries the account code in registration mode.

    username/email/validity are fixed at creation; only `account_code` changes.
    """

    registration_id: int
    user_id: str
    username: str
    email: str
    account_code: Optional[str]
    status: RegistrationStatus
    registered_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class Resolution:
    """Outcome of target selection.

    `unchanged` means the target is the account the user already holds.
    """

    account: Account
    unchanged: bool = False


@dataclass(frozen=True)
class AssignmentResult:
    code: str
    credentials: Credentials
    previous_code: Optional[str] = None
    unchanged: bool = False

    def to_dict(self) -> dict:
        return {
            "success": True,
            "code": self.code,
            "email": self.credentials.identity,
            "password": self.credentials.secret,
            "previous_code": self.previous_code,
            "unchanged": self.unchanged,
        }

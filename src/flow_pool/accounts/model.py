from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AccountStatus


@dataclass(frozen=True)
class Credentials:
    """Login handed to whoever holds a slot on the account."""

    identity: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class Account:
    """Domain entity: a shared flow account with a fixed number of slots.

    Note: plain data object, no DB access. `occupancy` is only ever changed
    through the ledger.
    """

    account_id: int
    code: str
    credentials: Credentials
    capacity: int
    occupancy: int
    status: AccountStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def is_full(self) -> bool:
        return self.occupancy >= self.capacity

    def to_public_dict(self) -> dict:
        """Listing view, without the secret."""
        return {
            "account_id": self.account_id,
            "code": self.code,
            "email": self.credentials.identity,
            "capacity": self.capacity,
            "occupancy": self.occupancy,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

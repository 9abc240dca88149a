from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: an end-user that can hold a slot on a flow account.

    Note: `account_code` is only authoritative in the direct tenant mode.
    """

    user_id: str
    email: str
    full_name: Optional[str] = None
    account_code: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        if self.full_name and self.full_name.strip():
            return self.full_name.strip()
        local_part = (self.email or "").split("@")[0]
        return local_part or None

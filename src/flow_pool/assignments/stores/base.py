from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class AssignmentStore(ABC):
    """Strategy Pattern: where a user's current account code lives.

    One implementation per tenant mode; the assignment service only sees this
    contract and never branches on the mode itself.
    """

    @abstractmethod
    def get_current(self, user_id: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set_current(self, user_id: str, code: Optional[str]) -> None:
        raise NotImplementedError

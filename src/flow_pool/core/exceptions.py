from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation"


class NotFoundError(DomainError):
    kind = "not_found"


class AccountNotFoundError(NotFoundError):
    """Raised when a named account does not exist (or is not usable)."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or f"Flow account {code} not found")
        self.code = code


class AccountInactiveError(AccountNotFoundError):
    """The named account exists but is not active.

    Subclass of AccountNotFoundError: an inactive account is never a valid target.
    """

    kind = "inactive"

    def __init__(self, code: str):
        super().__init__(code, f"Flow account {code} is inactive")


class UserNotFoundError(NotFoundError):
    def __init__(self, user_ref: str):
        super().__init__(f"User {user_ref} not found")
        self.user_ref = user_ref


class CapacityError(DomainError):
    """Base for 'no slot available' failures."""

    kind = "capacity"


class AccountFullError(CapacityError):
    kind = "full"

    def __init__(self, code: str, occupancy: int, capacity: int):
        super().__init__(f"Flow account {code} is full ({occupancy}/{capacity} users)")
        self.code = code
        self.occupancy = occupancy
        self.capacity = capacity


class PoolExhaustedError(CapacityError):
    kind = "pool_exhausted"

    def __init__(self):
        super().__init__("No available flow account. Please add more accounts.")


class ReassignmentInterruptedError(DomainError):
    """The previous slot was released but the new one could not be acquired.

    The user is left unassigned; retrying the assignment is safe.
    """

    kind = "interrupted"

    def __init__(self, previous_code: str, target_code: str, cause: Exception):
        super().__init__(
            f"Released {previous_code} but could not acquire {target_code}: {cause}. "
            "User is now unassigned, please retry."
        )
        self.previous_code = previous_code
        self.target_code = target_code
        self.cause = cause


class StoreUnavailableError(DomainError):
    """Transient persistence failure (connection lost, timeout, ...)."""

    kind = "store_unavailable"

from __future__ import annotations

from enum import Enum


class AccountStatus(str, Enum):
    """Lifecycle status of a shared flow account."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class TenantMode(str, Enum):
    """Where a user's current account code is stored for this deployment."""

    # users.account_code
    DIRECT = "direct"
    # latest row of registrations
    REGISTRATION = "registration"


class RegistrationStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"

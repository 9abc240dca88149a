from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_REGISTRATION_VALIDITY_DAYS
from ..core.enums import TenantMode
from ..users.repository import UserRepository
from .repository import RegistrationRepository
from .stores.base import AssignmentStore
from .stores.direct_store import DirectAssignmentStore
from .stores.registration_store import RegistrationAssignmentStore


@dataclass
class AssignmentStoreFactory:
    """Factory Pattern: pick the assignment store for the deployment's tenant mode."""

    users: UserRepository
    registrations: RegistrationRepository
    validity_days: int = DEFAULT_REGISTRATION_VALIDITY_DAYS

    def for_mode(self, mode: TenantMode | str) -> AssignmentStore:
        try:
            mode = TenantMode(str(getattr(mode, "value", mode)).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown tenant mode: {mode!r}") from None

        if mode == TenantMode.DIRECT:
            return DirectAssignmentStore(self.users)
        return RegistrationAssignmentStore(
            self.registrations,
            self.users,
            validity_days=self.validity_days,
        )

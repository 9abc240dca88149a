from __future__ import annotations

from dataclasses import dataclass

from .accounts.ledger import AccountingLedger
from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.service import AccountService
from .assignments.factory import AssignmentStoreFactory
from .assignments.mysql_registration_repository import MySQLRegistrationRepository
from .assignments.resolver import AssignmentResolver
from .assignments.service import AssignmentService
from .assignments.stores.base import AssignmentStore
from .core.constants import DEFAULT_ACCOUNT_CAPACITY, DEFAULT_REGISTRATION_VALIDITY_DAYS
from .core.enums import TenantMode
from .database.bootstrap import as_db_config
from .database.connection import DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    tenant_mode: TenantMode

    accounts_repo: MySQLAccountRepository
    users_repo: MySQLUserRepository
    registrations_repo: MySQLRegistrationRepository
    assignment_store: AssignmentStore

    ledger: AccountingLedger
    resolver: AssignmentResolver
    account_service: AccountService
    assignment_service: AssignmentService


def build_container(
    *,
    db_config: dict,
    tenant_mode: TenantMode | str = TenantMode.DIRECT,
    capacity: int = DEFAULT_ACCOUNT_CAPACITY,
    registration_validity_days: int = DEFAULT_REGISTRATION_VALIDITY_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(as_db_config(db_config))

    accounts_repo = MySQLAccountRepository(conn)
    users_repo = MySQLUserRepository(conn)
    registrations_repo = MySQLRegistrationRepository(conn)

    # Chosen once per deployment; never mixed within an operation.
    assignment_store = AssignmentStoreFactory(
        users=users_repo,
        registrations=registrations_repo,
        validity_days=registration_validity_days,
    ).for_mode(tenant_mode)

    ledger = AccountingLedger(accounts_repo)
    resolver = AssignmentResolver(accounts_repo)
    account_service = AccountService(accounts_repo, capacity=capacity)
    assignment_service = AssignmentService(
        assignment_store,
        resolver,
        ledger,
        accounts_repo,
        users_repo,
    )

    return Container(
        conn=conn,
        tenant_mode=TenantMode(str(getattr(tenant_mode, "value", tenant_mode)).strip().lower()),
        accounts_repo=accounts_repo,
        users_repo=users_repo,
        registrations_repo=registrations_repo,
        assignment_store=assignment_store,
        ledger=ledger,
        resolver=resolver,
        account_service=account_service,
        assignment_service=assignment_service,
    )

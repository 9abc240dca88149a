from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from flow_pool.accounts.ledger import AccountingLedger
from flow_pool.accounts.model import Account, Credentials
from flow_pool.assignments.factory import AssignmentStoreFactory
from flow_pool.assignments.model import Registration
from flow_pool.assignments.resolver import AssignmentResolver
from flow_pool.assignments.service import AssignmentService
from flow_pool.core.enums import AccountStatus, RegistrationStatus, TenantMode
from flow_pool.users.model import User

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


class InMemoryAccounts:
    """Thread-safe stand-in for the MySQL account table.

    try_acquire/try_release check and write under one lock, like the guarded
    UPDATE does in the database.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[int, Account] = {}
        self._next_id = 1

    # test helpers
    def add(self, code, *, occupancy=0, capacity=10, status=AccountStatus.ACTIVE, email=None) -> Account:
        account_id = self.create(
            code=code,
            email=email or f"{code.lower()}@pool.test",
            password=f"secret-{code.lower()}",
            capacity=capacity,
            status=status,
        )
        with self._lock:
            self._rows[account_id] = replace(self._rows[account_id], occupancy=occupancy)
            return self._rows[account_id]

    def occupancy(self, code) -> int:
        return self.get_by_code(code).occupancy

    def set_occupancy(self, code, value) -> None:
        with self._lock:
            account = self._find(code)
            self._rows[account.account_id] = replace(account, occupancy=value)

    def _find(self, code) -> Optional[Account]:
        for account in self._rows.values():
            if account.code == code:
                return account
        return None

    # AccountRepository
    def get_by_id(self, account_id):
        with self._lock:
            return self._rows.get(int(account_id))

    def get_by_code(self, code):
        with self._lock:
            return self._find(code)

    def get_by_email(self, email):
        with self._lock:
            for account in self._rows.values():
                if account.credentials.identity == email:
                    return account
            return None

    def list_all(self):
        with self._lock:
            return sorted(self._rows.values(), key=lambda a: (a.created_at, a.account_id), reverse=True)

    def list_by_status(self, status):
        with self._lock:
            return [a for a in self._rows.values() if a.status == status]

    def create(self, *, code, email, password, capacity, status=AccountStatus.ACTIVE):
        with self._lock:
            account_id = self._next_id
            self._next_id += 1
            created = BASE_TIME + timedelta(minutes=account_id)
            self._rows[account_id] = Account(
                account_id=account_id,
                code=code,
                credentials=Credentials(identity=email, secret=password),
                capacity=capacity,
                occupancy=0,
                status=status,
                created_at=created,
                updated_at=created,
            )
            return account_id

    def update_details(self, *, account_id, email=None, password=None, status=None):
        with self._lock:
            account = self._rows.get(int(account_id))
            if not account:
                return False
            credentials = Credentials(
                identity=email if email is not None else account.credentials.identity,
                secret=password if password is not None else account.credentials.secret,
            )
            self._rows[account.account_id] = replace(
                account,
                credentials=credentials,
                status=status if status is not None else account.status,
                updated_at=BASE_TIME + timedelta(days=1),
            )
            return True

    def delete_by_id(self, account_id):
        with self._lock:
            return self._rows.pop(int(account_id), None) is not None

    def try_acquire(self, code):
        with self._lock:
            account = self._find(code)
            if not account or account.status != AccountStatus.ACTIVE or account.occupancy >= account.capacity:
                return False
            self._rows[account.account_id] = replace(account, occupancy=account.occupancy + 1)
            return True

    def try_release(self, code):
        with self._lock:
            account = self._find(code)
            if not account or account.status != AccountStatus.ACTIVE or account.occupancy <= 0:
                return False
            self._rows[account.account_id] = replace(account, occupancy=account.occupancy - 1)
            return True


class InMemoryUsers:
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, User] = {}

    def add(self, user_id, email=None, full_name=None, account_code=None) -> User:
        user = User(
            user_id=user_id,
            email=email or f"{user_id}@example.com",
            full_name=full_name,
            account_code=account_code,
        )
        with self._lock:
            self._by_id[user_id] = user
        return user

    def get_by_id(self, user_id):
        with self._lock:
            return self._by_id.get(user_id)

    def get_by_email(self, email):
        with self._lock:
            for user in self._by_id.values():
                if user.email == email:
                    return user
            return None

    def set_account_code(self, user_id, code):
        with self._lock:
            user = self._by_id.get(user_id)
            if not user:
                return False
            self._by_id[user_id] = replace(user, account_code=code)
            return True


class InMemoryRegistrations:
    def __init__(self):
        self._lock = threading.Lock()
        self.rows: dict[int, Registration] = {}
        self._next_id = 1

    def get_latest_for_user(self, user_id):
        with self._lock:
            rows = [r for r in self.rows.values() if r.user_id == user_id]
            if not rows:
                return None
            return max(rows, key=lambda r: (r.registered_at, r.registration_id))

    def create(self, *, user_id, username, email, account_code, registered_at, expires_at):
        with self._lock:
            registration_id = self._next_id
            self._next_id += 1
            self.rows[registration_id] = Registration(
                registration_id=registration_id,
                user_id=user_id,
                username=username,
                email=email,
                account_code=account_code,
                status=RegistrationStatus.ACTIVE,
                registered_at=registered_at,
                expires_at=expires_at,
            )
            return registration_id

    def update_account_code(self, registration_id, code):
        with self._lock:
            registration = self.rows.get(int(registration_id))
            if not registration:
                return False
            self.rows[registration.registration_id] = replace(registration, account_code=code)
            return True


@pytest.fixture
def accounts():
    return InMemoryAccounts()


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def registrations():
    return InMemoryRegistrations()


@pytest.fixture
def make_service(accounts, users, registrations):
    """Build an AssignmentService over the in-memory fakes for a tenant mode."""

    def _make(mode=TenantMode.DIRECT, *, ledger=None, resolver=None, wrap_store=None):
        store = AssignmentStoreFactory(users=users, registrations=registrations).for_mode(mode)
        if wrap_store:
            store = wrap_store(store)
        return AssignmentService(
            store,
            resolver or AssignmentResolver(accounts),
            ledger or AccountingLedger(accounts),
            accounts,
            users,
        )

    return _make


@pytest.fixture(params=[TenantMode.DIRECT, TenantMode.REGISTRATION], ids=["direct", "registration"])
def tenant_mode(request):
    return request.param

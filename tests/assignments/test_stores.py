from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from flow_pool.assignments.factory import AssignmentStoreFactory
from flow_pool.assignments.stores.direct_store import DirectAssignmentStore
from flow_pool.assignments.stores.registration_store import RegistrationAssignmentStore
from flow_pool.core.enums import TenantMode
from flow_pool.core.exceptions import UserNotFoundError

NOW = datetime(2026, 3, 1, 12, 0, 0)


def test_factory_selects_store_by_mode(users, registrations):
    factory = AssignmentStoreFactory(users=users, registrations=registrations)

    assert isinstance(factory.for_mode(TenantMode.DIRECT), DirectAssignmentStore)
    assert isinstance(factory.for_mode("Registration"), RegistrationAssignmentStore)
    with pytest.raises(ValueError):
        factory.for_mode("both")


def test_direct_store_reads_and_writes_user_column(users):
    users.add("u1")
    store = DirectAssignmentStore(users)

    assert store.get_current("u1") is None
    store.set_current("u1", "G1")
    assert store.get_current("u1") == "G1"
    assert users.get_by_id("u1").account_code == "G1"
    store.set_current("u1", None)
    assert store.get_current("u1") is None


def test_direct_store_unknown_user(users):
    store = DirectAssignmentStore(users)

    with pytest.raises(UserNotFoundError):
        store.get_current("ghost")
    with pytest.raises(UserNotFoundError):
        store.set_current("ghost", "G1")


def test_registration_store_creates_row_on_first_assignment(users, registrations):
    users.add("u1", email="jane@example.com", full_name="Jane Doe")
    store = RegistrationAssignmentStore(registrations, users, clock=lambda: NOW)

    assert store.get_current("u1") is None
    store.set_current("u1", "G2")

    registration = registrations.get_latest_for_user("u1")
    assert registration.account_code == "G2"
    assert registration.username == "Jane Doe"
    assert registration.email == "jane@example.com"
    assert registration.registered_at == NOW
    assert registration.expires_at == NOW + timedelta(days=30)


def test_registration_store_reassignment_keeps_validity_window(users, registrations):
    users.add("u1", email="bob@example.com")
    clock_values = iter([NOW, NOW + timedelta(days=10)])
    store = RegistrationAssignmentStore(registrations, users, clock=lambda: next(clock_values))

    store.set_current("u1", "G1")
    store.set_current("u1", "G2")
    store.set_current("u1", None)
    store.set_current("u1", "G3")

    assert len(registrations.rows) == 1
    registration = registrations.get_latest_for_user("u1")
    assert registration.account_code == "G3"
    assert registration.username == "bob"
    assert registration.expires_at == NOW + timedelta(days=30)


def test_registration_store_latest_row_is_authoritative(users, registrations):
    users.add("u1")
    registrations.create(
        user_id="u1", username="u1", email="u1@example.com", account_code="OLD",
        registered_at=NOW - timedelta(days=60), expires_at=NOW - timedelta(days=30),
    )
    registrations.create(
        user_id="u1", username="u1", email="u1@example.com", account_code="G4",
        registered_at=NOW, expires_at=NOW + timedelta(days=30),
    )
    store = RegistrationAssignmentStore(registrations, users)

    assert store.get_current("u1") == "G4"
    store.set_current("u1", None)
    assert store.get_current("u1") is None
    assert registrations.rows[1].account_code == "OLD"


def test_registration_store_clearing_without_row_is_a_no_op(users, registrations):
    store = RegistrationAssignmentStore(registrations, users)

    store.set_current("nobody", None)

    assert registrations.rows == {}
    assert store.get_current("nobody") is None


def test_registration_store_needs_user_to_create_row(users, registrations):
    store = RegistrationAssignmentStore(registrations, users)

    with pytest.raises(UserNotFoundError):
        store.set_current("ghost", "G1")

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from flow_pool.core.exceptions import CapacityError


def _run_all(service, user_ids, code=None):
    barrier = threading.Barrier(len(user_ids))

    def work(user_id):
        barrier.wait()
        try:
            return service.assign(user_id, code)
        except CapacityError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=len(user_ids)) as pool:
        return list(pool.map(work, user_ids))


@pytest.mark.parametrize("code", [None, "A"], ids=["auto", "explicit"])
def test_parallel_assignments_never_oversubscribe(accounts, users, make_service, tenant_mode, code):
    accounts.add("A", occupancy=7)
    if code is None:
        accounts.add("B", occupancy=9)
    user_ids = [f"u{i}" for i in range(16)]
    for user_id in user_ids:
        users.add(user_id)
    service = make_service(tenant_mode)

    outcomes = _run_all(service, user_ids, code)

    free_slots = 3 if code else 4
    winners = [o for o in outcomes if not isinstance(o, CapacityError)]
    assert len(winners) == free_slots
    assert accounts.occupancy("A") == 10
    if code is None:
        assert accounts.occupancy("B") == 10
    bound = [u for u in user_ids if service.get_current(u)]
    assert len(bound) == free_slots


def test_parallel_releases_stop_at_zero(accounts, users, make_service, tenant_mode):
    accounts.add("A", occupancy=0)
    user_ids = [f"u{i}" for i in range(6)]
    for user_id in user_ids:
        users.add(user_id)
    service = make_service(tenant_mode)
    for user_id in user_ids:
        service.assign(user_id, "A")
    accounts.set_occupancy("A", 2)

    with ThreadPoolExecutor(max_workers=len(user_ids)) as pool:
        results = list(pool.map(service.release, user_ids))

    assert all(results)
    assert accounts.occupancy("A") == 0

import threading
from datetime import date

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ConcurrentModification, NotFound
from src.hr_payroll.hr_payroll.payroll.draft_store import DraftStore
from src.hr_payroll.hr_payroll.payroll.locks import KeyedLockRegistry
from src.hr_payroll.hr_payroll.payroll.model import PayrollRunDraft


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _draft():
    return PayrollRunDraft.build(pay_period_start=date(2024, 3, 1), pay_period_end=date(2024, 3, 31), paychecks=())


def test_draft_store_round_trip_and_discard():
    store = DraftStore(ttl_seconds=60)
    draft = _draft()

    ref = store.put(draft)

    assert store.get(ref) is draft
    store.discard(ref)
    with pytest.raises(NotFound):
        store.get(ref)


def test_draft_store_expires_entries():
    clock = FakeClock()
    store = DraftStore(ttl_seconds=60, clock=clock)
    ref = store.put(_draft())

    clock.now += 59
    store.get(ref)
    clock.now += 1

    with pytest.raises(NotFound):
        store.get(ref)
    assert len(store) == 0


def test_unknown_draft_ref():
    with pytest.raises(NotFound):
        DraftStore().get("nope")


def test_lock_registry_blocks_other_threads_until_release():
    locks = KeyedLockRegistry(timeout=0.05)
    entered = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold("k"):
            entered.set()
            release.wait(2)

    t = threading.Thread(target=holder)
    t.start()
    assert entered.wait(2)

    with pytest.raises(ConcurrentModification):
        with locks.hold("k"):
            pass

    release.set()
    t.join()
    with locks.hold("k"):
        pass
    assert len(locks) == 0


def test_lock_registry_times_out_on_held_key():
    locks = KeyedLockRegistry(timeout=0.01)

    with locks.hold(("run", 1)):
        with pytest.raises(ConcurrentModification):
            with locks.hold(("run", 1)):
                pass
        with locks.hold(("run", 2)):
            pass

    assert len(locks) == 0

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from src.intern_tracker.intern_tracker.common.locks import KeyedLock


def test_same_key_is_serialised():
    locks = KeyedLock()
    inside = []
    overlap = threading.Event()

    def work(_):
        with locks.hold("u1"):
            inside.append(1)
            if len(inside) > 1:
                overlap.set()
            time.sleep(0.001)
            inside.pop()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, range(32)))

    assert not overlap.is_set()


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()

    with locks.hold("u1"):
        with locks.hold("u2"):
            assert len(locks) == 2


def test_idle_keys_are_released():
    locks = KeyedLock()

    for user in ("u1", "u2", "u3"):
        with locks.hold(user):
            pass

    assert len(locks) == 0


def test_entry_released_when_block_raises():
    locks = KeyedLock()

    try:
        with locks.hold("u1"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert len(locks) == 0
    with locks.hold("u1"):
        assert len(locks) == 1

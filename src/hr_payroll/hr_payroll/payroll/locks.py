from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import ConcurrentModification


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


class KeyedLockRegistry:
    """Process-local mutual exclusion per key with a bounded wait.

    Entries are dropped once no thread holds or waits on them, so the registry
    does not grow with the number of runs ever touched.
    """

    def __init__(self, *, timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout)
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1

        acquired = entry.lock.acquire(timeout=self._timeout)
        try:
            if not acquired:
                raise ConcurrentModification(f"Timed out waiting for lock on {key!r}")
            yield
        finally:
            if acquired:
                entry.lock.release()
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

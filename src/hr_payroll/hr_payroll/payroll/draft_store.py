from __future__ import annotations

import threading
import time
import uuid
from typing import Callable

from ..core.constants import DEFAULT_DRAFT_TTL_SECONDS
from ..core.exceptions import NotFound
from .model import PayrollRunDraft


class DraftStore:
    """In-memory holder for previews awaiting finalize, keyed by an opaque ref.

    Drafts are never written to the database; expired entries are dropped on access.
    """

    def __init__(self, *, ttl_seconds: float = DEFAULT_DRAFT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._drafts: dict[str, tuple[float, PayrollRunDraft]] = {}

    def put(self, draft: PayrollRunDraft) -> str:
        ref = uuid.uuid4().hex
        with self._lock:
            self._prune()
            self._drafts[ref] = (self._clock() + self._ttl, draft)
        return ref

    def get(self, ref: str) -> PayrollRunDraft:
        with self._lock:
            self._prune()
            entry = self._drafts.get(ref or "")
        if entry is None:
            raise NotFound(f"Draft {ref!r} not found or expired")
        return entry[1]

    def discard(self, ref: str) -> None:
        with self._lock:
            self._drafts.pop(ref, None)

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._drafts)

    def _prune(self) -> None:
        now = self._clock()
        for ref in [r for r, (expires_at, _) in self._drafts.items() if expires_at <= now]:
            del self._drafts[ref]

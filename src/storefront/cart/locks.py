"""Per-session mutual exclusion for cart mutations.

Every read-modify-write of a cart runs while holding its session's lock, so
two tabs or a double-submitted form in the same session take turns instead
of overwriting each other. Locks are re-entrant: checkout holds the lock
while it dispatches the command that clears the cart.

A session's lock stays registered while anyone holds it or waits for it.
Discarding it then only marks it, and the last user out removes it, so a
waiting request and a newcomer always contend for the same lock.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _SessionLock:
    __slots__ = ("lock", "users", "discarded")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0  # holders plus waiters
        self.discarded = False


class SessionLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, _SessionLock] = {}

    def _checkout(self, session_id: str) -> _SessionLock:
        with self._guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = self._locks[session_id] = _SessionLock()
            entry.users += 1
            return entry

    def _checkin(self, session_id: str, entry: _SessionLock) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0 and entry.discarded and self._locks.get(session_id) is entry:
                del self._locks[session_id]

    @contextmanager
    def hold(self, session_id: str) -> Iterator[None]:
        """Hold the session's lock for the duration of the block."""
        session_id = str(session_id)
        entry = self._checkout(session_id)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(session_id, entry)

    def discard(self, session_id: str) -> None:
        """Forget the lock of an expired session once nobody is using it."""
        with self._guard:
            entry = self._locks.get(str(session_id))
            if entry is None:
                return
            if entry.users:
                entry.discarded = True
            else:
                del self._locks[str(session_id)]

    def users(self, session_id) -> int:
        """Number of callers holding or waiting on the session's lock."""
        with self._guard:
            entry = self._locks.get(str(session_id))
            return entry.users if entry else 0

    def __contains__(self, session_id) -> bool:
        with self._guard:
            return str(session_id) in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


session_locks = SessionLocks()

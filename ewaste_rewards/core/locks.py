"""
Per-user critical sections for ledger writes

Every check-then-append sequence against a user's ledger runs while holding
that user's lock, so two requests for the same user never interleave
between the balance read and the transaction append.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

class UserLockRegistry:
    """
    Hands out one asyncio.Lock per user id

    A lock lives only while some request holds or waits on it; the last
    one out removes it, so the registry stays as small as the number of
    users with requests in flight.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}  # holders plus waiters per user

    def __len__(self) -> int:
        return len(self._locks)

    def get(self, user_id: int) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def clear(self) -> None:
        """Drop all locks; asyncio locks are bound to the loop that first waits on them"""
        self._locks.clear()
        self._users.clear()

    def _enter(self, user_id: int) -> asyncio.Lock:
        self._users[user_id] = self._users.get(user_id, 0) + 1
        return self.get(user_id)

    def _leave(self, user_id: int) -> None:
        remaining = self._users.get(user_id, 0) - 1
        if remaining > 0:
            self._users[user_id] = remaining
        else:
            self._users.pop(user_id, None)
            self._locks.pop(user_id, None)

    @asynccontextmanager
    async def hold(self, *user_ids: int) -> AsyncIterator[None]:
        """
        Acquire the locks for all given users

        Locks are taken in ascending id order, duplicates once, so two
        settlements touching the same pair of users cannot deadlock.
        """
        ordered = sorted(set(user_ids))
        # Registered before the first await so concurrent callers share the lock
        locks = [self._enter(user_id) for user_id in ordered]
        acquired = []
        try:
            for lock in locks:
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for user_id in ordered:
                self._leave(user_id)

# Process-wide registry shared by all services
user_locks = UserLockRegistry()

"""Per-customer exclusive access for replay-and-append."""

from __future__ import annotations

import asyncio
import weakref


class AggregateLocks:
    """Hands out one ``asyncio.Lock`` per customer id.

    At most one replay+append runs per customer inside this process;
    different customers never wait on each other. Locks are dropped once
    nobody holds a reference to them. Writers in other processes are
    caught by the event store's expected-version check instead.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, customer_id: int) -> asyncio.Lock:
        lock = self._locks.get(customer_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[customer_id] = lock
        return lock

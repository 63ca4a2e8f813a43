# modcore/core/locks.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Generic, TypeVar

__all__ = ["RWLock", "Shared"]

T = TypeVar("T")



class RWLock:
    """
    asyncio reader/writer lock.

    Any number of readers may hold the lock at once; a writer holds it alone.
    Waiting writers block new readers so a steady stream of reads can't starve them.
    """
    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waitingWriters = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writing(self) -> bool:
        return self._writer

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._waitingWriters == 0)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waitingWriters += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._waitingWriters -= 1
                # A cancelled writer may have been the only thing holding readers back.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()



class Shared(Generic[T]):
    """A value guarded by an RWLock. Callers must not keep references past the `async with` block."""
    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = RWLock()

    @property
    def lock(self) -> RWLock:
        return self._lock

    @asynccontextmanager
    async def read(self) -> AsyncIterator[T]:
        async with self._lock.read():
            yield self._value

    @asynccontextmanager
    async def write(self) -> AsyncIterator[T]:
        async with self._lock.write():
            yield self._value

    async def replace(self, value: T) -> T:
        """Swap the guarded value under the write lock, returning the previous one."""
        async with self._lock.write():
            previous = self._value
            self._value = value
            return previous

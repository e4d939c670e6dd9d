"""Short-lived memoisation of the workspace index.

Building the index spawns processes, so repeated lookups within a few
seconds reuse the previous result.  There is one slot: the index does not
depend on any call argument.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import anyio
from loguru import logger

from vscode_helper.models.workspace import WorkspaceIndex

DEFAULT_TTL_SECONDS = 5.0


class IndexBuilder(Protocol):
    async def build(self) -> WorkspaceIndex: ...


@dataclass(frozen=True)
class CacheEntry:
    """A built index and the clock reading at which it was stored."""

    data: WorkspaceIndex
    timestamp: float


class IndexCache:
    """Single-slot TTL cache around an ``IndexBuilder``.

    The check-and-rebuild runs under a lock, so concurrent callers wait for
    one build instead of starting their own.  Entries are replaced, never
    updated in place.
    """

    def __init__(
        self,
        builder: IndexBuilder,
        *,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._builder = builder
        self._ttl = ttl
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._lock = anyio.Lock()

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.timestamp < self._ttl

    async def get(self) -> WorkspaceIndex:
        async with self._lock:
            entry = self._entry
            if entry is not None and self.is_fresh(entry):
                return entry.data

            data = await self._builder.build()
            self._entry = CacheEntry(data=data, timestamp=self._clock())
            logger.debug("Workspace index rebuilt ({} entries, ttl={}s)", len(data), self._ttl)
            return data

    def invalidate(self) -> None:
        self._entry = None

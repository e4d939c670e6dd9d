"""Tests for the TTL index cache."""

from __future__ import annotations

from pathlib import Path

import anyio

from vscode_helper.models.workspace import WorkspaceCandidate, WorkspaceIndex
from vscode_helper.workspace.cache import IndexCache


class CountingBuilder:
    def __init__(self, delay: float = 0.0) -> None:
        self.builds = 0
        self.delay = delay

    async def build(self) -> WorkspaceIndex:
        self.builds += 1
        if self.delay:
            await anyio.sleep(self.delay)
        return (WorkspaceCandidate(name=f"build{self.builds}", path=Path(f"/w/build{self.builds}")),)


async def test_get_reuses_index_within_ttl(fake_clock) -> None:
    builder = CountingBuilder()
    cache = IndexCache(builder, ttl=5.0, clock=fake_clock)

    first = await cache.get()
    fake_clock.advance(4.9)
    second = await cache.get()

    assert second is first
    assert builder.builds == 1


async def test_get_rebuilds_once_after_expiry(fake_clock) -> None:
    builder = CountingBuilder()
    cache = IndexCache(builder, ttl=5.0, clock=fake_clock)

    first = await cache.get()
    fake_clock.advance(5.0)
    second = await cache.get()
    third = await cache.get()

    assert builder.builds == 2
    assert second is not first
    assert third is second


async def test_entry_timestamp_uses_clock(fake_clock) -> None:
    cache = IndexCache(CountingBuilder(), ttl=5.0, clock=fake_clock)
    assert cache.entry is None

    await cache.get()

    assert cache.entry is not None
    assert cache.entry.timestamp == fake_clock.now
    assert cache.is_fresh(cache.entry)
    fake_clock.advance(10)
    assert not cache.is_fresh(cache.entry)


async def test_invalidate_forces_rebuild(fake_clock) -> None:
    builder = CountingBuilder()
    cache = IndexCache(builder, ttl=5.0, clock=fake_clock)

    await cache.get()
    cache.invalidate()
    await cache.get()

    assert builder.builds == 2


async def test_concurrent_callers_share_one_build(fake_clock) -> None:
    builder = CountingBuilder(delay=0.05)
    cache = IndexCache(builder, ttl=5.0, clock=fake_clock)
    results: list[WorkspaceIndex] = []

    async def fetch() -> None:
        results.append(await cache.get())

    async with anyio.create_task_group() as tg:
        for _ in range(5):
            tg.start_soon(fetch)

    assert builder.builds == 1
    assert all(r is results[0] for r in results)

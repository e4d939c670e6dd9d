"""Workspace resolver -- the engine's public entry point.

Wires signals -> index builder -> cache -> selector and exposes the three
lookups the CLI and the tool server need.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from pathlib import Path

from vscode_helper.models.workspace import (
    ActiveSelection,
    WorkspaceCandidate,
    WorkspaceIndex,
    WorkspaceNotFoundError,
)
from vscode_helper.settings import HelperSettings
from vscode_helper.workspace.cache import IndexCache
from vscode_helper.workspace.index import WorkspaceIndexBuilder, find_by_name
from vscode_helper.workspace.selector import ActiveWorkspaceSelector
from vscode_helper.workspace.signals import SignalReaders, SystemSignals


class WorkspaceResolver:
    """Answers "which workspaces are open" and "which one is active"."""

    def __init__(self, cache: IndexCache, selector: ActiveWorkspaceSelector) -> None:
        self._cache = cache
        self._selector = selector

    @classmethod
    def from_settings(
        cls,
        settings: HelperSettings,
        *,
        signals: SignalReaders | None = None,
        clock: Callable[[], float] = time.monotonic,
        home: Path | None = None,
    ) -> WorkspaceResolver:
        if signals is None:
            signals = SystemSignals(
                storage_dir=settings.resolved_storage_dir,
                code_command=settings.code_command,
                timeout=settings.probe_timeout,
            )
        builder = WorkspaceIndexBuilder(
            signals,
            product_name=settings.product_name,
            project_globs=settings.project_globs,
        )
        cache = IndexCache(builder, ttl=settings.cache_ttl, clock=clock)
        selector = ActiveWorkspaceSelector(signals, home=home, recent_limit=settings.recent_limit)
        return cls(cache, selector)

    async def list_open_workspaces(self) -> WorkspaceIndex:
        return await self._cache.get()

    async def select_active_workspace(self, caller_cwd: str | Path | None = None) -> ActiveSelection:
        cwd = _absolute(caller_cwd)
        return await self._selector.select(await self._cache.get(), cwd)

    async def resolve_active_workspace(self, caller_cwd: str | Path | None = None) -> Path:
        """Path of the active workspace.  Falls back to *caller_cwd*, never raises."""
        selection = await self.select_active_workspace(caller_cwd)
        return selection.path

    async def find_workspace_by_name(self, partial_name: str) -> WorkspaceCandidate:
        """Open workspace whose name matches *partial_name* (substring, any case).

        Raises ``WorkspaceNotFoundError`` listing the open workspace names.
        """
        index = await self._cache.get()
        match = find_by_name(index, partial_name) if partial_name.strip() else None
        if match is None:
            raise WorkspaceNotFoundError(partial_name, [c.name for c in index])
        return match


def _absolute(caller_cwd: str | Path | None) -> Path:
    if caller_cwd is None:
        return Path.cwd()
    return Path(os.path.abspath(caller_cwd))

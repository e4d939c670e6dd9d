"""Workspace index builder.

Reconciles the three signals into one ordered, path-unique list of open
workspaces:

1. Window titles give the names of workspaces that are on screen.
2. The recent-folder store gives ``{name, path}`` pairs.
3. Each displayed name is correlated with a stored record by a
   case-insensitive substring match in either direction.  Titles and folder
   paths only share a human-recognisable fragment, so exact matching would
   drop real workspaces.
4. Without any window titles (no window manager, headless session), the
   slow ``code --status`` dump is parsed instead and each folder name is
   mapped to a path via the store, then via common project directories.
5. Candidates are deduplicated by path, first occurrence wins.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Callable, Iterable
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from vscode_helper.models.workspace import WorkspaceCandidate, WorkspaceIndex
from vscode_helper.settings import DEFAULT_PROJECT_GLOBS
from vscode_helper.workspace.parsers import (
    names_match,
    parse_status_folders,
    parse_window_title,
    parse_workspace_record,
)
from vscode_helper.workspace.signals import SignalReaders

PathCheck = Callable[[Path], bool]


def path_exists(path: Path) -> bool:
    """``Path.exists`` that treats permission errors as "missing"."""
    try:
        return path.exists()
    except OSError:
        return False


def dedupe_by_path(candidates: Iterable[WorkspaceCandidate]) -> WorkspaceIndex:
    """Drop later candidates whose path was already seen."""
    seen: set[Path] = set()
    unique: list[WorkspaceCandidate] = []
    for candidate in candidates:
        if candidate.path in seen:
            continue
        seen.add(candidate.path)
        unique.append(candidate)
    return tuple(unique)


def find_by_name(candidates: Iterable[WorkspaceCandidate], name: str) -> WorkspaceCandidate | None:
    """First candidate whose name matches *name* under the substring policy."""
    return next((c for c in candidates if names_match(name, c.name)), None)


class WorkspaceIndexBuilder:
    """Builds a ``WorkspaceIndex`` from live signals.  Never raises."""

    def __init__(
        self,
        signals: SignalReaders,
        *,
        product_name: str = "Visual Studio Code",
        project_globs: list[str] | None = None,
        exists: PathCheck = path_exists,
    ) -> None:
        self._signals = signals
        self._product_name = product_name
        self._project_globs = project_globs if project_globs is not None else list(DEFAULT_PROJECT_GLOBS)
        self._exists = exists

    async def build(self) -> WorkspaceIndex:
        displayed = await self._displayed_names()
        records = self._parse_records(await self._signals.recent_records())

        if displayed:
            candidates = self._correlate(displayed, records)
        else:
            logger.debug("No editor windows listed, falling back to status output")
            candidates = await self._from_status(records)

        index = dedupe_by_path(candidates)
        logger.debug("Workspace index: {}", [c.name for c in index])
        return index

    # -- Fast path: window titles + recent store ------------------------------

    async def _displayed_names(self) -> list[str]:
        names = (parse_window_title(title, self._product_name) for title in await self._signals.window_titles())
        # Ordered set: window order is the preference order.
        return list(dict.fromkeys(name for name in names if name))

    @staticmethod
    def _parse_records(raw_records: list) -> list[WorkspaceCandidate]:
        return [c for c in map(parse_workspace_record, raw_records) if c is not None]

    def _correlate(self, displayed: list[str], records: list[WorkspaceCandidate]) -> list[WorkspaceCandidate]:
        accepted: list[WorkspaceCandidate] = []
        for name in displayed:
            match = next(
                (r for r in records if names_match(name, r.name) and self._exists(r.path)),
                None,
            )
            if match is None:
                logger.debug("No stored folder for window workspace {!r}", name)
                continue
            accepted.append(match)
        return accepted

    # -- Slow path: code --status ----------------------------------------------

    async def _from_status(self, records: list[WorkspaceCandidate]) -> list[WorkspaceCandidate]:
        names = list(dict.fromkeys(parse_status_folders(await self._signals.status_text())))
        if not names:
            return []
        return await to_thread.run_sync(partial(self._resolve_names, names, records))

    def _resolve_names(self, names: list[str], records: list[WorkspaceCandidate]) -> list[WorkspaceCandidate]:
        resolved: list[WorkspaceCandidate] = []
        for name in names:
            path = self._resolve_from_records(name, records) or self._resolve_from_globs(name)
            if path is None:
                logger.debug("Could not find path for workspace {!r}", name)
                continue
            logger.debug("Mapped {!r} to {}", name, path)
            resolved.append(WorkspaceCandidate(name=name, path=path))
        return resolved

    def _resolve_from_records(self, name: str, records: list[WorkspaceCandidate]) -> Path | None:
        for record in records:
            if record.name == name and self._exists(record.path):
                return record.path
        return None

    def _resolve_from_globs(self, name: str) -> Path | None:
        for pattern in self._project_globs:
            expanded = os.path.expanduser(pattern.format(name=glob.escape(name)))
            for match in sorted(glob.glob(expanded)):
                if os.path.isdir(match):
                    return Path(match)
        return None

"""Active-workspace selection.

Strategies are tried in order of confidence, first hit wins:

1. ``index_match``          -- the caller is inside an open workspace
2. ``first_candidate``      -- some workspace is open; take the preferred one
3. ``directory_indicator``  -- the directory tree looks like a project root
4. ``recent_store``         -- the editor remembers a recent folder
5. ``cwd_fallback``         -- no signal, use where the caller stands

Selection never fails: the last step always produces a path.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from vscode_helper.models.enums import SelectionMethod
from vscode_helper.models.workspace import ActiveSelection, WorkspaceIndex
from vscode_helper.workspace.index import PathCheck, path_exists
from vscode_helper.workspace.parsers import parse_workspace_record
from vscode_helper.workspace.signals import SignalReaders

PROJECT_INDICATORS = (
    ".git",
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "pyproject.toml",
    ".vscode",
)
EDITOR_SETTINGS_DIR = ".vscode"

Strategy = Callable[[WorkspaceIndex, Path], Awaitable[Path | None]]


# ---------------------------------------------------------------------------
# Directory indicators
# ---------------------------------------------------------------------------


def find_project_root(start: Path, home: Path | None = None) -> Path | None:
    """Walk from *start* toward ``/`` and return the first project-looking dir.

    The filesystem root itself is never reported.  A ``.vscode`` folder in
    *home* holds user-wide settings and only counts when its
    ``settings.json`` is a non-empty JSON object.
    """
    home = _real(home) if home is not None else None
    current = start
    while current != current.parent:
        for indicator in PROJECT_INDICATORS:
            if not path_exists(current / indicator):
                continue
            is_home = indicator == EDITOR_SETTINGS_DIR and _real(current) == home
            if is_home and not _has_workspace_settings(current):
                continue
            logger.debug("Found workspace indicator {} in {}", indicator, current)
            return current
        current = current.parent
    return None


def _real(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return path


def _has_workspace_settings(directory: Path) -> bool:
    settings_path = directory / EDITOR_SETTINGS_DIR / "settings.json"
    try:
        settings = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    return isinstance(settings, dict) and len(settings) > 0


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------


class ActiveWorkspaceSelector:
    """Picks exactly one workspace path for a caller directory."""

    def __init__(
        self,
        signals: SignalReaders,
        *,
        home: Path | None = None,
        recent_limit: int = 3,
        exists: PathCheck = path_exists,
    ) -> None:
        self._signals = signals
        self._home = home if home is not None else Path.home()
        self._recent_limit = recent_limit
        self._exists = exists
        self._strategies: list[tuple[SelectionMethod, Strategy]] = [
            (SelectionMethod.INDEX_MATCH, self._enclosing_candidate),
            (SelectionMethod.FIRST_CANDIDATE, self._first_candidate),
            (SelectionMethod.DIRECTORY_INDICATOR, self._directory_indicator),
            (SelectionMethod.RECENT_STORE, self._recent_store),
        ]

    async def select(self, candidates: WorkspaceIndex, caller_cwd: Path) -> ActiveSelection:
        for method, strategy in self._strategies:
            path = await strategy(candidates, caller_cwd)
            if path is not None:
                logger.debug("Active workspace {} (method={})", path, method)
                return ActiveSelection(path=path, method=method)

        logger.debug("No workspace signal, using current directory {}", caller_cwd)
        return ActiveSelection(path=caller_cwd, method=SelectionMethod.CWD_FALLBACK)

    # -- Strategies --------------------------------------------------------------

    async def _enclosing_candidate(self, candidates: WorkspaceIndex, caller_cwd: Path) -> Path | None:
        enclosing = [c.path for c in candidates if caller_cwd.is_relative_to(c.path)]
        if not enclosing:
            return None
        # Nested workspaces: the innermost one is the caller's.
        return max(enclosing, key=lambda path: len(path.parts))

    async def _first_candidate(self, candidates: WorkspaceIndex, caller_cwd: Path) -> Path | None:
        return candidates[0].path if candidates else None

    async def _directory_indicator(self, candidates: WorkspaceIndex, caller_cwd: Path) -> Path | None:
        return await to_thread.run_sync(partial(find_project_root, caller_cwd, self._home))

    async def _recent_store(self, candidates: WorkspaceIndex, caller_cwd: Path) -> Path | None:
        for raw in await self._signals.recent_records(limit=self._recent_limit):
            record = parse_workspace_record(raw)
            if record is not None and self._exists(record.path):
                return record.path
        return None

"""Workspace data model.

A workspace is an editor window's root folder.  Candidates are assembled
from imperfect signals (window titles, ``code --status``, the recent-folder
store) and are never mutated once built.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from vscode_helper.models.enums import SelectionMethod


class WorkspaceCandidate(BaseModel):
    """A possibly-open workspace."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path


WorkspaceIndex = tuple[WorkspaceCandidate, ...]
"""Candidates in signal-preference order, unique by ``path``."""


class ActiveSelection(BaseModel):
    """The chosen active workspace plus the strategy that chose it."""

    model_config = ConfigDict(frozen=True)

    path: Path
    method: SelectionMethod


class WorkspaceNotFoundError(LookupError):
    """No open workspace matches the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        if available:
            super().__init__(f"Workspace '{name}' not found. Available workspaces: {', '.join(available)}")
        else:
            super().__init__(f"Workspace '{name}' not found. No open workspaces detected")

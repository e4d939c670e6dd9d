"""Data models for the helper."""

from vscode_helper.models.enums import SearchType, SelectionMethod
from vscode_helper.models.tools import (
    CreateFileArgs,
    NoArgs,
    OpenFileArgs,
    PathArgs,
    RunTerminalCommandArgs,
    SearchWorkspaceArgs,
    WorkspaceFile,
)
from vscode_helper.models.workspace import (
    ActiveSelection,
    WorkspaceCandidate,
    WorkspaceIndex,
    WorkspaceNotFoundError,
)

__all__ = [
    "ActiveSelection",
    "CreateFileArgs",
    "NoArgs",
    "OpenFileArgs",
    "PathArgs",
    "RunTerminalCommandArgs",
    "SearchType",
    "SearchWorkspaceArgs",
    "SelectionMethod",
    "WorkspaceCandidate",
    "WorkspaceFile",
    "WorkspaceIndex",
    "WorkspaceNotFoundError",
]

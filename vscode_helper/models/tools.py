"""Argument and result schemas for the tool server.

Argument models validate the ``arguments`` object of a tool call; their JSON
schema is what ``tools/list`` advertises.  Result models are the structured
payloads behind JSON resources and ``--json`` CLI output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vscode_helper.models.enums import SearchType

# ---------------------------------------------------------------------------
# Tool arguments
# ---------------------------------------------------------------------------


class NoArgs(BaseModel):
    """Tools that take no arguments."""


class OpenFileArgs(BaseModel):
    path: str = Field(description="Path to the file to open")
    line: int | None = Field(default=None, ge=1, description="Optional line number to jump to")


class RunTerminalCommandArgs(BaseModel):
    command: str = Field(description="Command to execute")
    cwd: str | None = Field(default=None, description="Working directory (optional)")


class CreateFileArgs(BaseModel):
    path: str = Field(description="Path for the new file")
    content: str = Field(description="File content")


class SearchWorkspaceArgs(BaseModel):
    query: str = Field(description="Search query")
    type: SearchType = Field(description="Search type: files or content")


class PathArgs(BaseModel):
    path: str = Field(description="Path to the file")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class WorkspaceFile(BaseModel):
    """One entry of the workspace file listing."""

    path: str
    size: int
    type: str = "file"

"""Human-readable renderings shared by the CLI and the tool server."""

from __future__ import annotations

from pathlib import Path

from vscode_helper.models.tools import WorkspaceFile
from vscode_helper.models.workspace import WorkspaceCandidate, WorkspaceIndex


def file_matches(query: str, files: list[str]) -> str:
    return f'Found {len(files)} files matching "{query}":\n' + "\n".join(files)


def content_matches(query: str, output: str) -> str:
    return f'Content search results for "{query}":\n{output}'


def active_workspace(path: Path) -> str:
    return f"Active VSCode workspace: {path}"


def workspace_list(index: WorkspaceIndex) -> str:
    if not index:
        return "No open VSCode workspaces found"
    lines = [f"  {c.name} - {c.path}" for c in index]
    return f"Open VSCode workspaces ({len(index)}):\n" + "\n".join(lines)


def workspace_info(candidate: WorkspaceCandidate) -> str:
    return f"Workspace: {candidate.name}\nPath: {candidate.path}"


def file_listing(files: list[WorkspaceFile]) -> str:
    return f"Workspace files ({len(files)}):\n" + "\n".join(f"  {f.path}" for f in files)

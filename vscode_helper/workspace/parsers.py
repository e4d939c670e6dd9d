"""Pure parsers for the three workspace signals.

Window titles carry a human-readable workspace label but never a path;
``code --status`` carries folder names but never a path; the recent-folder
store carries paths but says nothing about which windows are open.  Each
parser extracts what its signal offers and nothing more.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import unquote

from vscode_helper.models.workspace import WorkspaceCandidate

TITLE_SEPARATOR = " - "
STATUS_SECTION_MARKER = "Workspace Stats:"
FOLDER_URI_PREFIX = "file://"

# "    Folder (deb-helper): 2 files" or "|    Folder (deb-helper): 2 files"
_FOLDER_LINE = re.compile(r"^\s*\|?\s*Folder \(([^)]+)\):")


def parse_window_title(title: str, product_name: str) -> str | None:
    """Extract the workspace name from an editor window title.

    Titles look like ``"file - workspace - <product>"`` or
    ``"workspace - <product>"``.  Windows of other applications (last
    fragment is not ``product_name``) and bare ``"<product>"`` windows give
    ``None``.
    """
    parts = [part.strip() for part in title.split(TITLE_SEPARATOR)]
    if len(parts) < 2 or parts[-1] != product_name:
        return None

    remaining = parts[:-1]
    name = remaining[-1]
    return name or None


def parse_status_folders(status_text: str) -> Iterator[str]:
    """Yield folder names listed in the workspace section of ``code --status``."""
    in_section = False
    for line in status_text.splitlines():
        if STATUS_SECTION_MARKER in line:
            in_section = True
            continue
        if not in_section:
            continue

        match = _FOLDER_LINE.match(line)
        if match:
            yield match.group(1)


def parse_workspace_record(record: Any) -> WorkspaceCandidate | None:
    """Turn a ``workspace.json`` object into a candidate.

    Only single-folder records with a local, absolute ``file://`` URI are
    accepted;
    multi-root ``workspace`` entries and remote URIs are ignored.
    """
    if not isinstance(record, dict):
        return None
    folder = record.get("folder")
    if not isinstance(folder, str) or not folder.startswith(FOLDER_URI_PREFIX):
        return None

    raw_path = unquote(folder[len(FOLDER_URI_PREFIX) :])
    # "file://host/share" (UNC, WSL) leaves a host-relative path.
    if not PurePosixPath(raw_path).is_absolute():
        return None
    name = PurePosixPath(raw_path).name
    if not name:
        return None
    return WorkspaceCandidate(name=name, path=Path(raw_path))


def names_match(left: str, right: str) -> bool:
    """Case-insensitive substring match in either direction.

    Known limitation: a short name matches every longer name containing it
    ("app" matches "webapp").
    """
    a, b = left.casefold(), right.casefold()
    return a in b or b in a

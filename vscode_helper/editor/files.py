"""Local file operations relative to a workspace root.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path, so the editor never opens a half-written
file.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from vscode_helper.models.tools import WorkspaceFile

IGNORED_DIRS = frozenset({"node_modules", ".git", "dist", "build"})
IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".svg"})


def resolve_in(root: Path, path: str | Path) -> Path:
    """Absolute path for *path*, interpreted relative to *root*."""
    return Path(os.path.abspath(root / Path(path).expanduser()))


def atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def iter_workspace_files(root: Path) -> Iterator[Path]:
    """Yield files under *root* (relative paths), skipping ignored directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
        base = Path(dirpath).relative_to(root)
        for filename in sorted(filenames):
            yield base / filename


def list_workspace_files(root: Path) -> list[WorkspaceFile]:
    """Workspace file listing without images, with sizes."""
    files: list[WorkspaceFile] = []
    for relative in iter_workspace_files(root):
        if relative.suffix.lower() in IMAGE_SUFFIXES:
            continue
        try:
            size = (root / relative).stat().st_size
        except OSError:
            # Dangling symlink or file removed mid-walk.
            continue
        files.append(WorkspaceFile(path=relative.as_posix(), size=size))
    return files

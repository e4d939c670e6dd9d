"""File-name and content search over a workspace root."""

from __future__ import annotations

import fnmatch
from collections.abc import Sequence
from pathlib import Path

import anyio
from loguru import logger

from vscode_helper.editor.files import IGNORED_DIRS, iter_workspace_files


class SearchUnavailableError(RuntimeError):
    """Neither ripgrep nor grep could run."""

    def __init__(self) -> None:
        super().__init__("Neither ripgrep nor grep available for content search")


def search_files(root: Path, query: str) -> list[str]:
    """Relative paths of files whose name matches ``*<query>*`` (glob syntax)."""
    pattern = f"*{query}*"
    return [p.as_posix() for p in iter_workspace_files(root) if fnmatch.fnmatchcase(p.name, pattern)]


def _content_commands(query: str) -> list[list[str]]:
    ignored = sorted(IGNORED_DIRS)
    return [
        ["rg", "-n", "--no-heading", *(f"--glob=!{d}" for d in ignored), "-e", query, "."],
        ["grep", "-r", "-n", "-I", *(f"--exclude-dir={d}" for d in ignored), "-e", query, "."],
    ]


async def search_content(root: Path, query: str) -> str:
    """Matching lines as ``path:line:text``, via ripgrep then grep.

    Both tools exit with status 1 when nothing matches; that is an empty
    result, not a failure.
    """
    for argv in _content_commands(query):
        output = await _run_search(argv, root)
        if output is not None:
            return output
    raise SearchUnavailableError


async def _run_search(argv: Sequence[str], cwd: Path) -> str | None:
    try:
        result = await anyio.run_process(list(argv), cwd=cwd, check=False)
    except OSError as exc:
        logger.debug("{} unavailable: {}", argv[0], exc)
        return None

    stdout = result.stdout.decode("utf-8", errors="replace")
    if result.returncode in (0, 1) or stdout:
        return stdout
    logger.debug("{} exited with {}: {}", argv[0], result.returncode, result.stderr.decode(errors="replace").strip())
    return None

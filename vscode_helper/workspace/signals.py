"""External signal readers.

Each reader queries one imperfect source of workspace information: the
window manager (``wmctrl -l``), the editor CLI (``code --status``) and the
editor's recent-folder store (``workspaceStorage/*/workspace.json``).

Readers never raise.  A missing tool, a non-zero exit, a timeout or an
unreadable file all mean "no data": the caller always has another fallback.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from functools import partial
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import anyio
from anyio import to_thread
from loguru import logger

WINDOW_LIST_COMMAND = ("wmctrl", "-l")
WORKSPACE_RECORD_GLOB = "*/workspace.json"


@runtime_checkable
class SignalReaders(Protocol):
    """The three signals consumed by the index builder and selector."""

    async def window_titles(self) -> list[str]:
        """Titles of all on-screen windows (any application)."""
        ...

    async def status_text(self) -> str:
        """Raw ``code --status`` output, or an empty string."""
        ...

    async def recent_records(self, limit: int | None = None) -> list[Any]:
        """Decoded ``workspace.json`` objects, most recently modified first."""
        ...


class SystemSignals:
    """Signal readers backed by real processes and the real filesystem."""

    def __init__(
        self,
        *,
        storage_dir: Path,
        code_command: str = "code",
        timeout: float = 3.0,
        window_command: Sequence[str] = WINDOW_LIST_COMMAND,
    ) -> None:
        self._storage_dir = storage_dir
        self._code_command = code_command
        self._timeout = timeout
        self._window_command = list(window_command)

    async def window_titles(self) -> list[str]:
        stdout = await _probe(self._window_command, self._timeout)
        titles = [title for line in stdout.splitlines() if (title := _title_column(line))]
        logger.debug("Window list: {} titles", len(titles))
        return titles

    async def status_text(self) -> str:
        return await _probe([self._code_command, "--status"], self._timeout)

    async def recent_records(self, limit: int | None = None) -> list[Any]:
        records: list[Any] = []
        with anyio.move_on_after(self._timeout) as scope:
            try:
                records = await to_thread.run_sync(
                    partial(read_workspace_records, self._storage_dir, limit),
                    abandon_on_cancel=True,
                )
            except Exception as exc:
                logger.debug("Recent-store scan of {} failed: {!r}", self._storage_dir, exc)
        if scope.cancelled_caught:
            logger.debug("Recent-store scan of {} timed out after {}s", self._storage_dir, self._timeout)
        return records


# -- Helpers -------------------------------------------------------------------


async def _probe(command: Sequence[str], timeout: float) -> str:
    """Run a read-only command and return its stdout, or "" if unavailable."""
    try:
        with anyio.fail_after(timeout):
            result = await anyio.run_process(list(command), check=False)
    except TimeoutError:
        logger.debug("Probe {!r} timed out after {}s", command[0], timeout)
        return ""
    except OSError as exc:
        logger.debug("Probe {!r} unavailable: {}", command[0], exc)
        return ""
    except Exception as exc:
        logger.debug("Probe {!r} failed: {!r}", command[0], exc)
        return ""

    if result.returncode != 0:
        logger.debug("Probe {!r} exited with {}", command[0], result.returncode)
        return ""
    return result.stdout.decode("utf-8", errors="replace")


def _title_column(line: str) -> str | None:
    """Title column of a ``wmctrl -l`` line: ``<id> <desktop> <host> <title>``."""
    fields = line.split(None, 3)
    if len(fields) < 4:
        return None
    return fields[3].strip() or None


def read_workspace_records(storage_dir: Path, limit: int | None = None) -> list[Any]:
    """Read ``workspace.json`` files under *storage_dir*, newest first.

    Runs in a worker thread.  Unreadable or malformed files are skipped one by
    one; a missing storage directory yields an empty list.
    """
    stamped: list[tuple[float, Path]] = []
    try:
        for path in storage_dir.glob(WORKSPACE_RECORD_GLOB):
            try:
                stamped.append((path.stat().st_mtime, path))
            except OSError:
                continue
    except OSError as exc:
        logger.debug("Recent store {} unreadable: {}", storage_dir, exc)
        return []

    stamped.sort(key=lambda item: item[0], reverse=True)
    if limit is not None:
        stamped = stamped[:limit]

    records: list[Any] = []
    for _, path in stamped:
        try:
            records.append(json.loads(path.read_text(encoding="utf-8")))
        except Exception as exc:
            # Includes RecursionError from pathologically nested JSON.
            logger.debug("Skipping recent-store record {}: {!r}", path, exc)
    return records

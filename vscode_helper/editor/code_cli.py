"""Thin async wrapper around the editor's ``code`` command."""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path

import anyio
from loguru import logger


class EditorCommandError(RuntimeError):
    """The editor CLI could not be run or exited with an error."""

    def __init__(self, argv: Sequence[str], detail: str) -> None:
        self.argv = list(argv)
        super().__init__(f"`{shlex.join(self.argv)}` failed: {detail}")


class CodeCLI:
    """Invokes ``code`` with a bounded wait.

    Every call is fire-and-forget from the editor's point of view: ``code``
    hands the request to the running instance and exits.
    """

    def __init__(self, command: str = "code", *, timeout: float | None = 30.0) -> None:
        self._command = command
        self._timeout = timeout

    @property
    def command(self) -> str:
        return self._command

    async def run(self, *args: str) -> str:
        argv = [self._command, *args]
        logger.debug("Executing command: {}", shlex.join(argv))
        try:
            with anyio.fail_after(self._timeout):
                result = await anyio.run_process(argv, check=False)
        except TimeoutError as exc:
            raise EditorCommandError(argv, f"timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise EditorCommandError(argv, str(exc)) from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise EditorCommandError(argv, stderr or f"exit status {result.returncode}")
        return result.stdout.decode("utf-8", errors="replace")

    async def open(self, path: Path, line: int | None = None) -> None:
        if line:
            await self.run("--goto", f"{path}:{line}")
        else:
            await self.run(str(path))

    async def execute(self, command_id: str, *paths: Path) -> None:
        """Ask the running editor to execute a workbench command."""
        await self.run("--command", command_id, *(str(p) for p in paths))

"""Editor controller -- the operations behind CLI commands and server tools.

Plain file and search operations work relative to ``root`` (the directory
the helper was started in).  Explorer selection and the workspace actions
ask the resolution engine which workspace is active instead.

Operations raise domain exceptions (``FileNotFoundError``,
``EditorCommandError``, ``SearchUnavailableError``,
``WorkspaceNotFoundError``); translating them to exit codes or protocol
errors is the caller's job.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

import anyio
from anyio import to_thread
from loguru import logger

from vscode_helper.editor import formatting
from vscode_helper.editor.code_cli import CodeCLI, EditorCommandError
from vscode_helper.editor.files import atomic_write, list_workspace_files, resolve_in
from vscode_helper.editor.search import search_content, search_files
from vscode_helper.models.enums import SearchType
from vscode_helper.models.tools import WorkspaceFile
from vscode_helper.models.workspace import WorkspaceCandidate, WorkspaceIndex
from vscode_helper.settings import HelperSettings
from vscode_helper.workspace.resolver import WorkspaceResolver

EDITOR_CONTENT_UNAVAILABLE = (
    "Current editor content access requires a VSCode extension. "
    "Open tabs and cursor position are not visible from the command line."
)

# Workbench command identifiers
CMD_NEW_TERMINAL = "workbench.action.terminal.new"
CMD_REVEAL_IN_OS = "revealFileInOS"
CMD_SHOW_IN_EXPLORER = "workbench.files.action.showActiveFileInExplorer"
CMD_OPEN_TO_SIDE = "explorer.openToSide"
CMD_FOCUS_EXPLORER = "workbench.view.explorer"


class EditorController:
    def __init__(self, resolver: WorkspaceResolver, code: CodeCLI, *, root: Path | None = None) -> None:
        self.resolver = resolver
        self.code = code
        self.root = root if root is not None else Path.cwd()

    @classmethod
    def from_settings(cls, settings: HelperSettings, *, root: Path | None = None) -> EditorController:
        return cls(
            WorkspaceResolver.from_settings(settings),
            CodeCLI(settings.code_command),
            root=root,
        )

    # -- Files -----------------------------------------------------------------

    async def open_file(self, path: str, line: int | None = None) -> str:
        absolute = resolve_in(self.root, path)
        logger.debug("Opening file: {}{}", absolute, f" at line {line}" if line else "")
        await self.code.open(absolute, line)
        return f"Successfully opened {path}{f' at line {line}' if line else ''} in VSCode"

    async def create_file(self, path: str, content: str) -> str:
        absolute = resolve_in(self.root, path)
        await to_thread.run_sync(partial(atomic_write, absolute, content))
        await self.code.open(absolute)
        return f"Successfully created file {path} and opened in VSCode"

    async def list_workspace_files(self) -> list[WorkspaceFile]:
        return await to_thread.run_sync(partial(list_workspace_files, self.root))

    def current_editor_content(self) -> str:
        return EDITOR_CONTENT_UNAVAILABLE

    # -- Terminal --------------------------------------------------------------

    async def run_terminal_command(self, command: str, cwd: str | None = None) -> str:
        working_dir = resolve_in(self.root, cwd) if cwd else self.root
        logger.debug("Running {!r} in {}", command, working_dir)
        try:
            result = await anyio.run_process(command, cwd=working_dir, check=False)
        except OSError as exc:
            raise EditorCommandError([command], str(exc)) from exc

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0:
            raise EditorCommandError([command], f"exit status {result.returncode}\n{stdout}{stderr}".rstrip())

        output = stdout + (f"\nSTDERR: {stderr}" if stderr else "")

        # Surface a terminal in the editor too; a missing editor is not an error here.
        try:
            await self.code.execute(CMD_NEW_TERMINAL)
        except EditorCommandError as exc:
            logger.debug("Could not open editor terminal: {}", exc)

        return f"Command executed: {command}\n\nOutput:\n{output}"

    # -- Search ----------------------------------------------------------------

    async def search_workspace(self, query: str, search_type: SearchType) -> str:
        if search_type == SearchType.FILES:
            files = await to_thread.run_sync(partial(search_files, self.root, query))
            return formatting.file_matches(query, files)
        output = await search_content(self.root, query)
        return formatting.content_matches(query, output)

    # -- Explorer --------------------------------------------------------------

    async def reveal_in_explorer(self, path: str) -> str:
        absolute = resolve_in(self.root, path)
        if not absolute.exists():
            raise FileNotFoundError(f"File does not exist: {path}")

        await self.code.execute(CMD_REVEAL_IN_OS, absolute)
        try:
            await self.code.execute(CMD_SHOW_IN_EXPLORER, absolute)
        except EditorCommandError:
            await self.code.execute(CMD_OPEN_TO_SIDE, absolute)
        return f"Successfully revealed {path} in file explorer"

    async def focus_explorer(self) -> str:
        await self.code.execute(CMD_FOCUS_EXPLORER)
        return "Successfully focused file explorer in VSCode"

    async def select_file_in_explorer(self, path: str) -> str:
        workspace = await self.resolver.resolve_active_workspace(self.root)
        logger.debug("Using active workspace: {}", workspace)

        target = resolve_in(workspace, path)
        if not target.exists():
            if not Path(path).is_absolute():
                raise FileNotFoundError(f"File does not exist: {path} (looked in {workspace})")
            target = Path(path)
            if not target.exists():
                raise FileNotFoundError(f"File does not exist: {path}")

        # One invocation: opening and revealing separately can spawn a second window.
        await self.code.run(str(target), "--command", CMD_SHOW_IN_EXPLORER)
        return f"Successfully selected {path} in VSCode file explorer (workspace: {workspace})"

    # -- Workspaces ------------------------------------------------------------

    async def active_workspace(self) -> Path:
        return await self.resolver.resolve_active_workspace(self.root)

    async def list_workspaces(self) -> WorkspaceIndex:
        return await self.resolver.list_open_workspaces()

    async def workspace_info(self, name: str) -> WorkspaceCandidate:
        return await self.resolver.find_workspace_by_name(name)

    async def open_terminal_in_workspace(self, name: str | None = None) -> str:
        label, path = await self._target_workspace(name)
        await self.code.run(str(path), "--command", CMD_NEW_TERMINAL)
        return f"Opened a new terminal in workspace {label} ({path})"

    async def focus_workspace(self, name: str | None = None) -> str:
        label, path = await self._target_workspace(name)
        # Opening an already-open folder brings its window forward.
        await self.code.run(str(path))
        return f"Focused workspace {label} ({path})"

    async def open_file_in_workspace(self, path: str, name: str | None = None) -> str:
        label, workspace = await self._target_workspace(name)
        target = resolve_in(workspace, path)
        if not target.exists():
            raise FileNotFoundError(f"File does not exist: {path} (looked in {workspace})")
        await self.code.run(str(workspace), str(target))
        return f"Successfully opened {path} in workspace {label}"

    async def _target_workspace(self, name: str | None) -> tuple[str, Path]:
        if name:
            candidate = await self.resolver.find_workspace_by_name(name)
            return candidate.name, candidate.path
        path = await self.resolver.resolve_active_workspace(self.root)
        return path.name, path

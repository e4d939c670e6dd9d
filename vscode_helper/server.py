"""MCP server exposing the editor controller over stdio.

Each tool has a pydantic argument model: it validates incoming ``arguments``
and its JSON schema is what ``tools/list`` advertises.  Dispatch lives in
``ToolDispatcher`` so it can be exercised without a transport; the MCP
``Server`` only adapts its results to protocol content types.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl, BaseModel

from vscode_helper import __version__
from vscode_helper.editor import formatting
from vscode_helper.editor.controller import EditorController
from vscode_helper.models.tools import (
    CreateFileArgs,
    NoArgs,
    OpenFileArgs,
    PathArgs,
    RunTerminalCommandArgs,
    SearchWorkspaceArgs,
)

SERVER_NAME = "vscode-self-mcp"

FILES_RESOURCE_URI = "vscode://workspace/files"
EDITOR_RESOURCE_URI = "vscode://editor/content"


class UnknownToolError(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")


class UnknownResourceError(LookupError):
    def __init__(self, uri: str) -> None:
        super().__init__(f"Unknown resource: {uri}")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: type[BaseModel]


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec("open_file", "Open a file in VSCode", OpenFileArgs),
    ToolSpec("run_terminal_command", "Execute a command in VSCode terminal", RunTerminalCommandArgs),
    ToolSpec("create_file", "Create a new file with content", CreateFileArgs),
    ToolSpec("search_workspace", "Search for files or content in workspace", SearchWorkspaceArgs),
    ToolSpec("reveal_in_explorer", "Reveal a file in VSCode file explorer", PathArgs),
    ToolSpec("focus_explorer", "Focus the VSCode file explorer view", NoArgs),
    ToolSpec("select_file_in_explorer", "Select/highlight a file in VSCode file explorer", PathArgs),
    ToolSpec("get_active_workspace", "Show the VSCode workspace the helper considers active", NoArgs),
    ToolSpec("list_workspaces", "List the VSCode workspaces that are currently open", NoArgs),
)

RESOURCES: tuple[types.Resource, ...] = (
    types.Resource(
        uri=FILES_RESOURCE_URI,
        name="Workspace Files",
        description="List of files in the current workspace",
        mimeType="application/json",
    ),
    types.Resource(
        uri=EDITOR_RESOURCE_URI,
        name="Current Editor Content",
        description="Content of the currently active editor",
        mimeType="text/plain",
    ),
)


class ToolDispatcher:
    """Routes tool calls and resource reads to the controller."""

    def __init__(self, controller: EditorController) -> None:
        self._controller = controller
        self._specs = {spec.name: spec for spec in TOOLS}
        self._handlers: dict[str, Callable[[Any], Awaitable[str]]] = {
            "open_file": self._open_file,
            "run_terminal_command": self._run_terminal_command,
            "create_file": self._create_file,
            "search_workspace": self._search_workspace,
            "reveal_in_explorer": self._reveal_in_explorer,
            "focus_explorer": self._focus_explorer,
            "select_file_in_explorer": self._select_file_in_explorer,
            "get_active_workspace": self._get_active_workspace,
            "list_workspaces": self._list_workspaces,
        }

    # -- Listing ---------------------------------------------------------------

    def tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=spec.name,
                description=spec.description,
                inputSchema=spec.args_model.model_json_schema(),
            )
            for spec in TOOLS
        ]

    def resources(self) -> list[types.Resource]:
        return list(RESOURCES)

    # -- Dispatch --------------------------------------------------------------

    async def call(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Validate *arguments* and run tool *name*.

        Raises ``UnknownToolError`` or pydantic ``ValidationError``; controller
        exceptions propagate unchanged.
        """
        spec = self._specs.get(name)
        if spec is None:
            raise UnknownToolError(name)
        args = spec.args_model.model_validate(arguments or {})
        logger.debug("Tool call {} {}", name, args.model_dump())
        return await self._handlers[name](args)

    async def read(self, uri: str) -> tuple[str, str]:
        """Return ``(text, mime_type)`` for resource *uri*."""
        uri = uri.rstrip("/")
        if uri == FILES_RESOURCE_URI:
            files = await self._controller.list_workspace_files()
            return json.dumps([f.model_dump() for f in files], indent=2), "application/json"
        if uri == EDITOR_RESOURCE_URI:
            return self._controller.current_editor_content(), "text/plain"
        raise UnknownResourceError(uri)

    # -- Handlers --------------------------------------------------------------

    async def _open_file(self, args: OpenFileArgs) -> str:
        return await self._controller.open_file(args.path, args.line)

    async def _run_terminal_command(self, args: RunTerminalCommandArgs) -> str:
        return await self._controller.run_terminal_command(args.command, args.cwd)

    async def _create_file(self, args: CreateFileArgs) -> str:
        return await self._controller.create_file(args.path, args.content)

    async def _search_workspace(self, args: SearchWorkspaceArgs) -> str:
        return await self._controller.search_workspace(args.query, args.type)

    async def _reveal_in_explorer(self, args: PathArgs) -> str:
        return await self._controller.reveal_in_explorer(args.path)

    async def _focus_explorer(self, args: NoArgs) -> str:
        return await self._controller.focus_explorer()

    async def _select_file_in_explorer(self, args: PathArgs) -> str:
        return await self._controller.select_file_in_explorer(args.path)

    async def _get_active_workspace(self, args: NoArgs) -> str:
        return formatting.active_workspace(await self._controller.active_workspace())

    async def _list_workspaces(self, args: NoArgs) -> str:
        return formatting.workspace_list(await self._controller.list_workspaces())


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build the MCP ``Server`` with handlers bound to *dispatcher*."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        text = await dispatcher.call(name, arguments)
        return [types.TextContent(type="text", text=text)]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return dispatcher.resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl | str) -> list[ReadResourceContents]:
        text, mime_type = await dispatcher.read(str(uri))
        return [ReadResourceContents(content=text, mime_type=mime_type)]

    return server


async def serve(controller: EditorController) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    server = create_server(ToolDispatcher(controller))
    logger.info("{} {} listening on stdio (root={})", SERVER_NAME, __version__, controller.root)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())

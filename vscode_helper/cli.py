from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio
import click

from vscode_helper import __version__
from vscode_helper.editor import formatting
from vscode_helper.editor.controller import EditorController
from vscode_helper.models.enums import SearchType

T = TypeVar("T")

# Domain exceptions raised by the controller; anything else is a bug and keeps its traceback.
_DOMAIN_ERRORS = (LookupError, OSError, RuntimeError)

WORKSPACE_ACTIONS = ("open-terminal", "focus", "open-file")


def _controller(ctx: click.Context) -> EditorController:
    """Controller for this invocation (tests may pre-seed one in ``ctx.obj``)."""
    state: dict = ctx.obj
    if state.get("controller") is None:
        state["controller"] = EditorController.from_settings(state["settings"])
    return state["controller"]


def _run(func: Callable[[], Awaitable[T]]) -> T:
    """Run an async controller call, turning domain errors into ``Error: ...`` + exit 1."""
    try:
        return anyio.run(func)
    except _DOMAIN_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(__version__, prog_name="vscode-helper")
@click.option("--debug", is_flag=True, default=False, help="Enable debug output (or set VSCODE_MCP_DEBUG=true).")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """vscode-helper - CLI helper for controlling VSCode from the command line."""
    from vscode_helper.log import setup_logging
    from vscode_helper.settings import get_settings

    settings = get_settings()
    if debug:
        settings = settings.model_copy(update={"debug": True})
    setup_logging(settings.effective_log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@main.command("open")
@click.argument("file")
@click.option("-l", "--line", type=int, default=None, help="Line number to jump to.")
@click.pass_context
def open_(ctx: click.Context, file: str, line: int | None) -> None:
    """Open a file in VSCode."""
    controller = _controller(ctx)
    click.echo(_run(lambda: controller.open_file(file, line)))


@main.command()
@click.argument("file")
@click.option("-c", "--content", default="", help="File content.")
@click.pass_context
def create(ctx: click.Context, file: str, content: str) -> None:
    """Create a new file and open it."""
    controller = _controller(ctx)
    click.echo(_run(lambda: controller.create_file(file, content)))


@main.command()
@click.argument("command")
@click.option("--cwd", default=None, help="Working directory.")
@click.pass_context
def run(ctx: click.Context, command: str, cwd: str | None) -> None:
    """Run a command in the terminal."""
    controller = _controller(ctx)
    click.echo(_run(lambda: controller.run_terminal_command(command, cwd)))


@main.command()
@click.argument("query")
@click.option(
    "-t",
    "--type",
    "search_type",
    type=click.Choice([t.value for t in SearchType]),
    default=SearchType.FILES.value,
    show_default=True,
    help="Search type: files or content.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def search(ctx: click.Context, query: str, search_type: str, as_json: bool) -> None:
    """Search the workspace."""
    controller = _controller(ctx)
    results = _run(lambda: controller.search_workspace(query, SearchType(search_type)))
    if as_json:
        _echo_json({"query": query, "type": search_type, "results": results})
    else:
        click.echo(results)


@main.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def files(ctx: click.Context, as_json: bool) -> None:
    """List workspace files."""
    controller = _controller(ctx)
    listing = _run(controller.list_workspace_files)
    if as_json:
        _echo_json([f.model_dump() for f in listing])
    else:
        click.echo(formatting.file_listing(listing))


# ---------------------------------------------------------------------------
# Explorer
# ---------------------------------------------------------------------------


@main.command()
@click.argument("file")
@click.pass_context
def reveal(ctx: click.Context, file: str) -> None:
    """Reveal a file in the VSCode file explorer."""
    controller = _controller(ctx)
    click.echo(_run(lambda: controller.reveal_in_explorer(file)))


@main.command()
@click.argument("file")
@click.pass_context
def select(ctx: click.Context, file: str) -> None:
    """Select a file in the explorer of the active workspace."""
    controller = _controller(ctx)
    click.echo(_run(lambda: controller.select_file_in_explorer(file)))


@main.command("focus-explorer")
@click.pass_context
def focus_explorer(ctx: click.Context) -> None:
    """Focus the VSCode file explorer."""
    controller = _controller(ctx)
    click.echo(_run(controller.focus_explorer))


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@main.command()
@click.argument("action", required=False, type=click.Choice(WORKSPACE_ACTIONS))
@click.argument("target", required=False)
@click.option("--active", is_flag=True, default=False, help="Show the current active workspace.")
@click.option("--list", "list_", is_flag=True, default=False, help="List all open workspaces.")
@click.option("--get", "name", default=None, help="Target a specific workspace by name.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def workspace(
    ctx: click.Context,
    action: str | None,
    target: str | None,
    active: bool,
    list_: bool,
    name: str | None,
    as_json: bool,
) -> None:
    """Workspace queries (--active, --list, --get) and actions.

    \b
    Actions:
      open-terminal      open a terminal in the workspace
      focus              bring the workspace window forward
      open-file FILE     open FILE (relative to the workspace) in its window
    """
    controller = _controller(ctx)

    if active:
        selection = _run(lambda: controller.resolver.select_active_workspace(controller.root))
        if as_json:
            _echo_json({"activeWorkspace": str(selection.path), "method": selection.method.value})
        else:
            click.echo(formatting.active_workspace(selection.path))
        return

    if list_:
        index = _run(controller.list_workspaces)
        if as_json:
            _echo_json([c.model_dump(mode="json") for c in index])
        else:
            click.echo(formatting.workspace_list(index))
        return

    if name and not action:
        candidate = _run(lambda: controller.workspace_info(name))
        if as_json:
            _echo_json(candidate.model_dump(mode="json"))
        else:
            click.echo(formatting.workspace_info(candidate))
        return

    if action is None:
        raise click.UsageError("Please specify an action (open-terminal, focus, open-file) or use --active/--list flags")

    if action == "open-terminal":
        click.echo(_run(lambda: controller.open_terminal_in_workspace(name)))
    elif action == "focus":
        click.echo(_run(lambda: controller.focus_workspace(name)))
    else:
        if not target:
            raise click.UsageError("open-file requires a FILE argument")
        click.echo(_run(lambda: controller.open_file_in_workspace(target, name)))


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@main.command()
@click.pass_context
def server(ctx: click.Context) -> None:
    """Start the MCP server on stdio for AI agent integration."""
    from vscode_helper.server import serve

    controller = _controller(ctx)
    anyio.run(serve, controller)


if __name__ == "__main__":
    main()

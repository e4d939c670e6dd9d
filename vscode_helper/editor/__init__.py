"""Editor plumbing: ``code`` CLI calls, file operations and search."""

from vscode_helper.editor.code_cli import CodeCLI, EditorCommandError
from vscode_helper.editor.controller import EditorController
from vscode_helper.editor.search import SearchUnavailableError

__all__ = ["CodeCLI", "EditorCommandError", "EditorController", "SearchUnavailableError"]

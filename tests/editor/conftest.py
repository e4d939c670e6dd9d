from __future__ import annotations

from pathlib import Path

import pytest

from vscode_helper.editor.controller import EditorController
from vscode_helper.settings import HelperSettings
from vscode_helper.workspace.resolver import WorkspaceResolver


@pytest.fixture
def resolver(tmp_path: Path, two_window_signals, fake_clock, home) -> WorkspaceResolver:
    settings = HelperSettings(product_name="Editor", storage_dir=tmp_path / "storage", project_globs=[])
    return WorkspaceResolver.from_settings(settings, signals=two_window_signals, clock=fake_clock, home=home)


@pytest.fixture
def controller(resolver, code_cli, open_workspaces) -> EditorController:
    """Controller started inside ``proj1`` with a recording ``code``."""
    return EditorController(resolver, code_cli, root=open_workspaces[0])

"""Shared test fixtures: fake signal readers, a fake clock, a recording editor CLI.

Nothing here touches the real window manager, the real ``code`` binary or the
real recent-folder store.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from vscode_helper.editor.code_cli import CodeCLI, EditorCommandError
from vscode_helper.settings import _get_settings_cached


class FakeSignals:
    """In-memory ``SignalReaders`` that counts how often each reader runs."""

    def __init__(
        self,
        *,
        titles: list[str] | None = None,
        status: str = "",
        records: list[Any] | None = None,
    ) -> None:
        self.titles = titles or []
        self.status = status
        self.records = records or []
        self.calls: Counter[str] = Counter()
        self.limits: list[int | None] = []

    async def window_titles(self) -> list[str]:
        self.calls["window_titles"] += 1
        return list(self.titles)

    async def status_text(self) -> str:
        self.calls["status_text"] += 1
        return self.status

    async def recent_records(self, limit: int | None = None) -> list[Any]:
        self.calls["recent_records"] += 1
        self.limits.append(limit)
        return list(self.records if limit is None else self.records[:limit])


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingCodeCLI(CodeCLI):
    """``CodeCLI`` that records argv instead of spawning ``code``.

    Commands whose workbench id is in ``failing`` raise ``EditorCommandError``.
    """

    def __init__(self, failing: set[str] | None = None) -> None:
        super().__init__("code")
        self.calls: list[list[str]] = []
        self.failing = failing or set()

    async def run(self, *args: str) -> str:
        argv = ["code", *args]
        self.calls.append(argv)
        if self.failing.intersection(args):
            raise EditorCommandError(argv, "simulated failure")
        return ""


def folder_record(path: Path | str) -> dict[str, str]:
    """A ``workspace.json`` object for a local folder."""
    return {"folder": f"file://{path}"}


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def code_cli() -> RecordingCodeCLI:
    return RecordingCodeCLI()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory that is not an ancestor of the test trees."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def open_workspaces(tmp_path: Path) -> tuple[Path, Path]:
    """Two existing workspace folders: ``proj1`` and ``other/proj2``."""
    proj1 = tmp_path / "proj1"
    proj2 = tmp_path / "other" / "proj2"
    proj1.mkdir()
    proj2.mkdir(parents=True)
    return proj1, proj2


@pytest.fixture
def two_window_signals(open_workspaces: tuple[Path, Path]) -> FakeSignals:
    """Two editor windows whose folders are both in the recent store."""
    proj1, proj2 = open_workspaces
    return FakeSignals(
        titles=["x.ts - proj1 - Editor", "proj2 - Editor", "Inbox - Mozilla Thunderbird"],
        records=[folder_record(proj1), folder_record(proj2)],
    )


@pytest.fixture
def make_signals() -> type[FakeSignals]:
    return FakeSignals


@pytest.fixture
def make_code_cli() -> type[RecordingCodeCLI]:
    return RecordingCodeCLI

"""Tests for the workspace index builder."""

from __future__ import annotations

from pathlib import Path

from vscode_helper.models.workspace import WorkspaceCandidate
from vscode_helper.workspace.index import WorkspaceIndexBuilder, dedupe_by_path, find_by_name


def _always(_: Path) -> bool:
    return True


def _record(path: str | Path) -> dict[str, str]:
    return {"folder": f"file://{path}"}


# ---------------------------------------------------------------------------
# Window titles + recent store
# ---------------------------------------------------------------------------


async def test_build_correlates_titles_with_store(make_signals) -> None:
    signals = make_signals(
        titles=["x.ts - proj1 - Editor", "proj2 - Editor"],
        records=[_record("/home/u/proj1"), _record("/home/u/other/proj2")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    index = await builder.build()

    assert index == (
        WorkspaceCandidate(name="proj1", path=Path("/home/u/proj1")),
        WorkspaceCandidate(name="proj2", path=Path("/home/u/other/proj2")),
    )
    assert signals.calls["status_text"] == 0


async def test_build_follows_window_order_not_store_order(make_signals) -> None:
    signals = make_signals(
        titles=["beta - Editor", "alpha - Editor"],
        records=[_record("/w/alpha"), _record("/w/beta")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    index = await builder.build()

    assert [c.name for c in index] == ["beta", "alpha"]


async def test_build_ignores_other_applications(make_signals) -> None:
    signals = make_signals(
        titles=["Inbox - Mozilla Thunderbird", "proj1 - Editor", "Editor"],
        records=[_record("/home/u/proj1"), _record("/home/u/Inbox")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    index = await builder.build()

    assert [c.name for c in index] == ["proj1"]


async def test_build_skips_records_whose_folder_is_gone(make_signals) -> None:
    gone = Path("/home/u/old/proj1")
    signals = make_signals(
        titles=["proj1 - Editor"],
        records=[_record(gone), _record("/home/u/proj1")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=lambda p: p != gone)

    index = await builder.build()

    assert index == (WorkspaceCandidate(name="proj1", path=Path("/home/u/proj1")),)


async def test_build_drops_window_without_record(make_signals) -> None:
    signals = make_signals(titles=["scratch - Editor"], records=[_record("/home/u/proj1")])
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    assert await builder.build() == ()
    # Window titles were present, so the slow path is not consulted.
    assert signals.calls["status_text"] == 0


async def test_build_dedupes_windows_resolving_to_same_path(make_signals) -> None:
    signals = make_signals(
        titles=["a.py - proj1 - Editor", "b.py - PROJ1 - Editor", "proj1 - Editor"],
        records=[_record("/home/u/proj1")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    index = await builder.build()

    assert len(index) == 1
    assert len({c.path for c in index}) == len(index)


# ---------------------------------------------------------------------------
# code --status fallback
# ---------------------------------------------------------------------------

STATUS = "Version: Code\nWorkspace Stats:\n|  Window (deb-helper)\n|    Folder (deb-helper): 2 files\n"


async def test_build_falls_back_to_status_output(make_signals) -> None:
    signals = make_signals(
        titles=[],
        status=STATUS,
        records=[_record("/home/u/tools/deb-helper"), _record("/home/u/proj1")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", exists=_always)

    index = await builder.build()

    assert index == (WorkspaceCandidate(name="deb-helper", path=Path("/home/u/tools/deb-helper")),)
    assert signals.calls["status_text"] == 1


async def test_status_names_match_store_exactly(make_signals) -> None:
    signals = make_signals(
        status=STATUS,
        records=[_record("/home/u/deb-helper-old")],
    )
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", project_globs=[], exists=_always)

    assert await builder.build() == ()


async def test_status_names_resolved_from_project_globs(make_signals, tmp_path: Path) -> None:
    project = tmp_path / "group" / "deb-helper"
    project.mkdir(parents=True)
    (tmp_path / "deb-helper.txt").write_text("not a directory")
    signals = make_signals(status=STATUS)
    builder = WorkspaceIndexBuilder(
        signals,
        product_name="Editor",
        project_globs=[str(tmp_path / "{name}"), str(tmp_path / "*" / "{name}")],
    )

    index = await builder.build()

    assert index == (WorkspaceCandidate(name="deb-helper", path=project),)


async def test_unresolvable_status_names_are_dropped(make_signals, tmp_path: Path) -> None:
    signals = make_signals(status=STATUS)
    builder = WorkspaceIndexBuilder(signals, product_name="Editor", project_globs=[str(tmp_path / "{name}")])

    assert await builder.build() == ()


async def test_build_with_no_signals_is_empty(make_signals) -> None:
    builder = WorkspaceIndexBuilder(make_signals(), product_name="Editor", project_globs=[])

    assert await builder.build() == ()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_dedupe_by_path_keeps_first_occurrence() -> None:
    first = WorkspaceCandidate(name="a", path=Path("/w/a"))
    second = WorkspaceCandidate(name="b", path=Path("/w/b"))
    duplicate = WorkspaceCandidate(name="a-again", path=Path("/w/a"))

    assert dedupe_by_path([first, second, duplicate]) == (first, second)


def test_find_by_name_returns_first_match() -> None:
    candidates = [
        WorkspaceCandidate(name="webapp", path=Path("/w/webapp")),
        WorkspaceCandidate(name="app", path=Path("/w/app")),
    ]

    assert find_by_name(candidates, "APP") == candidates[0]
    assert find_by_name(candidates, "zzz") is None

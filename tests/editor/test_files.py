"""Tests for workspace file helpers."""

from __future__ import annotations

from pathlib import Path

from vscode_helper.editor.files import atomic_write, iter_workspace_files, list_workspace_files, resolve_in


def _touch(root: Path, relative: str, content: str = "x") -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def test_resolve_in_relative_and_absolute(tmp_path: Path) -> None:
    assert resolve_in(tmp_path, "src/../a.py") == tmp_path / "a.py"
    assert resolve_in(tmp_path, "/etc/hosts") == Path("/etc/hosts")


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "new" / "dir" / "file.txt"

    atomic_write(target, "hello\n")

    assert target.read_text() == "hello\n"
    assert [p.name for p in target.parent.iterdir()] == ["file.txt"]


def test_atomic_write_replaces_existing(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("old")

    atomic_write(target, "new")

    assert target.read_text() == "new"


def test_iter_workspace_files_skips_ignored_dirs(tmp_path: Path) -> None:
    _touch(tmp_path, "src/main.py")
    _touch(tmp_path, "README.md")
    _touch(tmp_path, "node_modules/pkg/index.js")
    _touch(tmp_path, ".git/HEAD")
    _touch(tmp_path, "dist/bundle.js")
    _touch(tmp_path, "build/out.o")
    _touch(tmp_path, "src/build/generated.py")

    files = [p.as_posix() for p in iter_workspace_files(tmp_path)]

    assert files == ["README.md", "src/main.py"]


def test_list_workspace_files_skips_images_and_reports_size(tmp_path: Path) -> None:
    _touch(tmp_path, "a.txt", "12345")
    _touch(tmp_path, "logo.PNG")
    _touch(tmp_path, "docs/diagram.svg")
    _touch(tmp_path, "docs/guide.md", "")

    listing = list_workspace_files(tmp_path)

    assert [(f.path, f.size, f.type) for f in listing] == [("a.txt", 5, "file"), ("docs/guide.md", 0, "file")]


def test_list_workspace_files_skips_dangling_symlinks(tmp_path: Path) -> None:
    _touch(tmp_path, "real.txt")
    (tmp_path / "dangling.txt").symlink_to(tmp_path / "missing.txt")

    assert [f.path for f in list_workspace_files(tmp_path)] == ["real.txt"]

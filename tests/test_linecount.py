from __future__ import annotations

import io
import os

import pytest

from stackvm.linecount import count_lines, iter_matching_files, search_files


def test_count_lines_counts_trailing_partial_line(tmp_path) -> None:
    p = tmp_path / "a.txt"
    p.write_text("one\ntwo\nthree", encoding="utf-8")
    assert count_lines(p) == 3
    p.write_text("one\ntwo\n", encoding="utf-8")
    assert count_lines(p) == 2
    p.write_text("", encoding="utf-8")
    assert count_lines(p) == 0


def test_iter_matching_files_filters_by_extension_recursively(tmp_path) -> None:
    (tmp_path / "src" / "nested").mkdir(parents=True)
    (tmp_path / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (tmp_path / "src" / "nested" / "lib.rs").write_text("\n\n", encoding="utf-8")
    (tmp_path / "src" / "notes.txt").write_text("x\n", encoding="utf-8")
    (tmp_path / "rs").write_text("no dot\n", encoding="utf-8")
    (tmp_path / "src" / "dir.rs").mkdir()

    found = sorted(p.relative_to(tmp_path).as_posix() for p in iter_matching_files(tmp_path, "rs"))
    assert found == ["src/main.rs", "src/nested/lib.rs"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_iter_matching_files_follows_symlinked_directories(tmp_path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "linked.py").write_text("a\nb\n", encoding="utf-8")
    root = tmp_path / "root"
    root.mkdir()
    (root / "link").symlink_to(outside, target_is_directory=True)

    found = [p.relative_to(root).as_posix() for p in iter_matching_files(root, "py")]
    assert found == ["link/linked.py"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_iter_matching_files_skips_dangling_links(tmp_path) -> None:
    (tmp_path / "gone.py").symlink_to(tmp_path / "missing.py")
    (tmp_path / "ok.py").write_text("x\n", encoding="utf-8")
    assert [p.name for p in iter_matching_files(tmp_path, "py")] == ["ok.py"]


def test_search_files_prints_path_and_line_count(tmp_path) -> None:
    (tmp_path / "a.md").write_text("1\n2\n3\n", encoding="utf-8")
    (tmp_path / "b.md").write_text("only\n", encoding="utf-8")
    (tmp_path / "c.txt").write_text("skip\n", encoding="utf-8")

    out = io.StringIO()
    matched = search_files(tmp_path, "md", out=out)

    assert matched == 2
    assert out.getvalue().splitlines() == [
        f"{tmp_path / 'a.md'} 3",
        f"{tmp_path / 'b.md'} 1",
    ]


def test_search_files_propagates_unreadable_file(tmp_path, monkeypatch) -> None:
    (tmp_path / "a.md").write_text("1\n", encoding="utf-8")

    def _boom(path):
        raise PermissionError(f"denied: {path}")

    monkeypatch.setattr("stackvm.linecount.count_lines", _boom)
    with pytest.raises(PermissionError, match="denied"):
        search_files(tmp_path, "md", out=io.StringIO())


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_search_files_does_not_loop_through_ancestor_links(tmp_path) -> None:
    (tmp_path / "a.rs").write_text("x\n", encoding="utf-8")
    (tmp_path / "loop").symlink_to(tmp_path, target_is_directory=True)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "up").symlink_to(tmp_path, target_is_directory=True)

    out = io.StringIO()
    assert search_files(tmp_path, "rs", out=out) == 1
    assert out.getvalue() == f"{tmp_path / 'a.rs'} 1\n"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_iter_matching_files_lists_each_link_to_a_shared_directory(tmp_path) -> None:
    shared = tmp_path / "shared"
    shared.mkdir()
    (shared / "lib.rs").write_text("x\n", encoding="utf-8")
    root = tmp_path / "root"
    root.mkdir()
    (root / "one").symlink_to(shared, target_is_directory=True)
    (root / "two").symlink_to(shared, target_is_directory=True)

    found = [p.relative_to(root).as_posix() for p in iter_matching_files(root, "rs")]
    assert found == ["one/lib.rs", "two/lib.rs"]

"""Tests for filesystem operations: file I/O, discovery, path guards."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from folioctl.domain.document import Document
from folioctl.domain.frontmatter import FrontmatterError
from folioctl.infrastructure.filesystem import (
    ensure_within,
    find_content_files,
    read_document,
    write_document,
)


class TestReadWriteDocument:
    def test_write_then_read(self, tmp_path: Path) -> None:
        doc = Document.from_frontmatter(
            {"title": "X", "date": date(2024, 1, 1), "tags": ["a"]}, "Body\n"
        )
        path = tmp_path / "nested" / "x.md"
        write_document(path, doc)
        assert path.is_file()
        assert read_document(path) == doc

    def test_body_line_endings_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.md"
        path.write_bytes(b"---\r\ntitle: X\r\ndate: 2024-01-01\r\n---\r\n\r\na\r\nb\r\n")
        doc = read_document(path)
        assert doc.body == "a\r\nb\r\n"
        write_document(path, doc)
        assert path.read_bytes().endswith(b"---\n\na\r\nb\r\n")
        assert read_document(path) == doc

    def test_read_error_carries_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.md"
        path.write_text("no front-matter here\n", encoding="utf-8")
        with pytest.raises(FrontmatterError) as exc_info:
            read_document(path)
        assert exc_info.value.path == path


class TestFindContentFiles:
    def test_sorted_markdown_only(self, tmp_path: Path) -> None:
        for name in ("b.md", "a.markdown", "c.txt", ".hidden.md"):
            (tmp_path / name).write_text("", encoding="utf-8")
        assert [p.name for p in find_content_files(tmp_path)] == ["a.markdown", "b.md"]

    def test_recurses_but_skips_build_and_hidden_dirs(self, tmp_path: Path) -> None:
        for rel in ("2024/post.md", "_site/out.md", "node_modules/x.md", ".drafts/d.md"):
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        assert find_content_files(tmp_path) == [tmp_path / "2024" / "post.md"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert find_content_files(tmp_path / "nope") == []


class TestEnsureWithin:
    def test_inside(self, tmp_path: Path) -> None:
        path = tmp_path / "_posts" / "a.md"
        assert ensure_within(tmp_path, path) == path

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes site root"):
            ensure_within(tmp_path, tmp_path / ".." / "outside.md")

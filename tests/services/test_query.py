"""Tests for QueryService: get, list_items, tags."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from folioctl.infrastructure.store import ContentStore
from folioctl.services.query import QueryService
from folioctl.services.update import UpdateService
from tests.conftest import create_page, create_post, write_raw


@pytest.fixture
def seeded(store: ContentStore) -> ContentStore:
    create_post(store, "Zebra Lifetimes", tags=["cpp", "raii"], on=date(2024, 1, 10))
    create_post(store, "Alpha JIT", tags=["gpu", "cpp"], on=date(2024, 3, 1))
    create_post(store, "Middle Post", tags=["gpu"], on=date(2024, 2, 1))
    create_page(store, "About", on=date(2023, 12, 1))
    UpdateService(store).touch("2024-01-10-zebra-lifetimes", on=date(2024, 6, 1))
    return store


class TestGet:
    def test_found(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).get("2024-03-01-alpha-jit")
        assert result.ok
        assert result.op == "get"
        d = result.data
        assert d["title"] == "Alpha JIT"
        assert d["kind"] == "post"
        assert d["tags"] == ["cpp", "gpu"]
        assert d["date"] == "2024-03-01"
        assert "Introduction" in d["body"]

    def test_extra_keys_exposed(self, store: ContentStore, site_root: Path) -> None:
        write_raw(
            site_root / "_pages" / "cv.md",
            "---\ntitle: CV\ndate: 2024-01-01\nlayout: resume\n---\n",
        )
        result = QueryService(store).get("2024-01-01-cv")
        assert result.data["extra"] == {"layout": "resume"}

    def test_not_found(self, store: ContentStore) -> None:
        result = QueryService(store).get("2024-01-01-nothing")
        assert not result.ok
        assert result.error.code == "NOT_FOUND"

    def test_duplicate(self, store: ContentStore, site_root: Path) -> None:
        for name in ("a.md", "b.md"):
            write_raw(site_root / "_posts" / name, "---\ntitle: Same\ndate: 2024-01-01\n---\n")
        result = QueryService(store).get("2024-01-01-same")
        assert result.error.code == "DUPLICATE_SLUG"
        assert result.error.detail["paths"] == ["_posts/a.md", "_posts/b.md"]


class TestListItems:
    def test_recency_default(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items()
        assert [i["title"] for i in result.data["items"]] == [
            "Alpha JIT",
            "Middle Post",
            "Zebra Lifetimes",
            "About",
        ]
        assert result.data["count"] == result.data["total"] == 4

    def test_modified_sort(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(sort="modified")
        assert result.data["items"][0]["title"] == "Zebra Lifetimes"
        assert result.data["items"][0]["modified"] == "2024-06-01"

    def test_title_sort(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(sort="title")
        assert [i["title"] for i in result.data["items"]] == [
            "About",
            "Alpha JIT",
            "Middle Post",
            "Zebra Lifetimes",
        ]

    def test_kind_filter(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(kind="page")
        assert [i["slug"] for i in result.data["items"]] == ["2023-12-01-about"]

    def test_tag_filter_case_insensitive(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(tag="CPP")
        assert {i["title"] for i in result.data["items"]} == {"Alpha JIT", "Zebra Lifetimes"}

    def test_since_uses_last_change(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(since=date(2024, 2, 15))
        assert [i["title"] for i in result.data["items"]] == ["Alpha JIT", "Zebra Lifetimes"]

    def test_limit(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(limit=2)
        assert result.data["count"] == 2
        assert result.data["total"] == 4

    def test_options_echoed_in_meta(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).list_items(tag="gpu", since=date(2024, 2, 1), limit=5)
        assert result.meta == {
            "kind": None,
            "tag": "gpu",
            "since": "2024-02-01",
            "sort": "recency",
            "limit": 5,
        }

    def test_invalid_sort(self, store: ContentStore) -> None:
        result = QueryService(store).list_items(sort="priority")
        assert not result.ok
        assert result.error.code == "INVALID_SORT"

    def test_unreadable_files_become_warnings(
        self, seeded: ContentStore, site_root: Path
    ) -> None:
        write_raw(site_root / "_posts" / "broken.md", "no front-matter\n")
        result = QueryService(seeded).list_items()
        assert result.ok
        assert result.data["total"] == 4
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Skipped _posts/broken.md: missing front-matter")


class TestTags:
    def test_counts(self, seeded: ContentStore) -> None:
        result = QueryService(seeded).tags()
        assert result.data["items"] == [
            {"tag": "cpp", "count": 2},
            {"tag": "gpu", "count": 2},
            {"tag": "raii", "count": 1},
        ]
        assert result.data["count"] == 3

    def test_kind_filter(self, seeded: ContentStore) -> None:
        assert QueryService(seeded).tags(kind="page").data["items"] == []

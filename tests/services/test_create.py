"""Tests for CreateService."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from folioctl.domain.document import parse_document
from folioctl.infrastructure.store import ContentStore
from folioctl.services.create import CreateService
from tests.conftest import create_post, write_raw


class TestCreatePost:
    def test_writes_file_named_by_slug(self, store: ContentStore, site_root: Path) -> None:
        data = create_post(store, "Object Lifetimes in C++", tags=["cpp", "raii"])
        assert data["slug"] == "2024-01-01-object-lifetimes-in-c"
        assert data["kind"] == "post"
        assert data["path"] == "_posts/2024-01-01-object-lifetimes-in-c.md"
        assert data["tags"] == ["cpp", "raii"]

        doc = parse_document((site_root / data["path"]).read_text(encoding="utf-8"))
        assert doc.title == "Object Lifetimes in C++"
        assert doc.date == date(2024, 1, 1)
        assert doc.tags == {"cpp", "raii"}
        assert doc.modified is None

    def test_body_from_template(self, store: ContentStore, site_root: Path) -> None:
        data = create_post(
            store,
            "GPU Notes",
            description="Warps and lanes",
            image="/assets/img/gpu.png",
            image_caption="A warp",
        )
        doc = parse_document((site_root / data["path"]).read_text(encoding="utf-8"))
        assert doc.body.startswith("Warps and lanes\n")
        assert "![A warp](/assets/img/gpu.png)" in doc.body
        assert doc.description == "Warps and lanes"

    def test_defaults_to_today(self, store: ContentStore) -> None:
        from folioctl.services._helpers import today

        result = CreateService(store).create_post("Fresh")
        assert result.ok
        assert result.data["date"] == today().isoformat()

    def test_site_template_override(self, store: ContentStore, site_root: Path) -> None:
        override = site_root / ".folioctl" / "templates" / "content" / "post.md.j2"
        write_raw(override, "Hi {{ title }}\n")
        data = create_post(store, "Custom")
        doc = parse_document((site_root / data["path"]).read_text(encoding="utf-8"))
        assert doc.body == "Hi Custom\n"


class TestCreatePage:
    def test_page_directory(self, store: ContentStore) -> None:
        result = CreateService(store).create_page("About", on=date(2024, 1, 1))
        assert result.ok
        assert result.op == "create_page"
        assert result.data["path"] == "_pages/2024-01-01-about.md"

    def test_resume_template(self, store: ContentStore, site_root: Path) -> None:
        result = CreateService(store).create_page(
            "Résumé", template="resume", on=date(2024, 1, 1)
        )
        assert result.ok
        body = (site_root / result.data["path"]).read_text(encoding="utf-8")
        assert "# Test Author" in body
        assert "## Experience" in body

    def test_unknown_template(self, store: ContentStore) -> None:
        result = CreateService(store).create_page("X", template="nope")
        assert not result.ok
        assert result.error.code == "TEMPLATE_NOT_FOUND"


class TestCreateErrors:
    def test_blank_title(self, store: ContentStore) -> None:
        result = CreateService(store).create_post("   ")
        assert not result.ok
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail["problems"] == ["title: title must not be blank"]

    def test_empty_tag(self, store: ContentStore) -> None:
        result = CreateService(store).create_post("X", tags=["ok", " "])
        assert not result.ok
        assert result.error.code == "VALIDATION_FAILED"

    def test_duplicate_slug(self, store: ContentStore) -> None:
        create_post(store, "Same")
        result = CreateService(store).create_post("Same", on=date(2024, 1, 1))
        assert not result.ok
        assert result.error.code == "DUPLICATE_SLUG"

    def test_duplicate_slug_across_kinds(self, store: ContentStore) -> None:
        create_post(store, "Same")
        result = CreateService(store).create_page("Same", on=date(2024, 1, 1))
        assert not result.ok
        assert result.error.code == "DUPLICATE_SLUG"

    def test_duplicate_of_misnamed_file(self, store: ContentStore, site_root: Path) -> None:
        write_raw(
            site_root / "_posts" / "old-name.md", "---\ntitle: Same\ndate: 2024-01-01\n---\n"
        )
        result = CreateService(store).create_post("Same", on=date(2024, 1, 1))
        assert result.error.code == "DUPLICATE_SLUG"
        assert result.error.detail["path"] == "_posts/old-name.md"


class TestCreateWarnings:
    def test_caption_without_image(self, store: ContentStore) -> None:
        result = CreateService(store).create_post(
            "X", image_caption="Lonely", on=date(2024, 1, 1)
        )
        assert result.ok
        assert result.warnings == ["image_caption given without image"]

    def test_tag_variants(self, store: ContentStore) -> None:
        create_post(store, "First", tags=["GPU"])
        result = CreateService(store).create_post("Second", tags=["gpu"], on=date(2024, 1, 2))
        assert result.ok
        assert result.warnings == ["Tag variants in use: GPU, gpu"]

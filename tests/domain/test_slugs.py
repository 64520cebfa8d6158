"""Tests for slug derivation."""

from __future__ import annotations

from datetime import date

import pytest

from folioctl.domain.slugs import is_valid_slug, slugify, slugify_document


class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Move Semantics, Revisited", "move-semantics-revisited"),
            ("Café au lait", "cafe-au-lait"),
            ("C++ Object Lifetimes", "c-object-lifetimes"),
            ("  spaced   out  ", "spaced-out"),
            ("???", "untitled"),
            ("Résumé", "resume"),
        ],
    )
    def test_slugify(self, text: str, expected: str) -> None:
        assert slugify(text) == expected


class TestSlugifyDocument:
    def test_date_prefix(self) -> None:
        assert slugify_document(date(2024, 1, 1), "X") == "2024-01-01-x"


class TestIsValidSlug:
    def test_valid(self) -> None:
        assert is_valid_slug("2024-01-01-move-semantics")

    @pytest.mark.parametrize("slug", ["move-semantics", "2024-01-01-", "2024-01-01-Upper"])
    def test_invalid(self, slug: str) -> None:
        assert not is_valid_slug(slug)

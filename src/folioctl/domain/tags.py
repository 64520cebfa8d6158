"""Tag domain logic — normalization and cross-document statistics."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable


def normalize_tag(tag: str) -> str:
    """Canonical comparison form of a tag.

    Examples:
        >>> normalize_tag("  GPU  Compilers ")
        'gpu compilers'
    """
    return re.sub(r"\s+", " ", tag).strip().lower()


def tag_counts(tag_sets: Iterable[Iterable[str]]) -> list[tuple[str, int]]:
    """Count tag usage across documents, most used first, ties by name."""
    counter: Counter[str] = Counter()
    for tags in tag_sets:
        counter.update(set(tags))
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def near_duplicate_tags(tags: Iterable[str]) -> list[list[str]]:
    """Group distinct tags that only differ by case or spacing.

    Examples:
        >>> near_duplicate_tags(["gpu", "GPU", "c++"])
        [['GPU', 'gpu']]
    """
    groups: dict[str, set[str]] = {}
    for tag in tags:
        groups.setdefault(normalize_tag(tag), set()).add(tag)
    return [sorted(variants) for _, variants in sorted(groups.items()) if len(variants) > 1]

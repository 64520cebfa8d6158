"""Filesystem operations for site content.

INVARIANT: Files are truth. There is no index or cache; every read goes
to disk and every write lands there directly.
"""

from __future__ import annotations

from pathlib import Path

from folioctl.domain.document import Document, parse_document, render_document
from folioctl.domain.frontmatter import FrontmatterError

CONTENT_SUFFIXES = frozenset({".md", ".markdown"})

# Directories never searched for content.
_SKIP_DIRS = frozenset({"_site", "node_modules", ".folioctl", "vendor"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_text(path: Path) -> str:
    """Read *path* as UTF-8 without translating line endings."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def read_document(path: Path) -> Document:
    """Read and validate a markdown file.

    Raises:
        FrontmatterError: Front-matter is missing or malformed; the error
            carries *path*.
    """
    content = read_text(path)
    try:
        return parse_document(content)
    except FrontmatterError as exc:
        raise exc.with_path(path) from exc


def write_document(path: Path, document: Document) -> None:
    """Serialize *document* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(document), encoding="utf-8", newline="")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _skipped(path: Path, root: Path) -> bool:
    for part in path.relative_to(root).parts[:-1]:
        if part in _SKIP_DIRS or part.startswith("."):
            return True
    return False


def find_content_files(directory: Path) -> list[Path]:
    """Markdown files under *directory*, sorted, skipping build/hidden dirs."""
    if not directory.is_dir():
        return []
    results = [
        path
        for path in directory.rglob("*")
        if path.is_file()
        and path.suffix.lower() in CONTENT_SUFFIXES
        and not path.name.startswith(".")
        and not _skipped(path, directory)
    ]
    return sorted(results)


def ensure_within(root: Path, path: Path) -> Path:
    """Return *path* if it resolves inside *root*.

    Raises:
        ValueError: The path escapes the site root.
    """
    if not path.resolve().is_relative_to(root.resolve()):
        msg = f"Path escapes site root: {path}"
        raise ValueError(msg)
    return path

"""ContentStore — the single dependency injected into every service.

The store knows where each document kind lives under the site root, loads
documents by slug, and writes them back. It also locates the site
stylesheet and local image assets.

Documents are addressed by slug (``YYYY-MM-DD-title``), derived from
front-matter rather than the filename, so a store lookup always scans.
Sites this tool targets hold tens of files, not thousands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from folioctl.domain.document import DOCUMENT_KINDS, Document
from folioctl.domain.frontmatter import FrontmatterError
from folioctl.domain.stylesheet import Stylesheet, parse_stylesheet
from folioctl.infrastructure.filesystem import (
    ensure_within,
    find_content_files,
    read_document,
    write_document,
)

if TYPE_CHECKING:
    from folioctl.config.settings import FolioSettings

logger = logging.getLogger(__name__)

_REMOTE_PREFIXES = ("http://", "https://", "//", "data:")


class DocumentNotFoundError(KeyError):
    """No readable document carries the requested slug."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(slug)

    def __str__(self) -> str:
        return f"No document with slug {self.slug!r}"


class DuplicateSlugError(KeyError):
    """More than one document derives the same slug."""

    def __init__(self, slug: str, paths: list[Path]) -> None:
        self.slug = slug
        self.paths = paths
        super().__init__(slug)

    def __str__(self) -> str:
        where = ", ".join(str(p) for p in self.paths)
        return f"Slug {self.slug!r} is shared by {len(self.paths)} files: {where}"


@dataclass(frozen=True)
class ContentEntry:
    """A document together with where it lives."""

    kind: str
    path: Path
    document: Document

    @property
    def slug(self) -> str:
        return self.document.slug


@dataclass(frozen=True)
class LoadFailure:
    """A content file whose front-matter could not be read."""

    kind: str
    path: Path
    problems: tuple[str, ...]


@dataclass
class ScanResult:
    """Outcome of reading every content file of one or all kinds."""

    entries: list[ContentEntry] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    def by_slug(self) -> dict[str, list[ContentEntry]]:
        grouped: dict[str, list[ContentEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.slug, []).append(entry)
        return grouped


class ContentStore:
    """Filesystem-backed access to a site's documents and stylesheet."""

    def __init__(self, settings: FolioSettings) -> None:
        self.settings = settings
        self.root = Path(settings.site_root)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def directory_for(self, kind: str) -> Path:
        """Directory holding documents of *kind*."""
        dirs = {
            "post": self.settings.content.posts_dir,
            "page": self.settings.content.pages_dir,
        }
        if kind not in dirs:
            msg = f"Unknown document kind: {kind!r}"
            raise ValueError(msg)
        return self.root / dirs[kind]

    def path_for(self, kind: str, slug: str) -> Path:
        """Canonical file path for a document of *kind* with *slug*."""
        return ensure_within(self.root, self.directory_for(kind) / f"{slug}.md")

    @property
    def stylesheet_path(self) -> Path:
        return self.root / self.settings.style.path

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def scan(self, kind: str | None = None) -> ScanResult:
        """Read every content file, collecting failures instead of raising."""
        kinds = (kind,) if kind is not None else DOCUMENT_KINDS
        result = ScanResult()
        for k in kinds:
            for path in find_content_files(self.directory_for(k)):
                try:
                    document = read_document(path)
                except FrontmatterError as exc:
                    logger.debug("Skipping unreadable %s: %s", path, exc)
                    result.failures.append(LoadFailure(k, path, tuple(exc.problems)))
                    continue
                except (OSError, UnicodeDecodeError) as exc:
                    result.failures.append(LoadFailure(k, path, (str(exc),)))
                    continue
                result.entries.append(ContentEntry(k, path, document))
        logger.debug(
            "Scanned %d documents (%d unreadable)", len(result.entries), len(result.failures)
        )
        return result

    def get(self, slug: str) -> ContentEntry:
        """Load the document identified by *slug*.

        Raises:
            DocumentNotFoundError: No readable file derives *slug*.
            DuplicateSlugError: Several files derive *slug*.
        """
        matches = self.scan().by_slug().get(slug, [])
        if not matches:
            raise DocumentNotFoundError(slug)
        if len(matches) > 1:
            raise DuplicateSlugError(slug, [m.path for m in matches])
        return matches[0]

    def write(self, entry: ContentEntry) -> None:
        """Persist *entry* at its path."""
        ensure_within(self.root, entry.path)
        write_document(entry.path, entry.document)
        logger.debug("Wrote %s", entry.path)

    def rename(self, entry: ContentEntry, target: Path) -> ContentEntry:
        """Move *entry* to *target*, refusing to overwrite."""
        ensure_within(self.root, target)
        if target.exists():
            msg = f"Refusing to overwrite existing file: {target}"
            raise FileExistsError(msg)
        target.parent.mkdir(parents=True, exist_ok=True)
        entry.path.rename(target)
        logger.debug("Renamed %s -> %s", entry.path, target)
        return ContentEntry(entry.kind, target, entry.document)

    def relative(self, path: Path) -> str:
        """*path* relative to the site root, as a POSIX string."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    # ------------------------------------------------------------------
    # Stylesheet and assets
    # ------------------------------------------------------------------

    def load_stylesheet(self) -> Stylesheet | None:
        """Parse the site stylesheet, or None when the file is absent."""
        path = self.stylesheet_path
        if not path.is_file():
            return None
        return parse_stylesheet(path.read_text(encoding="utf-8"))

    def resolve_asset(self, ref: str) -> Path | None:
        """Local path for an asset reference, or None if it is remote/templated."""
        ref = ref.strip()
        if not ref or ref.startswith(_REMOTE_PREFIXES) or "{{" in ref:
            return None
        local = ref.split("?", 1)[0].split("#", 1)[0].lstrip("/")
        return self.root / local

    def asset_exists(self, ref: str) -> bool | None:
        """Whether a local asset exists; None when the reference is not local."""
        path = self.resolve_asset(ref)
        if path is None:
            return None
        return path.is_file()

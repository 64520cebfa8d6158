"""Document record — one résumé page or blog post.

Document attributes map 1:1 to front-matter keys; the markdown body is
carried verbatim and never parsed. Unknown front-matter keys (``layout``,
``permalink``, ...) are kept in :attr:`Document.extra` so that reading and
re-writing a file never drops metadata an external site generator relies on.

INVARIANT: ``parse_document(render_document(doc)) == doc``.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from folioctl.domain.frontmatter import (
    CANONICAL_KEY_ORDER,
    FrontmatterError,
    order_frontmatter,
    render_frontmatter,
    split_frontmatter,
)
from folioctl.domain.slugs import slugify_document

DOCUMENT_KINDS: tuple[str, ...] = ("post", "page")

REQUIRED_KEYS: tuple[str, ...] = ("title", "date")

_FIELD_KEYS = frozenset(CANONICAL_KEY_ORDER)


def _describe_error(err: Any) -> str:
    """Flatten one pydantic error into ``"field: message"``."""
    loc = ".".join(str(part) for part in err.get("loc", ()))
    msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{loc}: {msg}" if loc else msg


class Document(BaseModel):
    """Front-matter plus opaque markdown body."""

    model_config = {"frozen": True}

    title: str
    date: dt.date
    modified: dt.date | None = None
    tags: frozenset[str] = Field(default_factory=frozenset)
    description: str | None = None
    image: str | None = None
    image_caption: str | None = None
    body: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _numeric_title(cls, value: Any) -> Any:
        # ``title: 1984`` loads as an int
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "title must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("date", "modified", mode="before")
    @classmethod
    def _truncate_datetimes(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        # Jekyll-style ``tags: cpp gpu``
        if isinstance(value, str):
            return frozenset(value.split())
        return value

    @field_validator("tags")
    @classmethod
    def _tags_non_empty(cls, value: frozenset[str]) -> frozenset[str]:
        cleaned = frozenset(tag.strip() for tag in value)
        if "" in cleaned:
            msg = "tags must be non-empty strings"
            raise ValueError(msg)
        return cleaned

    @model_validator(mode="after")
    def _modified_not_before_date(self) -> Document:
        if self.modified is not None and self.modified < self.date:
            msg = (
                f"modified ({self.modified.isoformat()}) is earlier than "
                f"date ({self.date.isoformat()})"
            )
            raise ValueError(msg)
        return self

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def slug(self) -> str:
        """Permanent identifier derived from ``date`` and ``title``."""
        return slugify_document(self.date, self.title)

    @property
    def last_changed(self) -> dt.date:
        """``modified`` when set, otherwise ``date``."""
        return self.modified or self.date

    # ------------------------------------------------------------------
    # Front-matter conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_frontmatter(cls, fm: dict[str, Any], body: str = "") -> Document:
        """Validate a parsed front-matter mapping into a Document.

        Raises:
            FrontmatterError: A required key is missing or a value is invalid.
        """
        missing = [key for key in REQUIRED_KEYS if fm.get(key) is None]
        if missing:
            raise FrontmatterError([f"missing required key: {key}" for key in missing])

        known = {key: value for key, value in fm.items() if key in _FIELD_KEYS}
        extra = {key: value for key, value in fm.items() if key not in _FIELD_KEYS}
        try:
            return cls.model_validate({**known, "body": body, "extra": extra})
        except ValidationError as exc:
            raise FrontmatterError([_describe_error(e) for e in exc.errors()]) from exc

    def to_frontmatter(self) -> dict[str, Any]:
        """Return the front-matter mapping in canonical key order.

        Tags are emitted as a sorted list; empty tags and ``None`` values
        are omitted.
        """
        fm: dict[str, Any] = {
            **self.extra,
            "title": self.title,
            "date": self.date,
            "modified": self.modified,
            "tags": sorted(self.tags) or None,
            "description": self.description,
            "image": self.image,
            "image_caption": self.image_caption,
        }
        return order_frontmatter(fm)

    def revise(self, **changes: Any) -> Document:
        """Return a re-validated copy with *changes* applied.

        Unlike ``model_copy(update=...)`` this runs every validator, so an
        edit cannot produce a record that would fail to parse.
        """
        data = {**self.model_dump(), **changes}
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise FrontmatterError([_describe_error(e) for e in exc.errors()]) from exc


def parse_document(content: str) -> Document:
    """Parse a full markdown file (front-matter + body) into a Document."""
    fm, body = split_frontmatter(content)
    return Document.from_frontmatter(fm, body)


def render_document(document: Document) -> str:
    """Serialize a Document back to markdown with front-matter."""
    return render_frontmatter(document.to_frontmatter(), document.body)

"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``results``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ListItem(BaseModel):
    """One listing row."""

    model_config = ConfigDict(extra="allow")

    slug: str
    kind: Literal["post", "page"]
    title: str
    date: str
    modified: str | None = None
    tags: list[str]
    description: str | None = None
    path: str


class ListItemsResultData(BaseModel):
    """Payload contract for ``QueryService.list_items``."""

    items: list[ListItem]
    count: int
    total: int


class TagCount(BaseModel):
    """One tag with the number of documents carrying it."""

    tag: str
    count: int


class TagsResultData(BaseModel):
    """Payload contract for ``QueryService.tags``."""

    items: list[TagCount]
    count: int


class CheckIssue(BaseModel):
    """One finding returned by ``CheckService.check``."""

    category: Literal["frontmatter", "document", "identity", "assets", "stylesheet"]
    severity: Literal["warning", "error"]
    message: str
    path: str | None = None
    slug: str | None = None
    line: int | None = None
    fix_action: str | None = None


class CheckResultData(BaseModel):
    """Payload contract for ``CheckService.check``."""

    issues: list[CheckIssue]
    count: int
    error_count: int
    warning_count: int
    healthy: bool
    documents: int


class StyleVariable(BaseModel):
    """One custom-property definition."""

    name: str
    value: str
    selector: str
    context: str
    line: int
    references: int


class StyleVarsResultData(BaseModel):
    """Payload contract for ``StyleService.variables``."""

    items: list[StyleVariable]
    count: int

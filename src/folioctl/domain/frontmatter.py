"""Front-matter codec — split, order, and render YAML header blocks.

A content file starts with a ``---`` line, carries a YAML mapping, and is
closed by the next ``---`` line. Everything after is the markdown body,
which this package never interprets.

Canonical key ordering:
  title, date, modified, tags, description, image, image_caption

Keys outside the canonical list follow alphabetically.
"""

from __future__ import annotations

from datetime import date, datetime
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

CANONICAL_KEY_ORDER: list[str] = [
    "title",
    "date",
    "modified",
    "tags",
    "description",
    "image",
    "image_caption",
]

_FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Missing or malformed front-matter.

    Attributes:
        problems: One human-readable message per defect found.
        path: The offending file, when the text came from disk.
    """

    def __init__(self, problems: list[str] | str, *, path: Path | None = None) -> None:
        self.problems = [problems] if isinstance(problems, str) else list(problems)
        self.path = path
        super().__init__("; ".join(self.problems))

    def with_path(self, path: Path) -> FrontmatterError:
        """Return a copy of this error attributed to *path*."""
        return FrontmatterError(self.problems, path=path)


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    ruamel.yaml's YAML object is stateful and a failed dump can leave it
    broken, so every operation gets its own.
    """
    y = YAML()
    y.default_flow_style = False
    y.width = 4096
    return y


def _to_plain(value: Any) -> Any:
    """Convert ruamel.yaml container and scalar subclasses to builtins."""
    if isinstance(value, dict):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, datetime):
        return datetime(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            value.tzinfo,
        )
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    return value


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split markdown *content* into ``(frontmatter, body)``.

    Delimiters are recognized with either ``\\n`` or ``\\r\\n`` line
    endings. The body is returned exactly as it appears in *content*,
    except that one line break directly after the closing delimiter is
    treated as a separator and dropped.

    Raises:
        FrontmatterError: No delimited block, invalid YAML, or a block
            that is not a mapping.
    """
    lines = content.removeprefix("\ufeff").split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        raise FrontmatterError("missing front-matter: file must start with '---'")

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        raise FrontmatterError("unterminated front-matter: no closing '---'")

    yaml_block = "\n".join(line.removesuffix("\r") for line in lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except (YAMLError, ValueError) as exc:
        msg = f"invalid YAML in front-matter: {exc}".replace("\n", " ")
        raise FrontmatterError(msg) from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = f"front-matter must be a mapping, got {type(loaded).__name__}"
        raise FrontmatterError(msg)
    return _to_plain(loaded), body


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Keys present in :data:`CANONICAL_KEY_ORDER` come first (in that
    order), followed by any remaining keys sorted alphabetically.
    Canonical keys set to ``None`` are omitted; other keys keep an empty
    value so that the file still declares them.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]

    for key in sorted(fm.keys()):
        if key not in CANONICAL_KEY_ORDER:
            ordered[key] = fm[key]

    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front-matter dict and body text into markdown.

    A blank line separates the closing delimiter from a non-empty body.
    """
    ordered = order_frontmatter(frontmatter)
    buf = StringIO()
    if ordered:
        _new_yaml().dump(ordered, buf)
    yaml_text = buf.getvalue()

    parts = [_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.extend(["\n", body])
    return "".join(parts)

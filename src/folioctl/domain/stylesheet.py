"""Stylesheet model — rules, custom properties, and audits.

Tokenizing and block parsing are delegated to tinycss2; this module turns
its node tree into a flat list of :class:`StyleRule` records. Grouping
at-rules (``@media``, ``@supports``, ``@keyframes``, ...) are flattened
and remembered as each rule's *context*, so that ``:root`` under a
``prefers-color-scheme`` query is a separate scope from a bare ``:root``.

Bad CSS never raises. Syntax errors are collected in
:attr:`Stylesheet.errors`, the way a browser skips what it cannot parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import tinycss2

# At-rules whose block holds further rules.
_GROUPING_AT_RULES = frozenset(
    {"media", "supports", "layer", "container", "document", "scope", "starting-style"}
)

# At-rules whose block holds declarations.
_DECLARATION_AT_RULES = frozenset(
    {"font-face", "page", "counter-style", "property", "font-palette-values", "viewport"}
)

_BLOCK_TYPES = ("() block", "[] block", "{} block")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VarReference:
    """One ``var(--name)`` occurrence inside a declaration value."""

    name: str
    has_fallback: bool


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair."""

    name: str
    value: str
    important: bool = False
    line: int = 0
    references: tuple[VarReference, ...] = ()

    @property
    def is_custom_property(self) -> bool:
        return self.name.startswith("--")


@dataclass(frozen=True)
class StyleRule:
    """A selector plus its declaration block.

    Attributes:
        selector: Whitespace-normalized selector text.
        selectors: The selector list split on top-level commas.
        declarations: Declarations in source order.
        context: Enclosing at-rule preludes, outermost first.
        line: Source line of the selector.
    """

    selector: str
    selectors: tuple[str, ...]
    declarations: tuple[Declaration, ...]
    context: tuple[str, ...] = ()
    line: int = 0

    @property
    def mapping(self) -> dict[str, str]:
        """Property → value after in-block cascade."""
        return _cascade(self.declarations)

    def matches(self, selector: str) -> bool:
        return _normalize(selector) in self.selectors


@dataclass(frozen=True)
class AtStatement:
    """A block-less at-rule such as ``@import`` or ``@charset``."""

    keyword: str
    prelude: str
    line: int = 0


@dataclass(frozen=True)
class CssSyntaxError:
    """A parse error reported by tinycss2."""

    line: int
    column: int
    message: str


@dataclass(frozen=True)
class CustomProperty:
    """Where a ``--name`` custom property is defined."""

    name: str
    value: str
    selector: str
    context: tuple[str, ...]
    line: int


@dataclass(frozen=True)
class Shadowing:
    """A custom property defined more than once in one ``:root`` scope.

    ``kind`` is ``"conflict"`` when the definitions disagree and
    ``"redundant"`` when they repeat the same value.
    """

    name: str
    context: tuple[str, ...]
    kind: str
    lines: tuple[int, ...]
    values: tuple[str, ...]


@dataclass(frozen=True)
class UndefinedVariable:
    """A ``var()`` reference with no fallback to a property nobody defines."""

    name: str
    selector: str
    property: str
    line: int


@dataclass(frozen=True)
class Stylesheet:
    """Parsed stylesheet: rules in source order plus diagnostics."""

    rules: tuple[StyleRule, ...] = ()
    statements: tuple[AtStatement, ...] = ()
    errors: tuple[CssSyntaxError, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return not self.errors

    def declarations_for(self, selector: str, context: tuple[str, ...] = ()) -> dict[str, str]:
        """Cascade every rule targeting *selector* in *context*, in source order."""
        decls: list[Declaration] = []
        for rule in self.rules:
            if rule.context == context and rule.matches(selector):
                decls.extend(rule.declarations)
        return _cascade(decls)

    def breakpoints(self) -> list[str]:
        """Distinct ``@media`` preludes in order of first appearance."""
        seen: list[str] = []
        for rule in self.rules:
            for ctx in rule.context:
                if ctx.startswith("@media") and ctx not in seen:
                    seen.append(ctx)
        return seen


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _normalize(text: str) -> str:
    return " ".join(text.split())


def _serialize(tokens: list[Any]) -> str:
    return _normalize(tinycss2.serialize(tokens))


def _split_selectors(prelude: list[Any]) -> tuple[str, ...]:
    """Split a selector prelude on top-level commas."""
    groups: list[list[Any]] = [[]]
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    return tuple(s for s in (_serialize(g) for g in groups) if s)


def _var_references(tokens: list[Any]) -> list[VarReference]:
    refs: list[VarReference] = []
    for token in tokens:
        if token.type == "function":
            if token.lower_name == "var":
                args = [t for t in token.arguments if t.type not in ("whitespace", "comment")]
                if args and args[0].type == "ident" and args[0].value.startswith("--"):
                    has_fallback = any(
                        t.type == "literal" and t.value == "," for t in token.arguments
                    )
                    refs.append(VarReference(args[0].value, has_fallback))
            refs.extend(_var_references(token.arguments))
        elif token.type in _BLOCK_TYPES:
            refs.extend(_var_references(token.content))
    return refs


def _error(node: Any) -> CssSyntaxError:
    return CssSyntaxError(
        line=node.source_line,
        column=node.source_column,
        message=f"{node.kind}: {node.message}",
    )


def _cascade(declarations: Any) -> dict[str, str]:
    """Later declarations win unless an earlier one is ``!important``."""
    values: dict[str, str] = {}
    important: set[str] = set()
    for decl in declarations:
        if decl.name in important and not decl.important:
            continue
        values[decl.name] = decl.value
        if decl.important:
            important.add(decl.name)
    return values


def _nest_selector(parent: str, child: str) -> str:
    if "&" in child:
        return child.replace("&", parent)
    return f"{parent} {child}"


class _Builder:
    """Walks the tinycss2 node tree and accumulates flat records."""

    def __init__(self) -> None:
        self.rules: list[StyleRule] = []
        self.statements: list[AtStatement] = []
        self.errors: list[CssSyntaxError] = []

    def walk(self, nodes: list[Any], context: tuple[str, ...]) -> None:
        for node in nodes:
            if node.type == "qualified-rule":
                self._qualified_rule(node, context)
            elif node.type == "at-rule":
                self._at_rule(node, context)
            elif node.type == "error":
                self.errors.append(_error(node))

    def _declarations(self, content: list[Any]) -> tuple[list[Declaration], list[Any]]:
        """Parse a block body into declarations and nested rule nodes."""
        decls: list[Declaration] = []
        nested: list[Any] = []
        for item in tinycss2.parse_blocks_contents(
            content, skip_comments=True, skip_whitespace=True
        ):
            if item.type == "declaration":
                name = item.name if item.name.startswith("--") else item.lower_name
                decls.append(
                    Declaration(
                        name=name,
                        value=tinycss2.serialize(item.value).strip(),
                        important=item.important,
                        line=item.source_line,
                        references=tuple(_var_references(item.value)),
                    )
                )
            elif item.type == "error":
                self.errors.append(_error(item))
            else:
                nested.append(item)
        return decls, nested

    def _qualified_rule(
        self, node: Any, context: tuple[str, ...], parent: tuple[str, ...] | None = None
    ) -> None:
        selectors = _split_selectors(node.prelude)
        if not selectors:
            self.errors.append(
                CssSyntaxError(node.source_line, node.source_column, "empty: rule without selector")
            )
            return
        if parent is not None:
            selectors = tuple(_nest_selector(p, s) for p in parent for s in selectors)
        selector = ", ".join(selectors)

        decls, nested = self._declarations(node.content)
        self.rules.append(
            StyleRule(
                selector=selector,
                selectors=selectors,
                declarations=tuple(decls),
                context=context,
                line=node.source_line,
            )
        )
        self._nested(nested, context, selectors)

    def _nested(
        self, nodes: list[Any], context: tuple[str, ...], parent: tuple[str, ...]
    ) -> None:
        for child in nodes:
            if child.type == "qualified-rule":
                self._qualified_rule(child, context, parent=parent)
            elif child.type == "at-rule":
                self._at_rule(child, context, parent=parent)

    def _at_rule(
        self, node: Any, context: tuple[str, ...], parent: tuple[str, ...] | None = None
    ) -> None:
        keyword = node.lower_at_keyword
        prelude = _serialize(node.prelude)
        label = f"@{keyword} {prelude}".strip()

        if node.content is None:
            self.statements.append(AtStatement(keyword, prelude, node.source_line))
            return

        if parent is not None and keyword in _GROUPING_AT_RULES:
            # Nested inside a style rule: bare declarations apply to the parent.
            inner_context = (*context, label)
            decls, nested = self._declarations(node.content)
            if decls:
                self.rules.append(
                    StyleRule(
                        selector=", ".join(parent),
                        selectors=parent,
                        declarations=tuple(decls),
                        context=inner_context,
                        line=node.source_line,
                    )
                )
            self._nested(nested, inner_context, parent)
            return

        if keyword in _GROUPING_AT_RULES or keyword.endswith("keyframes"):
            inner = tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True)
            self.walk(inner, (*context, label))
            return

        if keyword in _DECLARATION_AT_RULES:
            decls, _ = self._declarations(node.content)
            self.rules.append(
                StyleRule(
                    selector=label,
                    selectors=(label,),
                    declarations=tuple(decls),
                    context=context,
                    line=node.source_line,
                )
            )
            return

        self.statements.append(AtStatement(keyword, prelude, node.source_line))


def parse_stylesheet(css: str) -> Stylesheet:
    """Parse CSS text into a :class:`Stylesheet`."""
    builder = _Builder()
    nodes = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    builder.walk(nodes, ())
    return Stylesheet(
        rules=tuple(builder.rules),
        statements=tuple(builder.statements),
        errors=tuple(builder.errors),
    )


# ---------------------------------------------------------------------------
# Custom-property audits
# ---------------------------------------------------------------------------


def custom_properties(sheet: Stylesheet) -> list[CustomProperty]:
    """Every custom-property definition in source order."""
    found: list[CustomProperty] = []
    for rule in sheet.rules:
        for decl in rule.declarations:
            if decl.is_custom_property:
                found.append(
                    CustomProperty(decl.name, decl.value, rule.selector, rule.context, decl.line)
                )
    return found


def _registered_properties(sheet: Stylesheet) -> set[str]:
    """Names declared through ``@property --name { ... }``."""
    prefix = "@property "
    return {
        rule.selector.removeprefix(prefix)
        for rule in sheet.rules
        if rule.selector.startswith(prefix)
    }


def find_root_shadowing(sheet: Stylesheet) -> list[Shadowing]:
    """Report ``:root`` custom properties defined twice in the same scope.

    Definitions under a different context (a media query) or a different
    selector (``[data-theme=dark]``) are overrides, not shadowing.
    """
    groups: dict[tuple[tuple[str, ...], str], list[CustomProperty]] = {}
    for rule in sheet.rules:
        if ":root" not in rule.selectors:
            continue
        for decl in rule.declarations:
            if decl.is_custom_property:
                prop = CustomProperty(decl.name, decl.value, rule.selector, rule.context, decl.line)
                groups.setdefault((rule.context, decl.name), []).append(prop)

    found: list[Shadowing] = []
    for (ctx, name), defs in groups.items():
        if len(defs) < 2:
            continue
        values = tuple(d.value for d in defs)
        kind = "redundant" if len(set(values)) == 1 else "conflict"
        found.append(
            Shadowing(
                name=name,
                context=ctx,
                kind=kind,
                lines=tuple(d.line for d in defs),
                values=values,
            )
        )
    return found


def undefined_variables(sheet: Stylesheet) -> list[UndefinedVariable]:
    """``var()`` references without fallback to properties never defined."""
    defined = {prop.name for prop in custom_properties(sheet)} | _registered_properties(sheet)
    found: list[UndefinedVariable] = []
    for rule in sheet.rules:
        for decl in rule.declarations:
            for ref in decl.references:
                if not ref.has_fallback and ref.name not in defined:
                    found.append(UndefinedVariable(ref.name, rule.selector, decl.name, decl.line))
    return found


def reference_counts(sheet: Stylesheet) -> dict[str, int]:
    """How many ``var()`` references point at each custom property."""
    counts: dict[str, int] = {}
    for rule in sheet.rules:
        for decl in rule.declarations:
            for ref in decl.references:
                counts[ref.name] = counts.get(ref.name, 0) + 1
    return counts


def unused_custom_properties(sheet: Stylesheet) -> list[CustomProperty]:
    """First definition of every custom property that nothing references."""
    referenced = reference_counts(sheet)
    seen: set[str] = set()
    unused: list[CustomProperty] = []
    for prop in custom_properties(sheet):
        if prop.name in seen:
            continue
        seen.add(prop.name)
        if prop.name not in referenced:
            unused.append(prop)
    return unused

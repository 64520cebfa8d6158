"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from folioctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    # -- create group --
    (["create", "--help"], ["post", "page"]),
    (["create", "post", "--help"], ["TITLE", "--tags", "--image-caption", "--date"]),
    (["create", "page", "--help"], ["--template", "--description"]),
    # -- query group --
    (["query", "--help"], ["get", "list", "tags"]),
    (["query", "get", "--help"], ["SLUG"]),
    (["query", "list", "--help"], ["--kind", "--tag", "--since", "--sort", "--limit"]),
    (["query", "tags", "--help"], ["--kind"]),
    # -- style group --
    (["style", "--help"], ["info", "vars", "lookup"]),
    (["style", "lookup", "--help"], ["SELECTOR", "--context"]),
    # -- standalone commands --
    (["update", "--help"], ["--description", "--add-tag", "--remove-tag", "--body-file", "--on"]),
    (["touch", "--help"], ["SLUG", "--on"]),
    (["check", "--help"], ["--min-severity", "--errors-only", "--fix"]),
    (["init", "--help"], ["--title", "--author", "--base-url"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help")


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"

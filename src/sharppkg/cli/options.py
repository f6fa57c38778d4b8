"""Shared option handling for commands that select package entries."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

import typer

from sharppkg.core.errors import RulesValidationError
from sharppkg.core.model import MANIFEST_FILENAME, IncludeSpec, SelectionRules
from sharppkg.io.rules import read_selection_rules


def build_rules(
    *,
    rules_file: Optional[str],
    includes: Optional[List[str]],
    excludes: Optional[List[str]],
    include_all: Optional[bool],
    exclude_loader: Optional[bool],
) -> SelectionRules:
    """Merge a rules file with command-line options.

    Command-line includes/excludes are appended after the file's; explicit
    flags override the file's booleans.
    """
    rules = read_selection_rules(rules_file) if rules_file else SelectionRules()

    try:
        extra_includes = tuple(IncludeSpec.parse(s) for s in (includes or []))
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    try:
        rules = replace(
            rules,
            includes=rules.includes + extra_includes,
            excludes=rules.excludes + tuple(excludes or ()),
        )
    except ValueError as e:
        raise RulesValidationError(str(e)) from e

    if include_all is not None:
        rules = replace(rules, include_all_discovered=include_all)
    if exclude_loader is not None:
        rules = replace(rules, exclude_loader_files=exclude_loader)
    return rules


def include_option():
    return typer.Option(None, "--include", "-i", help="File to bundle, as SRC or SRC=TARGET. Repeatable.")


def exclude_option():
    return typer.Option(
        None,
        "--exclude",
        "-x",
        help="Exclude discovered files matching this file name or path suffix (case-insensitive). Repeatable.",
    )


def include_all_option():
    return typer.Option(
        None,
        "--include-all/--no-include-all",
        help="Bundle every other binary module found directly in the output directory.",
    )


def exclude_loader_option():
    return typer.Option(
        None,
        "--exclude-loader/--keep-loader",
        help="Skip loader runtime files during discovery (default: skip).",
    )


def rules_option():
    return typer.Option(None, "--rules", help="Selection rules JSON file.")


def manifest_option():
    return typer.Option(MANIFEST_FILENAME, "--manifest", help="Manifest file name inside PROJECT_DIR.")

"""`sharppkg pack` command.

Builds `{package-dir}/{id}-{major}.{minor}.{patch}.zip` from a project's
`sharp.json` and its build output directory.

Exit codes:
- 0: package created (missing native dependencies / includes only warn)
- 1: fatal error; no archive is left behind
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from sharppkg.bundle.package import execute_package
from sharppkg.cli.options import (
    build_rules,
    exclude_loader_option,
    exclude_option,
    include_all_option,
    include_option,
    manifest_option,
    rules_option,
)
from sharppkg.core.errors import RulesValidationError
from sharppkg.core.sink import LoggingSink


def register(app: typer.Typer) -> None:
    @app.command("pack")
    def pack(
        project_dir: str = typer.Argument(..., help="Directory containing sharp.json."),
        output_dir: str = typer.Option(..., "--output-dir", "-o", help="Build output directory with the compiled binaries."),
        package_dir: str = typer.Option(..., "--package-dir", "-p", help="Directory to write the package archive into."),
        include: Optional[List[str]] = include_option(),
        exclude: Optional[List[str]] = exclude_option(),
        include_all: Optional[bool] = include_all_option(),
        exclude_loader: Optional[bool] = exclude_loader_option(),
        rules_file: Optional[str] = rules_option(),
        manifest: str = manifest_option(),
        checksum: bool = typer.Option(False, "--checksum", help="Also write a <archive>.sha256 sidecar."),
        as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
    ) -> None:
        """Package a module's build output into a zip archive."""
        try:
            rules = build_rules(
                rules_file=rules_file,
                includes=include,
                excludes=exclude,
                include_all=include_all,
                exclude_loader=exclude_loader,
            )
        except RulesValidationError as e:
            raise typer.BadParameter(str(e)) from e

        outcome = execute_package(
            Path(project_dir),
            Path(output_dir),
            Path(package_dir),
            rules,
            sink=LoggingSink(),
            manifest_name=manifest,
            checksum=checksum,
        )

        if as_json:
            typer.echo(json.dumps(outcome.to_dict(), indent=2, sort_keys=True))
        elif outcome.ok:
            typer.echo(str(outcome.archive_path))
        else:
            typer.echo(f"error: {outcome.error['message']}", err=True)

        if not outcome.ok:
            raise typer.Exit(code=1)

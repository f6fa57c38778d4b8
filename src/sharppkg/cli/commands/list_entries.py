"""`sharppkg list` command.

Dry run: resolves the package entries exactly as `pack` would and prints one
`<arcname>\\t<source>` line per entry, without writing an archive.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from sharppkg.cli.options import (
    build_rules,
    exclude_loader_option,
    exclude_option,
    include_all_option,
    include_option,
    manifest_option,
    rules_option,
)
from sharppkg.core.errors import PackagingError, RulesValidationError
from sharppkg.core.select import select_entries
from sharppkg.core.sink import LoggingSink
from sharppkg.io.manifest import read_module_manifest


def register(app: typer.Typer) -> None:
    @app.command("list")
    def list_entries(
        project_dir: str = typer.Argument(..., help="Directory containing sharp.json."),
        output_dir: str = typer.Option(..., "--output-dir", "-o", help="Build output directory with the compiled binaries."),
        include: Optional[List[str]] = include_option(),
        exclude: Optional[List[str]] = exclude_option(),
        include_all: Optional[bool] = include_all_option(),
        exclude_loader: Optional[bool] = exclude_loader_option(),
        rules_file: Optional[str] = rules_option(),
        manifest: str = manifest_option(),
    ) -> None:
        """List the entries a package would contain."""
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

        project = Path(project_dir)
        try:
            module = read_module_manifest(project / manifest)
            selection = select_entries(module, Path(output_dir), rules, sink=LoggingSink(), project_dir=project)
        except PackagingError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

        for entry in selection.entries:
            typer.echo(f"{entry.arcname}\t{entry.source}")

"""`sharppkg validate` command.

Loads and validates a project's manifest and prints the package identity
(`{id}-{major}.{minor}.{patch}`).
"""

from __future__ import annotations

from pathlib import Path

import typer

from sharppkg.cli.options import manifest_option
from sharppkg.core.errors import PackagingError
from sharppkg.io.manifest import read_module_manifest


def register(app: typer.Typer) -> None:
    @app.command("validate")
    def validate(
        project_dir: str = typer.Argument(..., help="Directory containing sharp.json."),
        manifest: str = manifest_option(),
    ) -> None:
        """Validate a module manifest."""
        try:
            module = read_module_manifest(Path(project_dir) / manifest)
        except PackagingError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo(module.identity)

"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
DirOption = typer.Option(".", "--dir", help="The directory to look for a 'jx-apps.yml' file")
OutputDirOption = typer.Option(".", "--output-dir", "--outputDir", help="The directory to write the helmfiles to")
ValuesOption = typer.Option(
    None, "--values", help="Values file applied to every release (can specify multiple)",
)
VersionsDirOption = typer.Option(
    None, "--versions-dir", help="Version stream directory (default: $HPLAN_VERSIONS_DIR or ./versionStream)",
)

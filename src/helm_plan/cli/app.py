"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="hplan",
    help="helm-plan - Compile jx-apps.yml into per-phase helmfiles.",
    no_args_is_help=True,
)


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _register_commands() -> None:
    from helm_plan.cli.commands.create_cmd import app as create_app

    app.add_typer(create_app, name="create", help="Create helmfiles from jx-apps.yml")


_register_commands()


def main() -> None:
    app()

"""hplan create - Generate helmfiles from jx-apps.yml."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from helm_plan.cli.options import (
    ContextOption,
    DirOption,
    OutputDirOption,
    OutputOption,
    ValuesOption,
    VersionsDirOption,
)
from helm_plan.config.settings import settings
from helm_plan.core.app_config import load_app_config
from helm_plan.core.compiler import HelmfileCompiler
from helm_plan.core.errors import PlanError
from helm_plan.core.helm_repos import clear_caches, list_local_repos
from helm_plan.core.k8s_client import K8sClient
from helm_plan.core.version_stream import VersionStream
from helm_plan.output.formatters import output_results

app = typer.Typer()
err_console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def create(
    dir: Path = DirOption,
    output_dir: Path = OutputDirOption,
    values: Optional[List[str]] = ValuesOption,
    versions_dir: Optional[Path] = VersionsDirOption,
    context: Optional[str] = ContextOption,
    output: str = OutputOption,
) -> None:
    """Create a helmfile.yaml per phase from a jx-apps.yml."""
    clear_caches()
    try:
        app_config = load_app_config(dir)
        compiler = HelmfileCompiler(
            directory=dir,
            output_dir=output_dir,
            version_stream=VersionStream(versions_dir or settings.versions_dir),
            namespaces=K8sClient(context=context),
            local_repos=list_local_repos(),
            value_files=values or [],
            config=settings,
        )
        results = compiler.run(app_config)
    except PlanError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    output_results(list(results.values()), output)

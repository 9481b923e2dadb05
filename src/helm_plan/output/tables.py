"""Rich table builders for compiled plans."""

from __future__ import annotations

from rich.table import Table

from helm_plan.core.compiler import PhaseResult
from helm_plan.output.themes import styled_phase


def plan_summary_table(results: list[PhaseResult]) -> Table:
    table = Table(title="Generated Helmfiles", expand=True, show_lines=False)
    table.add_column("Phase", no_wrap=True)
    table.add_column("Releases", justify="right", style="bold")
    table.add_column("Repositories", justify="right")
    table.add_column("New Namespaces", style="yellow")
    table.add_column("Path", style="dim")

    for r in results:
        table.add_row(
            styled_phase(r.phase),
            str(len(r.plan.releases)),
            str(len(r.plan.repositories)),
            ", ".join(r.synthesized_namespaces) or "-",
            str(r.path) if r.path else "-",
        )
    return table


def release_table(result: PhaseResult) -> Table:
    table = Table(title=f"Releases ({result.phase.value})", expand=True)
    table.add_column("Release", style="bold white", no_wrap=True)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Version", style="magenta")
    table.add_column("Needs", style="dim")

    for rel in result.plan.releases:
        table.add_row(
            rel.name,
            rel.namespace,
            rel.chart,
            rel.version or "-",
            ", ".join(rel.needs) or "-",
        )
    return table

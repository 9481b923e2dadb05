"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from helm_plan.core.compiler import PhaseResult

console = Console()


def _result_to_dict(r: PhaseResult) -> dict[str, Any]:
    return {
        "phase": r.phase.value,
        "path": str(r.path) if r.path else None,
        "releases": [rel.to_dict() for rel in r.plan.releases],
        "repositories": [repo.to_dict() for repo in r.plan.repositories],
        "synthesized_namespaces": list(r.synthesized_namespaces),
    }


def output_results(results: list[PhaseResult], fmt: str) -> None:
    if fmt == "json":
        data = [_result_to_dict(r) for r in results]
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = [_result_to_dict(r) for r in results]
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        from helm_plan.output.tables import plan_summary_table, release_table
        console.print(plan_summary_table(results))
        for r in results:
            console.print(release_table(r))

"""Compile application declarations into one helmfile per phase."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from helm_plan.config.settings import Settings, settings as default_settings
from helm_plan.core.chart_resolver import ChartResolver
from helm_plan.core.errors import ConfigurationError
from helm_plan.core.namespace_injector import NamespaceInjector
from helm_plan.core.plan_writer import write_plan
from helm_plan.core.repo_resolver import RepositoryResolver, is_absolute_url
from helm_plan.core.values_resolver import ValuesResolver
from helm_plan.core.version_resolver import resolve_version
from helm_plan.core.version_stream import VersionStream
from helm_plan.models import PHASE_ORDER, Phase
from helm_plan.models.app import AppConfig, Application
from helm_plan.models.chart import ChartDetails
from helm_plan.models.helmfile import HelmDefaults, HelmState, ReleaseSpec, RepositorySpec

logger = logging.getLogger(__name__)

# Placeholder used when a phase has no releases so `helmfile sync` still succeeds
EMPTY_RELEASE_NAME = "empty"
EMPTY_REPOSITORY_NAME = "jenkins-x"
EMPTY_CHART = f"{EMPTY_REPOSITORY_NAME}/empty"


class NamespaceLister(Protocol):
    @property
    def current_namespace(self) -> str: ...

    def list_namespace_names(self) -> list[str]: ...


@dataclass
class PlannedApp:
    app: Application
    details: ChartDetails
    phase: Phase
    namespace: str
    default_values: list[str] = field(default_factory=list)


@dataclass
class PhaseResult:
    phase: Phase
    plan: HelmState
    synthesized_namespaces: list[str] = field(default_factory=list)
    path: Path | None = None


class HelmfileCompiler:
    """Builds and writes a HelmState for each phase.

    Each phase is compiled independently: its own repository aliases, its own
    namespace snapshot and its own namespace-creator releases.
    """

    def __init__(
        self,
        directory: Path,
        output_dir: Path,
        version_stream: VersionStream,
        namespaces: NamespaceLister,
        local_repos: dict[str, str] | None = None,
        value_files: list[str] | tuple[str, ...] = (),
        config: Settings | None = None,
    ):
        self.config = config or default_settings
        self.directory = Path(directory)
        self.output_dir = Path(output_dir)
        self.version_stream = version_stream
        self.namespaces = namespaces
        self.local_repos = local_repos or {}

        cli_values = list(value_files)
        if self.config.secrets_values_file:
            cli_values.append(self.config.secrets_values_file)

        self.charts = ChartResolver(
            version_stream,
            default_apps_repository=self.config.default_apps_repository,
            default_chart_repository=self.config.default_chart_repository,
        )
        self.values = ValuesResolver(self.directory, cli_values)
        self.injector = NamespaceInjector(self.output_dir)
        self._current_namespace: str | None = None

    @property
    def current_namespace(self) -> str:
        if self._current_namespace is None:
            self._current_namespace = self.namespaces.current_namespace
        return self._current_namespace

    def partition(self, app_config: AppConfig) -> dict[Phase, list[PlannedApp]]:
        """Resolve chart details and bucket every application by phase."""
        buckets: dict[Phase, list[PlannedApp]] = {phase: [] for phase in PHASE_ORDER}
        for app in app_config.apps:
            details = self.charts.chart_details(app.name, app.repository)
            defaults, default_values = self.version_stream.resolve_application_defaults(details.name)
            phase = app.phase or defaults.phase or Phase.APPS
            buckets[phase].append(PlannedApp(
                app=app,
                details=details,
                phase=phase,
                namespace=app.namespace or defaults.namespace,
                default_values=default_values,
            ))
        return buckets

    def compile(self, app_config: AppConfig) -> dict[Phase, PhaseResult]:
        """Compile every phase without writing anything to the output directory."""
        buckets = self.partition(app_config)
        return {
            phase: self.compile_phase(phase, buckets[phase], app_config)
            for phase in PHASE_ORDER
        }

    def run(self, app_config: AppConfig) -> dict[Phase, PhaseResult]:
        """Compile and write ``<output>/<phase>/helmfile.yaml`` for every phase."""
        buckets = self.partition(app_config)
        results: dict[Phase, PhaseResult] = {}
        for phase in PHASE_ORDER:
            result = self.compile_phase(phase, buckets[phase], app_config)
            result.path = write_plan(result.plan, self.output_dir, phase)
            self.injector.write_generated(phase, result.synthesized_namespaces)
            results[phase] = result
        return results

    def compile_phase(self, phase: Phase, planned: list[PlannedApp], app_config: AppConfig) -> PhaseResult:
        repos = RepositoryResolver(self.local_repos, self.version_stream)
        default_namespace = self._default_namespace(app_config)

        releases: list[ReleaseSpec] = []
        seen_names: set[str] = set()
        for p in planned:
            name = p.details.local_name
            if name in seen_names:
                raise ConfigurationError(f"duplicate release name {name!r} in phase {phase.value}")
            seen_names.add(name)

            alias = repos.resolve(p.details)
            releases.append(ReleaseSpec(
                name=name,
                namespace=p.namespace or default_namespace,
                chart=self._chart_reference(p.details, alias),
                version=resolve_version(p.app, p.details, self.version_stream),
                values=self.values.resolve(p.app, phase, p.default_values),
            ))

        for extra in app_config.repositories:
            repos.add(extra)
        repositories = repos.repositories()

        if not releases:
            releases.append(ReleaseSpec(
                name=EMPTY_RELEASE_NAME,
                namespace=default_namespace,
                chart=EMPTY_CHART,
            ))
            if not any(r.name == EMPTY_REPOSITORY_NAME for r in repositories):
                repositories.append(RepositorySpec(
                    name=EMPTY_REPOSITORY_NAME,
                    url=self.config.default_chart_repository,
                ))

        plan = HelmState(
            helm_defaults=HelmDefaults(timeout=self.config.helm_timeout),
            repositories=repositories,
            releases=releases,
        )

        existing = frozenset(self.namespaces.list_namespace_names())
        synthesized = self.injector.inject(plan, existing, self.current_namespace)
        if synthesized:
            logger.info("Phase %s: creating namespaces %s", phase.value, ", ".join(synthesized))

        # sorted to keep regenerated helmfiles diff-free; releases keep declaration order
        plan.repositories.sort(key=lambda r: r.name)
        return PhaseResult(phase=phase, plan=plan, synthesized_namespaces=synthesized)

    def _default_namespace(self, app_config: AppConfig) -> str:
        return (
            app_config.default_namespace
            or self.config.default_namespace
            or self.current_namespace
        )

    @staticmethod
    def _chart_reference(details: ChartDetails, alias: str) -> str:
        """Chart to install, qualified by the repository alias for URL charts."""
        if is_absolute_url(details.repository):
            return f"{alias}/{details.local_name}"
        return details.name

"""Namespace-creator releases for namespaces missing from the cluster.

Helm 3 does not create namespaces, so each missing namespace gets a release of
the ``zloeber/namespace`` chart plus a ``needs`` edge from every release that
targets it.
"""

from __future__ import annotations

import logging
import posixpath
import shutil
from pathlib import Path

from helm_plan.core.errors import PlanIOError
from helm_plan.core.plan_writer import dump_yaml, write_file
from helm_plan.models import Phase
from helm_plan.models.helmfile import HelmState, ReleaseSpec, RepositorySpec

logger = logging.getLogger(__name__)

NAMESPACE_REPOSITORY = RepositorySpec(
    name="zloeber",
    url="git+https://github.com/zloeber/helm-namespace@chart",
)
NAMESPACE_CHART = "zloeber/namespace"
GENERATED_DIR = "generated"


def namespace_release_name(namespace: str) -> str:
    return f"namespace-{namespace}"


def generated_values_path(namespace: str) -> str:
    """Values file of a namespace-creator release, relative to the phase directory."""
    return posixpath.join(GENERATED_DIR, namespace, "values.yaml")


class NamespaceInjector:
    """Adds namespace-creator releases to a plan, one per missing namespace."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def generated_dir(self, phase: Phase) -> Path:
        return self.output_dir / phase.value / GENERATED_DIR

    def clean(self, phase: Phase) -> None:
        """Remove values generated by a previous run for *phase*."""
        target = self.generated_dir(phase)
        try:
            shutil.rmtree(target)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PlanIOError("delete generated values directory", target, e) from e

    def inject(
        self,
        plan: HelmState,
        existing_namespaces: frozenset[str],
        current_namespace: str,
    ) -> list[str]:
        """Mutate *plan* in place and return the namespaces synthesized.

        Nothing is written; see write_generated.
        """
        user_releases = list(plan.releases)
        creators: dict[str, ReleaseSpec] = {}
        synthesized: list[str] = []

        for release in user_releases:
            ns = release.namespace
            if not ns or ns in existing_namespaces:
                continue

            creator = creators.get(ns)
            if creator is None:
                creator = plan.release_named(namespace_release_name(ns))
                if creator is None:
                    creator = self._create_namespace_release(plan, ns, current_namespace)
                    synthesized.append(ns)
                creators[ns] = creator

            if creator is release:
                continue
            release.needs = [creator.ref]

        return synthesized

    def _create_namespace_release(self, plan: HelmState, namespace: str, current_namespace: str) -> ReleaseSpec:
        if not plan.has_repository_url(NAMESPACE_REPOSITORY.url):
            plan.repositories.append(NAMESPACE_REPOSITORY)

        release = ReleaseSpec(
            name=namespace_release_name(namespace),
            namespace=current_namespace,
            chart=NAMESPACE_CHART,
            values=[generated_values_path(namespace)],
        )
        plan.releases.append(release)
        logger.debug("Namespace %s does not exist, adding release %s", namespace, release.ref)
        return release

    def write_generated(self, phase: Phase, namespaces: list[str]) -> None:
        """Replace the generated values of *phase* with one file per namespace."""
        self.clean(phase)
        for ns in namespaces:
            path = self.generated_dir(phase) / ns / "values.yaml"
            write_file(path, dump_yaml({"namespaces": [ns]}))

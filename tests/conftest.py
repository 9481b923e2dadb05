"""Shared pytest fixtures for helm_plan tests."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest
from typer.testing import CliRunner

from helm_plan.config.settings import DEFAULT_CHART_REPOSITORY, Settings
from helm_plan.core.compiler import HelmfileCompiler
from helm_plan.core.version_stream import VersionStream

JX_URL = DEFAULT_CHART_REPOSITORY
STABLE_URL = "https://kubernetes-charts.storage.googleapis.com"


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


class FakeNamespaces:
    """Stands in for K8sClient; counts namespace listings."""

    def __init__(self, names: list[str] | None = None, current: str = "jx"):
        self.names = list(names or [])
        self.current = current
        self.list_calls = 0

    @property
    def current_namespace(self) -> str:
        return self.current

    def list_namespace_names(self) -> list[str]:
        self.list_calls += 1
        return list(self.names)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear HPLAN_ environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("HPLAN_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def versions_dir(tmp_path: Path) -> Path:
    """A small version stream checkout."""
    root = tmp_path / "versions"
    write(root / "charts" / "repositories.yml", f"""
        repositories:
        - prefix: jenkins-x
          urls:
          - {JX_URL}
          - http://chartmuseum.jenkins-x.io
        - prefix: stable
          urls:
          - {STABLE_URL}
    """)
    write(root / "charts" / "jenkins-x" / "lighthouse.yml", """
        version: 0.0.633
        gitUrl: https://github.com/jenkins-x/lighthouse
    """)
    write(root / "charts" / "stable" / "velero.yml", "version: 2.7.4\n")
    write(root / "apps" / "stable" / "velero" / "defaults.yml", """
        namespace: velero
        phase: system
    """)
    write(root / "apps" / "stable" / "velero" / "values.yaml", "configuration: {}\n")
    return root


@pytest.fixture
def version_stream(versions_dir: Path) -> VersionStream:
    return VersionStream(versions_dir)


@pytest.fixture
def config(tmp_path: Path, versions_dir: Path) -> Settings:
    return Settings(
        helm_config_dir=tmp_path / "helm",
        versions_dir=versions_dir,
        default_apps_repository="",
        default_chart_repository=DEFAULT_CHART_REPOSITORY,
        default_namespace="",
        helm_timeout=520,
        secrets_values_file="",
    )


@pytest.fixture
def env_dir(tmp_path: Path) -> Path:
    path = tmp_path / "env"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def namespaces() -> FakeNamespaces:
    return FakeNamespaces(["default", "jx", "kube-system"])


@pytest.fixture
def make_compiler(env_dir, output_dir, version_stream, namespaces, config):
    def _make(**kwargs) -> HelmfileCompiler:
        params = dict(
            directory=env_dir,
            output_dir=output_dir,
            version_stream=version_stream,
            namespaces=namespaces,
            local_repos={},
            value_files=[],
            config=config,
        )
        params.update(kwargs)
        return HelmfileCompiler(**params)

    return _make

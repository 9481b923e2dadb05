"""Application configuration and defaults."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CHART_REPOSITORY = "https://storage.googleapis.com/chartmuseum.jenkins-x.io"


def _default_helm_config_dir() -> Path:
    config_home = os.environ.get("HELM_CONFIG_HOME", "")
    if config_home:
        return Path(config_home)
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm"
        return Path.home() / "AppData" / "Roaming" / "helm"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "helm"
    return Path.home() / ".config" / "helm"


def _env_path(name: str, default: str) -> Path:
    return Path(os.environ.get(name, "") or default)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class Settings:
    helm_config_dir: Path = field(default_factory=_default_helm_config_dir)
    versions_dir: Path = field(default_factory=lambda: _env_path("HPLAN_VERSIONS_DIR", "versionStream"))
    default_apps_repository: str = field(
        default_factory=lambda: os.environ.get("HPLAN_DEFAULT_APPS_REPOSITORY", ""),
    )
    default_chart_repository: str = field(
        default_factory=lambda: os.environ.get("HPLAN_DEFAULT_CHART_REPOSITORY", "") or DEFAULT_CHART_REPOSITORY,
    )
    default_namespace: str = field(default_factory=lambda: os.environ.get("HPLAN_DEFAULT_NAMESPACE", ""))
    helm_timeout: int = field(default_factory=lambda: _env_int("HPLAN_HELM_TIMEOUT", 520))
    secrets_values_file: str = field(default_factory=lambda: os.environ.get("HPLAN_SECRETS_YAML", ""))

    @property
    def repositories_file(self) -> Path:
        return self.helm_config_dir / "repositories.yaml"


# Global singleton
settings = Settings()

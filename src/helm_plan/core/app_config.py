"""Load and validate ``jx-apps.yml``."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_plan.core.errors import ConfigurationError
from helm_plan.models.app import AppConfig, Application
from helm_plan.models.helmfile import RepositorySpec

logger = logging.getLogger(__name__)

APP_CONFIG_FILENAMES: tuple[str, ...] = ("jx-apps.yml", "jx-apps.yaml")


def find_app_config(directory: Path) -> Path | None:
    for filename in APP_CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def load_app_config(directory: Path) -> AppConfig:
    """Load the application declarations from *directory*.

    Raises ConfigurationError when the file is missing, is not valid YAML, or
    declares an application with no name or an unknown phase.
    """
    path = find_app_config(directory)
    if path is None:
        raise ConfigurationError(f"no {APP_CONFIG_FILENAMES[0]} found in directory {directory}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"failed to parse YAML file {path}: {e}") from e

    logger.debug("Loaded application config from %s", path)
    return parse_app_config(data or {}, source=str(path))


def parse_app_config(data: dict, source: str = "<memory>") -> AppConfig:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: expected a mapping at the top level")

    apps: list[Application] = []
    for i, entry in enumerate(data.get("apps") or []):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{source}: apps[{i}] must be a mapping")
        value_files = entry.get("valueFiles") or entry.get("values")
        if value_files and not isinstance(value_files, (str, list)):
            raise ConfigurationError(f"{source}: apps[{i}] valueFiles must be a list of paths")
        try:
            app = Application.from_dict(entry)
        except ValueError:
            raise ConfigurationError(
                f"{source}: apps[{i}] has invalid phase {entry.get('phase')!r}, "
                "expected 'system' or 'apps'"
            ) from None
        if not app.name:
            raise ConfigurationError(f"{source}: apps[{i}] is missing a name")
        apps.append(app)

    repositories = [
        RepositorySpec.from_dict(r)
        for r in data.get("repositories") or []
        if isinstance(r, dict) and r.get("url")
    ]

    return AppConfig(
        apps=apps,
        default_namespace=data.get("defaultNamespace", "") or "",
        repositories=repositories,
    )

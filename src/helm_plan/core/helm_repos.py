"""Local Helm repository listing from ``repositories.yaml``."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_plan.config.settings import settings

logger = logging.getLogger(__name__)

# Module-level cache, cleared between runs via clear_caches()
_repos_cache: dict[Path, dict[str, str]] = {}


def clear_caches() -> None:
    """Reset the module-level cache (call once per command invocation)."""
    _repos_cache.clear()


def list_local_repos(repos_file: Path | None = None) -> dict[str, str]:
    """Return the repo name -> URL mapping known to the local Helm client.

    A missing or unreadable ``repositories.yaml`` yields an empty mapping;
    repositories are then resolved through the version stream instead.
    """
    repos_file = repos_file or settings.repositories_file
    if repos_file in _repos_cache:
        return _repos_cache[repos_file]

    repos: dict[str, str] = {}
    if repos_file.exists():
        try:
            data = yaml.safe_load(repos_file.read_text(encoding="utf-8"))
            if data and "repositories" in data:
                repos = {
                    r["name"]: r["url"]
                    for r in data["repositories"] or []
                    if "name" in r and "url" in r
                }
        except (OSError, yaml.YAMLError):
            logger.warning("Failed to parse %s, ignoring local Helm repositories", repos_file, exc_info=True)
    else:
        logger.debug("No Helm repositories file at %s", repos_file)

    _repos_cache[repos_file] = repos
    return repos

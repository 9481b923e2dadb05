"""Read-only access to a version stream checkout.

Layout consumed::

    charts/repositories.yml          prefix -> repository URLs
    charts/<prefix>/<chart>.yml      stable chart versions
    apps/<prefix>/<chart>/defaults.yml
    apps/<prefix>/<chart>/values.yaml[.gotmpl]
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_plan.core.errors import VersionStreamError
from helm_plan.models.chart import AppDefaults, RepositoryPrefix, StableVersion

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available.
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

CHARTS_DIR = "charts"
APP_VALUES_FILENAMES: tuple[str, ...] = ("values.yaml", "values.yaml.gotmpl")


def _is_local_path(name: str) -> bool:
    return name.startswith((".", "/"))


class RepositoryPrefixes:
    """Maps repository prefixes to URLs and back."""

    def __init__(self, repositories: list[RepositoryPrefix] | None = None):
        self.repositories = repositories or []
        self._url_to_prefix: dict[str, str] = {}
        self._prefix_to_urls: dict[str, list[str]] = {}
        for repo in self.repositories:
            self._prefix_to_urls[repo.prefix] = list(repo.urls)
            for url in repo.urls:
                self._url_to_prefix[url] = repo.prefix

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryPrefixes:
        if not d:
            return cls()
        return cls([
            RepositoryPrefix(prefix=r.get("prefix", ""), urls=list(r.get("urls") or []))
            for r in d.get("repositories") or []
            if r.get("prefix")
        ])

    def prefix_for_url(self, url: str) -> str:
        return self._url_to_prefix.get(url, "")

    def urls_for_prefix(self, prefix: str) -> list[str]:
        return self._prefix_to_urls.get(prefix, [])


class VersionStream:
    """Reads pinned versions, repository prefixes and app defaults from disk."""

    def __init__(self, versions_dir: Path):
        self.versions_dir = Path(versions_dir)
        self._prefixes: RepositoryPrefixes | None = None

    def _load_yaml(self, path: Path) -> dict | None:
        if not path.is_file():
            return None
        try:
            data = yaml.load(path.read_text(encoding="utf-8"), Loader=_YamlLoader)
        except OSError as e:
            raise VersionStreamError(f"failed to load file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise VersionStreamError(f"failed to unmarshal YAML in file {path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise VersionStreamError(f"expected a mapping in file {path}")
        return data

    def get_repository_prefixes(self) -> RepositoryPrefixes:
        """Load ``charts/repositories.yml`` once per instance."""
        if self._prefixes is None:
            data = self._load_yaml(self.versions_dir / CHARTS_DIR / "repositories.yml")
            self._prefixes = RepositoryPrefixes.from_dict(data or {})
        return self._prefixes

    def prefix_for_url(self, url: str) -> str:
        return self.get_repository_prefixes().prefix_for_url(url)

    def urls_for_prefix(self, prefix: str) -> list[str]:
        return self.get_repository_prefixes().urls_for_prefix(prefix)

    def stable_version(self, name: str) -> StableVersion | None:
        """Return the pinned chart version record, or None when nothing is pinned."""
        if not name or _is_local_path(name):
            return None
        path = self.versions_dir / CHARTS_DIR / f"{name}.yml"
        data = self._load_yaml(path)
        if data is None:
            logger.debug("No stable version for chart %s in %s", name, self.versions_dir)
            return None
        version = StableVersion.from_dict(data)
        if not version.version:
            return None
        logger.debug("Using stable version %s of chart %s", version.version, name)
        return version

    def resolve_application_defaults(self, chart_name: str) -> tuple[AppDefaults, list[str]]:
        """Return the app defaults and default values files for a chart.

        Values files are returned in the order they should be layered.
        """
        if not chart_name or _is_local_path(chart_name):
            return AppDefaults(), []
        app_dir = self.versions_dir / "apps" / chart_name
        if not app_dir.is_dir():
            return AppDefaults(), []

        data = self._load_yaml(app_dir / "defaults.yml")
        try:
            defaults = AppDefaults.from_dict(data or {})
        except ValueError:
            raise VersionStreamError(
                f"invalid phase {data.get('phase')!r} in {app_dir / 'defaults.yml'}"
            ) from None

        value_files = [
            str(app_dir / filename)
            for filename in APP_VALUES_FILENAMES
            if (app_dir / filename).is_file()
        ]
        return defaults, value_files

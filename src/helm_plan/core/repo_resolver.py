"""Repository alias assignment, deduplicated by URL."""

from __future__ import annotations

import logging
import uuid
from urllib.parse import urlparse

from helm_plan.core.errors import ConfigurationError
from helm_plan.core.version_stream import VersionStream
from helm_plan.models.chart import ChartDetails
from helm_plan.models.helmfile import RepositorySpec

logger = logging.getLogger(__name__)


def is_absolute_url(value: str) -> bool:
    """True if *value* parses as an absolute URI such as ``https://host/path``."""
    if not value:
        return False
    parsed = urlparse(value)
    if not parsed.scheme or len(parsed.scheme) < 2:
        return False
    return bool(parsed.netloc) or parsed.path.startswith("/")


class RepositoryResolver:
    """Assigns one alias per repository URL for a single compilation batch.

    Aliases are recorded the first time a URL is seen; later applications
    using the same URL get the same alias. An alias is never shared by two
    URLs.
    """

    def __init__(self, local_repos: dict[str, str], version_stream: VersionStream):
        self.local_repos = local_repos
        self.version_stream = version_stream
        self._aliases: dict[str, str] = {}
        self._urls: dict[str, str] = {}

    def resolve(self, details: ChartDetails) -> str:
        repository = details.repository
        alias = self._aliases.get(repository)
        if alias is not None:
            return alias

        if not is_absolute_url(repository):
            # local chart directory, used verbatim
            alias = repository
        else:
            alias = self._alias_for_url(repository, details.prefix)
            self._urls[alias] = repository

        self._aliases[repository] = alias
        return alias

    def add(self, repository: RepositorySpec) -> None:
        """Record an explicitly named repository unless its URL is already known.

        Raises ConfigurationError if the name is already used by another URL.
        """
        if repository.url in self._aliases:
            return
        owner = self._urls.get(repository.name)
        if owner is not None:
            raise ConfigurationError(
                f"repository name {repository.name!r} is already used for {owner}, "
                f"cannot also use it for {repository.url}"
            )
        self._aliases[repository.url] = repository.name
        self._urls[repository.name] = repository.url

    def _alias_for_url(self, url: str, chart_prefix: str) -> str:
        candidates = [name for name, repo_url in self.local_repos.items() if repo_url == url]
        candidates += [self.version_stream.prefix_for_url(url), chart_prefix]

        for alias in candidates:
            if not alias:
                continue
            owner = self._urls.get(alias)
            if owner is None:
                return alias
            logger.debug("Alias %s is taken by %s, not using it for %s", alias, owner, url)

        alias = str(uuid.uuid4())
        logger.debug("Generated alias %s for repository %s", alias, url)
        return alias

    def repositories(self) -> list[RepositorySpec]:
        """One RepositorySpec per URL seen so far, in first-seen order."""
        return [
            RepositorySpec(name=alias, url=url)
            for url, alias in self._aliases.items()
            if is_absolute_url(url)
        ]

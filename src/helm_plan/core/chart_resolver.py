"""Chart reference resolution against the version stream."""

from __future__ import annotations

import logging
import posixpath

from helm_plan.config.settings import DEFAULT_CHART_REPOSITORY
from helm_plan.core.version_stream import VersionStream
from helm_plan.models.chart import ChartDetails

logger = logging.getLogger(__name__)


def is_local_chart_path(repository: str) -> bool:
    return repository.startswith((".", "/"))


class ChartResolver:
    """Turns an application's name and repository into ChartDetails.

    The team's default apps repository and the fallback chart repository are
    passed in rather than read from global state.
    """

    def __init__(
        self,
        version_stream: VersionStream,
        default_apps_repository: str = "",
        default_chart_repository: str = DEFAULT_CHART_REPOSITORY,
    ):
        self.version_stream = version_stream
        self.default_apps_repository = default_apps_repository
        self.default_chart_repository = default_chart_repository

    def chart_details(self, name: str, repository: str = "") -> ChartDetails:
        """Resolve the chart for *name* served from *repository*.

        Raises VersionStreamError if the prefix table cannot be read. Unknown
        prefixes are not an error.
        """
        prefix = ""
        local_name = name
        repo = repository

        if "/" in name:
            prefix, local_name = name.split("/", 1)
            urls = self.version_stream.urls_for_prefix(prefix)
            if urls:
                repo = urls[0]

        if not repo:
            repo = self.default_apps_repository or self.default_chart_repository

        if not prefix:
            prefix = self.version_stream.prefix_for_url(repo)

        if prefix and name == local_name:
            name = f"{prefix}/{local_name}"

        if is_local_chart_path(repo):
            name = posixpath.join(repo, local_name)
            repo = ""
            prefix = posixpath.dirname(name)

        details = ChartDetails(name=name, local_name=local_name, prefix=prefix, repository=repo)
        logger.debug("Resolved chart %s -> %s", local_name, details)
        return details

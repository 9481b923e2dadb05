"""Chart version selection."""

from __future__ import annotations

from helm_plan.core.version_stream import VersionStream
from helm_plan.models.app import Application
from helm_plan.models.chart import ChartDetails


def resolve_version(app: Application, details: ChartDetails, version_stream: VersionStream | None) -> str:
    """Return the chart version to install, or "" to let Helm pick.

    An explicit application version always wins over the version stream.
    """
    if app.version:
        return app.version
    if version_stream is None:
        return ""
    stable = version_stream.stable_version(details.name)
    return stable.version if stable else ""

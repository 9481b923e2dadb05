"""Values file layering for a release.

Files added first have the lowest priority, matching ``helm -f`` semantics.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path

from helm_plan.models import Phase
from helm_plan.models.app import Application

logger = logging.getLogger(__name__)

LOCAL_VALUES_FILENAMES: tuple[str, ...] = ("values.yaml", "values.yaml.gotmpl")


class ValuesResolver:
    """Builds the ordered values list for each application.

    *cli_values* apply to every release and are passed through unchecked.
    Local overrides are looked up under ``<directory>/<phase>/<app>/``.
    """

    def __init__(self, directory: Path, cli_values: list[str] | tuple[str, ...] = ()):
        self.directory = Path(directory)
        self.cli_values = list(cli_values)

    def resolve(
        self, app: Application, phase: Phase, default_values: list[str] | tuple[str, ...] = (),
    ) -> list[str]:
        values: list[str] = list(app.value_files)
        values.extend(default_values)
        values.extend(self.cli_values)
        values.extend(self.local_values(app.name, phase))
        return values

    def local_values(self, app_name: str, phase: Phase) -> list[str]:
        """Return the override files present on disk, relative to the phase dir."""
        names = [app_name]
        if "/" in app_name:
            names.append(app_name.split("/", 1)[1])

        found: list[str] = []
        for filename in LOCAL_VALUES_FILENAMES:
            for name in names:
                if (self.directory / phase.value / name / filename).is_file():
                    found.append(posixpath.join(name, filename))
        if found:
            logger.debug("Found local values for %s: %s", app_name, found)
        return found

"""Serialize compiled plans to ``<output>/<phase>/helmfile.yaml``."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

import yaml

from helm_plan.core.errors import PlanIOError
from helm_plan.models import Phase
from helm_plan.models.helmfile import HelmState

logger = logging.getLogger(__name__)

HELMFILE_NAME = "helmfile.yaml"


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def write_file(path: Path, text: str) -> None:
    """Write *text* to *path* in one step.

    The content goes to a temporary sibling first and is then renamed over
    the target, so a failed write never leaves a truncated file behind.
    An existing file keeps its permissions; a new one gets 0666 minus umask.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PlanIOError("create directory", path.parent, e) from e

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PlanIOError("write file", path, e) from e


def _file_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def helmfile_path(output_dir: Path, phase: Phase) -> Path:
    return Path(output_dir) / phase.value / HELMFILE_NAME


def write_plan(plan: HelmState, output_dir: Path, phase: Phase) -> Path:
    """Write *plan* for *phase* and return the path written."""
    text = dump_yaml(plan.to_dict())
    path = helmfile_path(output_dir, phase)
    write_file(path, text)
    logger.info("Wrote %s", path)
    return path


def load_plan(path: Path) -> HelmState:
    """Read a previously written helmfile back into a HelmState."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return HelmState.from_dict(data)

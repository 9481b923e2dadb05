"""Exceptions raised while compiling release plans."""

from __future__ import annotations

from pathlib import Path


class PlanError(Exception):
    """Base exception for plan compilation failures."""


class ConfigurationError(PlanError):
    """Raised when the application declarations are invalid.

    Covers a missing or malformed ``jx-apps.yml``, unknown phase values and
    applications without a name.
    """


class VersionStreamError(PlanError):
    """Raised when a version stream file exists but cannot be read or parsed."""


class ClusterError(PlanError):
    """Raised when the live cluster cannot be queried for namespaces."""


class PlanIOError(PlanError):
    """Raised when a plan or generated values file cannot be written.

    Attributes:
        path: File or directory the operation targeted.
        operation: Short description of what was attempted.
    """

    def __init__(self, operation: str, path: Path | str, cause: OSError | None = None) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        message = f"failed to {operation} {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)

"""Application declaration models (``jx-apps.yml``)."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_plan.models import Phase
from helm_plan.models.helmfile import RepositorySpec


@dataclass(frozen=True)
class Application:
    name: str
    repository: str = ""
    namespace: str = ""
    phase: Phase | None = None
    version: str = ""
    value_files: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, d: dict) -> Application:
        value_files = d.get("valueFiles") or d.get("values") or ()
        if isinstance(value_files, str):
            value_files = [value_files]
        return cls(
            name=d.get("name", "") or "",
            repository=d.get("repository", "") or "",
            namespace=d.get("namespace", "") or "",
            phase=Phase.parse(d.get("phase")),
            version=str(d.get("version", "") or ""),
            value_files=tuple(str(v) for v in value_files),
        )


@dataclass
class AppConfig:
    apps: list[Application] = field(default_factory=list)
    default_namespace: str = ""
    repositories: list[RepositorySpec] = field(default_factory=list)

"""Chart resolution and version stream models."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_plan.models import Phase


@dataclass(frozen=True)
class ChartDetails:
    name: str
    local_name: str
    prefix: str = ""
    repository: str = ""


@dataclass
class StableVersion:
    version: str = ""
    upper_limit: str = ""
    git_url: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> StableVersion:
        if not d:
            return cls()
        return cls(
            version=str(d.get("version", "") or ""),
            upper_limit=str(d.get("upperLimit", "") or ""),
            git_url=d.get("gitUrl", "") or "",
            url=d.get("url", "") or "",
        )


@dataclass
class AppDefaults:
    namespace: str = ""
    phase: Phase | None = None

    @classmethod
    def from_dict(cls, d: dict) -> AppDefaults:
        if not d:
            return cls()
        return cls(
            namespace=d.get("namespace", "") or "",
            phase=Phase.parse(d.get("phase")),
        )


@dataclass
class RepositoryPrefix:
    prefix: str
    urls: list[str] = field(default_factory=list)

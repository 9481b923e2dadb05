"""Helmfile document models.

Field order in ``to_dict`` is the order written to ``helmfile.yaml``; unset
optional fields are dropped so the output only carries what was resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BASES: tuple[str, ...] = ("../environments.yaml",)


@dataclass(frozen=True)
class RepositorySpec:
    name: str
    url: str

    @classmethod
    def from_dict(cls, d: dict) -> RepositorySpec:
        return cls(name=d.get("name", "") or "", url=d.get("url", "") or "")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass
class ReleaseSpec:
    name: str
    namespace: str = ""
    chart: str = ""
    version: str = ""
    values: list[str] = field(default_factory=list)
    needs: list[str] = field(default_factory=list)

    @property
    def ref(self) -> str:
        """``namespace/name`` form used by other releases' ``needs``."""
        return f"{self.namespace}/{self.name}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.namespace:
            data["namespace"] = self.namespace
        if self.chart:
            data["chart"] = self.chart
        if self.version:
            data["version"] = self.version
        if self.values:
            data["values"] = list(self.values)
        if self.needs:
            data["needs"] = list(self.needs)
        return data


@dataclass
class HelmDefaults:
    atomic: bool = True
    verify: bool = False
    wait: bool = True
    timeout: int = 520
    # must stay false, see https://github.com/helm/helm/issues/6378
    force: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "atomic": self.atomic,
            "verify": self.verify,
            "wait": self.wait,
            "timeout": self.timeout,
            "force": self.force,
        }


@dataclass
class HelmState:
    bases: list[str] = field(default_factory=lambda: list(DEFAULT_BASES))
    helm_defaults: HelmDefaults = field(default_factory=HelmDefaults)
    repositories: list[RepositorySpec] = field(default_factory=list)
    releases: list[ReleaseSpec] = field(default_factory=list)

    def has_repository_url(self, url: str) -> bool:
        return any(r.url == url for r in self.repositories)

    def release_named(self, name: str) -> ReleaseSpec | None:
        for release in self.releases:
            if release.name == name:
                return release
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.bases:
            data["bases"] = list(self.bases)
        data["helmDefaults"] = self.helm_defaults.to_dict()
        if self.repositories:
            data["repositories"] = [r.to_dict() for r in self.repositories]
        if self.releases:
            data["releases"] = [r.to_dict() for r in self.releases]
        return data

    @classmethod
    def from_dict(cls, d: dict) -> HelmState:
        defaults = d.get("helmDefaults") or {}
        return cls(
            bases=list(d.get("bases") or []),
            helm_defaults=HelmDefaults(
                atomic=defaults.get("atomic", True),
                verify=defaults.get("verify", False),
                wait=defaults.get("wait", True),
                timeout=defaults.get("timeout", 520),
                force=defaults.get("force", False),
            ),
            repositories=[RepositorySpec.from_dict(r) for r in d.get("repositories") or []],
            releases=[
                ReleaseSpec(
                    name=r.get("name", ""),
                    namespace=r.get("namespace", ""),
                    chart=r.get("chart", ""),
                    version=str(r.get("version", "") or ""),
                    values=list(r.get("values") or []),
                    needs=list(r.get("needs") or []),
                )
                for r in d.get("releases") or []
            ],
        )

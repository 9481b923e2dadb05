"""Data models for helm-plan."""

from __future__ import annotations

import enum


class Phase(enum.Enum):
    SYSTEM = "system"
    APPS = "apps"

    @classmethod
    def parse(cls, value: str | None) -> Phase | None:
        """Return the phase for a config value, ``None`` when unset.

        Raises ValueError for anything other than ``system`` or ``apps``.
        """
        if not value:
            return None
        return cls(value)


# Order in which phases are compiled and installed
PHASE_ORDER: tuple[Phase, ...] = (Phase.SYSTEM, Phase.APPS)

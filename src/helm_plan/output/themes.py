"""Phase color map."""

from helm_plan.models import Phase

PHASE_COLORS: dict[Phase, str] = {
    Phase.SYSTEM: "magenta",
    Phase.APPS: "cyan",
}


def styled_phase(phase: Phase) -> str:
    color = PHASE_COLORS.get(phase, "white")
    return f"[{color}]{phase.value}[/{color}]"

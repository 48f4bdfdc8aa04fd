"""
Scenario mode definitions.

Each mode maps to one ``ModeProfile`` holding its zone geometry, its morph
policy, its presentation colors and its legend labels. Adding a mode means
adding one entry to ``MODE_PROFILES``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ScenarioMode(str, Enum):
    """Closed set of scenario categories."""

    AGRICULTURE = "agriculture"
    COASTAL = "coastal"
    FLOOD = "flood"
    PORTFOLIO = "portfolio"

    @classmethod
    def parse(cls, value) -> Optional["ScenarioMode"]:
        """Return the matching mode, or None for an unknown tag."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class MorphDirection(str, Enum):
    """Whether a zone shrinks or grows as warming increases."""

    SHRINK = "shrink"
    EXPAND = "expand"


@dataclass(frozen=True)
class ZoneGeometry:
    """Procedural zone parameters."""

    base_radius_km: float
    irregularity: float  # fraction of the radius perturbed by noise, 0..1
    vertex_count: int

    def __post_init__(self):
        if self.vertex_count < 3:
            raise ValueError(f"vertex_count must be at least 3, got {self.vertex_count}")
        if not 0 <= self.irregularity <= 1:
            raise ValueError(f"irregularity must be within [0, 1], got {self.irregularity}")


@dataclass(frozen=True)
class MorphPolicy:
    """Scale reached at the maximum warming level."""

    direction: MorphDirection
    limit_scale: float  # floor for SHRINK, ceiling for EXPAND


@dataclass(frozen=True)
class ZoneLabels:
    """Legend wording for a mode."""

    zone: str
    adverse: str
    favourable: str


@dataclass(frozen=True)
class ModeProfile:
    """Everything the engine needs to know about one scenario mode."""

    mode: ScenarioMode
    geometry: Optional[ZoneGeometry]
    morph: Optional[MorphPolicy]
    baseline_rgb: Tuple[int, int, int]
    baseline_color: str
    outline_color: str
    loss_color: str
    labels: Optional[ZoneLabels] = None


WARNING_RGB = (245, 158, 11)  # amber
DANGER_RGB = (239, 68, 68)  # red

MODE_PROFILES: Dict[ScenarioMode, ModeProfile] = {
    ScenarioMode.AGRICULTURE: ModeProfile(
        mode=ScenarioMode.AGRICULTURE,
        geometry=ZoneGeometry(base_radius_km=15, irregularity=0.25, vertex_count=32),
        morph=MorphPolicy(MorphDirection.SHRINK, limit_scale=0.55),
        baseline_rgb=(34, 197, 94),
        baseline_color="#22c55e",
        outline_color="#22c55e",
        loss_color="rgba(239, 68, 68, 0.55)",
        labels=ZoneLabels("Viable Growing Area", adverse="Lost", favourable="Gained"),
    ),
    ScenarioMode.COASTAL: ModeProfile(
        mode=ScenarioMode.COASTAL,
        geometry=ZoneGeometry(base_radius_km=12, irregularity=0.3, vertex_count=28),
        morph=MorphPolicy(MorphDirection.SHRINK, limit_scale=0.60),
        baseline_rgb=(20, 184, 166),
        baseline_color="#14b8a6",
        outline_color="#14b8a6",
        loss_color="rgba(239, 68, 68, 0.55)",
        labels=ZoneLabels("Safe Zone", adverse="At Risk", favourable="Protected"),
    ),
    ScenarioMode.FLOOD: ModeProfile(
        mode=ScenarioMode.FLOOD,
        geometry=ZoneGeometry(base_radius_km=10, irregularity=0.2, vertex_count=36),
        morph=MorphPolicy(MorphDirection.EXPAND, limit_scale=1.50),
        baseline_rgb=(59, 130, 246),
        baseline_color="#3b82f6",
        outline_color="#f97316",
        loss_color="rgba(249, 115, 22, 0.55)",
        labels=ZoneLabels("Flood Risk Zone", adverse="Expanded", favourable="Reduced"),
    ),
    # Portfolio view has no zone of its own: no geometry, no morph
    ScenarioMode.PORTFOLIO: ModeProfile(
        mode=ScenarioMode.PORTFOLIO,
        geometry=None,
        morph=None,
        baseline_rgb=(168, 85, 247),
        baseline_color="#a855f7",
        outline_color="#a855f7",
        loss_color="rgba(168, 85, 247, 0.55)",
    ),
}

# Palette used when a caller passes a tag this table does not know
FALLBACK_MODE = ScenarioMode.AGRICULTURE


def get_mode_profile(mode) -> Optional[ModeProfile]:
    """
    Look up the profile for a mode tag.

    Args:
        mode: ScenarioMode or its string tag

    Returns:
        ModeProfile, or None if the tag is unknown
    """
    parsed = ScenarioMode.parse(mode)
    if parsed is None:
        return None
    return MODE_PROFILES.get(parsed)


def list_modes() -> List[str]:
    """Return the tags of all known modes."""
    return [mode.value for mode in MODE_PROFILES]

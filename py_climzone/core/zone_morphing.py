"""
Zone morphing driven by the warming level.

This module implements:
- Warming level to scale factor, per the mode's shrink/expand policy
- Scaling the baseline zone about its centroid
- Fill color blend baseline -> amber -> red, plus fixed outline/loss colors
- Area change summary between a baseline and a morphed zone
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import structlog

from ..config.scenario_modes import (
    DANGER_RGB,
    FALLBACK_MODE,
    MODE_PROFILES,
    WARNING_RGB,
    MorphDirection,
    get_mode_profile,
)
from .polygon import Polygon, polygon_area, scale_polygon

logger = structlog.get_logger()

MAX_WARMING_LEVEL = 3.0  # °C at which a zone reaches its floor/ceiling scale
BASE_FILL_OPACITY = 0.3
FILL_OPACITY_RANGE = 0.15


@dataclass(frozen=True)
class ZoneColors:
    """Presentation colors for a zone at one warming level."""

    fill_color: str
    fill_opacity: float
    outline_color: str
    loss_color: str
    baseline_outline_color: str

    def to_dict(self):
        return {
            "fillColor": self.fill_color,
            "fillOpacity": self.fill_opacity,
            "outlineColor": self.outline_color,
            "lossColor": self.loss_color,
            "baselineOutlineColor": self.baseline_outline_color,
        }


@dataclass(frozen=True)
class ZoneChange:
    """Area comparison between a baseline and a morphed zone."""

    baseline_area_km2: float
    current_area_km2: float
    percent_change: float
    is_adverse: bool
    label: Optional[str] = None
    zone_label: Optional[str] = None

    @property
    def area_change_km2(self) -> float:
        return self.current_area_km2 - self.baseline_area_km2


def warming_ratio(warming_level: float) -> float:
    """Clamp the warming level to [0, 3] and normalise it to [0, 1]."""
    # +/-inf clamp to the bounds; NaN counts as no warming
    if math.isnan(warming_level):
        return 0.0
    clamped = max(0.0, min(MAX_WARMING_LEVEL, warming_level))
    return clamped / MAX_WARMING_LEVEL


def scale_for_warming(mode, warming_level: float) -> float:
    """
    Scale factor applied to the baseline zone at a warming level.

    Modes without a morph policy (and unknown modes) always give 1.0.
    """
    profile = get_mode_profile(mode)
    if profile is None or profile.morph is None:
        return 1.0

    ratio = warming_ratio(warming_level)
    policy = profile.morph
    if policy.direction is MorphDirection.SHRINK:
        return 1 - ratio * (1 - policy.limit_scale)
    return 1 + ratio * (policy.limit_scale - 1)


def morph_zone(baseline: Polygon, warming_level: float, mode) -> Polygon:
    """
    Resize the baseline zone for a warming level.

    Args:
        baseline: Zone at 0 °C
        warming_level: Warming in °C, clamped to [0, 3]
        mode: ScenarioMode or its string tag

    Returns:
        New polygon; the baseline itself for modes without a morph policy
    """
    profile = get_mode_profile(mode)
    if profile is None or profile.morph is None:
        return baseline
    return scale_polygon(baseline, scale_for_warming(profile.mode, warming_level))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _blend(start: Tuple[int, int, int], end: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    return tuple(_round_half_up(a + (b - a) * t) for a, b in zip(start, end))


def zone_colors(mode, warming_level: float) -> ZoneColors:
    """
    Colors for a zone at a warming level.

    The fill moves from the mode's baseline color to amber over the first
    half of the warming range and from amber to red over the second half.
    Unknown modes use the agriculture palette.
    """
    profile = get_mode_profile(mode)
    if profile is None:
        logger.debug("Unknown mode, using fallback palette", mode=str(mode))
        profile = MODE_PROFILES[FALLBACK_MODE]

    ratio = warming_ratio(warming_level)
    if ratio <= 0.5:
        r, g, b = _blend(profile.baseline_rgb, WARNING_RGB, ratio * 2)
    else:
        r, g, b = _blend(WARNING_RGB, DANGER_RGB, (ratio - 0.5) * 2)

    return ZoneColors(
        fill_color=f"rgb({r}, {g}, {b})",
        fill_opacity=BASE_FILL_OPACITY + ratio * FILL_OPACITY_RANGE,
        outline_color=profile.outline_color,
        loss_color=profile.loss_color,
        baseline_outline_color=profile.baseline_color,
    )


def summarize_zone_change(baseline: Polygon, current: Polygon, mode) -> ZoneChange:
    """
    Compare the areas of a baseline and a morphed zone.

    Shrinking is adverse for shrink-policy modes, growth is adverse for
    expand-policy modes. Modes without a policy are never adverse, and an
    unchanged zone carries no label. ``zone_label`` names the zone in legends
    ("Safe Zone", "Flood Risk Zone").
    """
    baseline_area = polygon_area(baseline)
    current_area = polygon_area(current)
    percent = (current_area - baseline_area) / baseline_area * 100 if baseline_area > 0 else 0.0

    profile = get_mode_profile(mode)
    is_adverse = False
    label = None
    zone_label = profile.labels.zone if profile is not None and profile.labels is not None else None
    if profile is not None and profile.morph is not None:
        if profile.morph.direction is MorphDirection.EXPAND:
            is_adverse = percent > 0
        else:
            is_adverse = percent < 0
    if profile is not None and profile.labels is not None and percent != 0:
        label = profile.labels.adverse if is_adverse else profile.labels.favourable

    return ZoneChange(
        baseline_area_km2=baseline_area,
        current_area_km2=current_area,
        percent_change=percent,
        is_adverse=is_adverse,
        label=label,
        zone_label=zone_label,
    )

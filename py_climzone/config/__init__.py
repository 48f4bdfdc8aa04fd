"""
Configuration modules for the zone engine.
"""

from .scenario_modes import (
    MODE_PROFILES,
    ModeProfile,
    MorphDirection,
    MorphPolicy,
    ScenarioMode,
    ZoneGeometry,
    get_mode_profile,
    list_modes,
)
from .settings import Settings, settings

__all__ = ['MODE_PROFILES', 'ModeProfile', 'MorphDirection', 'MorphPolicy',
           'ScenarioMode', 'ZoneGeometry', 'get_mode_profile', 'list_modes',
           'Settings', 'settings']

"""
Scenario facade tying zone generation, morphing and climate projection.

A ``ZoneScenario`` generates the baseline zone once for a center and mode, then
produces snapshots for any warming level or projection year. The engine keeps
no caches of its own; hosts that redraw the same zone repeatedly can hold a
``ZoneCache`` and pass it in.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple, Union

import structlog

from ..config.scenario_modes import MorphDirection, ScenarioMode, get_mode_profile
from ..config.settings import Settings, settings as default_settings
from .climate_anchors import ClimateProjection, project_climate
from .polygon import Coordinate, Polygon, polygon_area, ring_difference, to_boundary_format
from .zone_generator import generate_zone
from .zone_morphing import (
    ZoneChange,
    ZoneColors,
    morph_zone,
    scale_for_warming,
    summarize_zone_change,
    zone_colors,
)

logger = structlog.get_logger()

CacheKey = Tuple[float, float, str]
EvictionPolicy = Callable[[Sequence[CacheKey]], CacheKey]


def _mode_tag(mode) -> str:
    parsed = ScenarioMode.parse(mode)
    return parsed.value if parsed is not None else str(mode)


def evict_least_recently_used(keys: Sequence[CacheKey]) -> CacheKey:
    """Default eviction policy: the oldest key in access order."""
    return keys[0]


class ZoneCache:
    """
    Caller-owned memo of generated baseline zones.

    Keyed by (lat, lng, mode). ``eviction`` receives the keys in access order
    (least recent first) and returns the one to drop when the cache is full.
    Returning a key that is not cached raises ``KeyError``.
    """

    def __init__(
        self,
        max_entries: Optional[int] = None,
        eviction: Optional[EvictionPolicy] = None,
    ):
        if max_entries is None:
            max_entries = default_settings.zone_cache_size
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self.eviction = eviction or evict_least_recently_used
        self._zones: "OrderedDict[CacheKey, Polygon]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(center: Coordinate, mode) -> CacheKey:
        return (center.lat, center.lng, _mode_tag(mode))

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._zones

    def get_or_generate(self, center: Coordinate, mode) -> Polygon:
        """Return the cached baseline zone, generating it on a miss."""
        key = self.make_key(center, mode)
        if key in self._zones:
            self.hits += 1
            self._zones.move_to_end(key)
            logger.debug("Reusing cached zone", key=key)
            return self._zones[key]

        self.misses += 1
        zone = generate_zone(center, mode)
        if len(self._zones) >= self.max_entries:
            evicted = self.eviction(list(self._zones.keys()))
            if evicted not in self._zones:
                raise KeyError(f"Eviction policy chose a key not in the cache: {evicted!r}")
            del self._zones[evicted]
            logger.debug("Evicted cached zone", key=evicted)
        self._zones[key] = zone
        return zone

    def clear(self) -> None:
        self._zones.clear()


@dataclass(frozen=True)
class ZoneSnapshot:
    """Everything needed to render a zone at one warming level."""

    mode: str
    warming_level: float
    scale: float
    baseline: Polygon
    current: Polygon
    colors: ZoneColors
    change: ZoneChange
    boundary: Dict[str, Any]
    baseline_boundary: Dict[str, Any]
    change_ring: Optional[Dict[str, Any]]
    projection: Optional[ClimateProjection] = None

    @property
    def baseline_area_km2(self) -> float:
        return self.change.baseline_area_km2

    @property
    def current_area_km2(self) -> float:
        return self.change.current_area_km2


class ZoneScenario:
    """
    One zone around one center for one scenario mode.

    The baseline is generated (or taken from ``external_boundary``) on
    construction, or fetched from ``cache`` when one is given. An external
    boundary may be a ``Polygon`` or a sequence of ``[lng, lat]`` pairs, with
    or without the closing vertex.
    """

    def __init__(
        self,
        center: Coordinate,
        mode,
        external_boundary: Union[Polygon, Sequence[Sequence[float]], None] = None,
        cache: Optional[ZoneCache] = None,
    ):
        if external_boundary is not None and not isinstance(external_boundary, Polygon):
            external_boundary = Polygon.from_pairs(external_boundary)

        self.center = center
        self.mode = mode
        self.profile = get_mode_profile(mode)

        if external_boundary is None and cache is not None:
            self.baseline = cache.get_or_generate(center, mode)
        else:
            self.baseline = generate_zone(center, mode, external_boundary)

        self.baseline_area_km2 = polygon_area(self.baseline)
        logger.info(
            "Scenario baseline ready",
            mode=_mode_tag(mode),
            vertices=len(self.baseline),
            area_km2=round(self.baseline_area_km2, 3),
        )

    def _change_ring(self, current: Polygon) -> Optional[Dict[str, Any]]:
        """Lost area for shrinking modes, gained area for expanding ones."""
        if self.profile is None or self.profile.morph is None:
            return None
        if self.profile.morph.direction is MorphDirection.EXPAND:
            return ring_difference(current, self.baseline)
        return ring_difference(self.baseline, current)

    def at_warming_level(
        self, warming_level: float, projection: Optional[ClimateProjection] = None
    ) -> ZoneSnapshot:
        """Morph the baseline for a warming level in °C."""
        current = morph_zone(self.baseline, warming_level, self.mode)
        return ZoneSnapshot(
            mode=_mode_tag(self.mode),
            warming_level=warming_level,
            scale=scale_for_warming(self.mode, warming_level),
            baseline=self.baseline,
            current=current,
            colors=zone_colors(self.mode, warming_level),
            change=summarize_zone_change(self.baseline, current, self.mode),
            boundary=to_boundary_format(current),
            baseline_boundary=to_boundary_format(self.baseline),
            change_ring=self._change_ring(current),
            projection=projection,
        )

    def at_year(self, year: float) -> ZoneSnapshot:
        """Morph the baseline for the warming projected for a year."""
        projection = project_climate(year)
        return self.at_warming_level(projection.temperature_c, projection=projection)


class ProjectionTimeline:
    """Year range a host steps through when animating projections."""

    def __init__(self, start_year: Optional[int] = None, end_year: Optional[int] = None,
                 config: Optional[Settings] = None):
        config = config or default_settings
        self.start_year = config.timeline_start_year if start_year is None else start_year
        self.end_year = config.timeline_end_year if end_year is None else end_year
        if self.end_year < self.start_year:
            raise ValueError(
                f"Timeline end {self.end_year} precedes start {self.start_year}"
            )

    def years(self) -> List[int]:
        return list(range(self.start_year, self.end_year + 1))

    def next_year(self, year: int) -> int:
        """Advance one year, wrapping to the start after the end."""
        if year >= self.end_year:
            return self.start_year
        return max(year + 1, self.start_year)

    def projections(self) -> List[ClimateProjection]:
        return [project_climate(year) for year in self.years()]

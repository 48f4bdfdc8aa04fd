"""
Year-to-climate interpolation over literature anchor points.

Each climate scalar (warming, rainfall intensity, sea-level rise) has its own
ordered list of (year, value) anchors. Values between anchors are linear;
values after the last anchor extrapolate the final segment's slope.

Before the first anchor the scalars differ on purpose: sea-level rise is
cumulative from a reference year (2000, zero rise), so it interpolates from
that baseline, while warming and rainfall hold the first anchor's value.
"""

import bisect
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

import structlog

logger = structlog.get_logger()

STORM_SURGE_HEIGHT_M = 2.5  # added for a 1-in-100 year storm


class ClimateAnchor(NamedTuple):
    """A fixed (year, value) sample."""
    year: int
    value: float


@dataclass(frozen=True)
class ClimateAnchorSet:
    """
    Anchors for one climate scalar.

    Attributes:
        name: Scalar name
        unit: Display unit
        anchors: Anchors, strictly increasing in year
        reference_year: Year at which the scalar is zero, if it has one.
            When set, years before the first anchor interpolate from
            (reference_year, 0) instead of clamping.
        display_decimals: Precision used for rounded display values
    """

    name: str
    unit: str
    anchors: Tuple[ClimateAnchor, ...]
    reference_year: Optional[int] = None
    display_decimals: int = 2

    def __post_init__(self):
        anchors = tuple(ClimateAnchor(int(year), float(value)) for year, value in self.anchors)
        if not anchors:
            raise ValueError(f"Anchor set '{self.name}' is empty")
        for prev, curr in zip(anchors, anchors[1:]):
            if curr.year <= prev.year:
                raise ValueError(
                    f"Anchor years must be strictly increasing in '{self.name}': "
                    f"{prev.year} then {curr.year}"
                )
        if self.reference_year is not None and self.reference_year >= anchors[0].year:
            raise ValueError(
                f"Reference year {self.reference_year} must precede the first anchor "
                f"of '{self.name}'"
            )
        object.__setattr__(self, "anchors", anchors)

    @property
    def years(self) -> Tuple[int, ...]:
        return tuple(a.year for a in self.anchors)


TEMPERATURE_ANCHORS = ClimateAnchorSet(
    name="temperature",
    unit="°C",
    anchors=(
        ClimateAnchor(2026, 1.4),
        ClimateAnchor(2030, 1.5),
        ClimateAnchor(2050, 2.1),
    ),
    display_decimals=1,
)

# % increase vs pre-industrial; ~7% per degree of warming (Clausius-Clapeyron)
RAINFALL_INTENSITY_ANCHORS = ClimateAnchorSet(
    name="rainfall_intensity",
    unit="%",
    anchors=(
        ClimateAnchor(2026, 9),
        ClimateAnchor(2030, 10),
        ClimateAnchor(2050, 17),
    ),
    display_decimals=0,
)

# IPCC projections, metres since 2000
SEA_LEVEL_RISE_ANCHORS = ClimateAnchorSet(
    name="sea_level_rise",
    unit="m",
    anchors=(
        ClimateAnchor(2030, 0.05),
        ClimateAnchor(2050, 0.19),
    ),
    reference_year=2000,
    display_decimals=2,
)


def _lerp(start: ClimateAnchor, end: ClimateAnchor, year: float) -> float:
    t = (year - start.year) / (end.year - start.year)
    return start.value + t * (end.value - start.value)


def value_at_year(anchor_set: ClimateAnchorSet, year: float) -> float:
    """
    Interpolate a climate scalar for a projection year.

    Args:
        anchor_set: Anchors for the scalar
        year: Projection year

    Returns:
        Interpolated (or extrapolated) value. Exact anchor years return the
        anchor value unchanged.
    """
    anchors = anchor_set.anchors
    first = anchors[0]
    last = anchors[-1]

    if not math.isfinite(year):
        logger.warning("Non-finite projection year", scalar=anchor_set.name, year=year)
        return first.value

    idx = bisect.bisect_left(anchor_set.years, year)
    if idx < len(anchors) and anchors[idx].year == year:
        return anchors[idx].value

    if year < first.year:
        if anchor_set.reference_year is None:
            return first.value
        return _lerp(ClimateAnchor(anchor_set.reference_year, 0.0), first, year)

    if year > last.year:
        if len(anchors) < 2:
            return last.value
        prev = anchors[-2]
        rate = (last.value - prev.value) / (last.year - prev.year)
        return last.value + rate * (year - last.year)

    return _lerp(anchors[idx - 1], anchors[idx], year)


def round_half_up(value: float, decimals: int) -> float:
    """Round halves upwards to ``decimals`` places."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class ClimateProjection:
    """The three climate scalars for one projection year."""

    year: float
    temperature_c: float
    rainfall_intensity_pct: float
    sea_level_rise_m: float

    def total_water_level_m(self, include_storm_surge: bool = False) -> float:
        """Sea-level rise plus, optionally, a 1-in-100 year storm surge."""
        return self.sea_level_rise_m + (STORM_SURGE_HEIGHT_M if include_storm_surge else 0.0)

    def rounded(self) -> "ClimateProjection":
        """Copy rounded to each scalar's display precision."""
        return ClimateProjection(
            year=self.year,
            temperature_c=round_half_up(
                self.temperature_c, TEMPERATURE_ANCHORS.display_decimals
            ),
            rainfall_intensity_pct=round_half_up(
                self.rainfall_intensity_pct, RAINFALL_INTENSITY_ANCHORS.display_decimals
            ),
            sea_level_rise_m=round_half_up(
                self.sea_level_rise_m, SEA_LEVEL_RISE_ANCHORS.display_decimals
            ),
        )


def project_climate(year: float) -> ClimateProjection:
    """
    Interpolate every climate scalar for a projection year.

    Each scalar is looked up independently in its own anchor set.
    """
    projection = ClimateProjection(
        year=year,
        temperature_c=value_at_year(TEMPERATURE_ANCHORS, year),
        rainfall_intensity_pct=value_at_year(RAINFALL_INTENSITY_ANCHORS, year),
        sea_level_rise_m=value_at_year(SEA_LEVEL_RISE_ANCHORS, year),
    )
    logger.debug(
        "Projected climate",
        year=year,
        temperature_c=projection.temperature_c,
        rainfall_intensity_pct=projection.rainfall_intensity_pct,
        sea_level_rise_m=projection.sea_level_rise_m,
    )
    return projection


def anchors_from_pairs(
    name: str,
    pairs: Sequence[Tuple[int, float]],
    unit: str = "",
    reference_year: Optional[int] = None,
    display_decimals: int = 2,
) -> ClimateAnchorSet:
    """Build an anchor set from plain (year, value) pairs."""
    return ClimateAnchorSet(
        name=name,
        unit=unit,
        anchors=tuple(ClimateAnchor(year, value) for year, value in pairs),
        reference_year=reference_year,
        display_decimals=display_decimals,
    )

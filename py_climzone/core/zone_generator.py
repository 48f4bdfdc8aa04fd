"""
Procedural zone generation.

Builds an irregular ring around a center point by perturbing a circle's radius
per vertex with seeded simplex noise. The seed comes from the center itself, so
the same center and mode always give a bit-identical polygon.
"""

import math
from typing import List, Optional

import structlog

from ..config.scenario_modes import get_mode_profile
from .lcg_prng import make_random_stream, seed_from_coordinates
from .noise import simplex_noise_2d
from .polygon import KM_PER_DEGREE_LAT, Coordinate, Polygon

logger = structlog.get_logger()

NOISE_RADIUS = 2.0  # radius of the circle sampled in noise space
NOISE_SEED_OFFSET = 0.001  # per-seed shift of the noise sample circle

EMPTY_POLYGON = Polygon(())


def generate_zone(
    center: Coordinate,
    mode,
    external_boundary: Optional[Polygon] = None,
) -> Polygon:
    """
    Generate the baseline zone for a center point.

    Args:
        center: Zone center as (lng, lat)
        mode: ScenarioMode or its string tag
        external_boundary: Authoritative boundary that overrides generation

    Returns:
        Polygon without a closing duplicate vertex. Modes without geometry,
        unknown modes and non-finite or out-of-range centers give an empty
        polygon.
    """
    if external_boundary is not None:
        logger.debug("Using external zone boundary", vertices=len(external_boundary))
        return external_boundary

    profile = get_mode_profile(mode)
    if profile is None or profile.geometry is None:
        logger.debug("No zone geometry for mode", mode=str(mode))
        return EMPTY_POLYGON

    lng, lat = center
    if not (math.isfinite(lat) and math.isfinite(lng)):
        logger.warning("Non-finite zone center", lat=lat, lng=lng)
        return EMPTY_POLYGON

    try:
        seed = seed_from_coordinates(lat, lng)
    except ValueError:
        logger.warning("Zone center out of range", lat=lat, lng=lng)
        return EMPTY_POLYGON

    geometry = profile.geometry
    random = make_random_stream(seed)

    km_per_degree_lng = KM_PER_DEGREE_LAT * math.cos(lat * math.pi / 180)
    offset = seed * NOISE_SEED_OFFSET

    coordinates: List[Coordinate] = []
    for i in range(geometry.vertex_count):
        angle = (i / geometry.vertex_count) * 2 * math.pi
        noise_x = math.cos(angle) * NOISE_RADIUS
        noise_y = math.sin(angle) * NOISE_RADIUS
        noise_value = simplex_noise_2d(noise_x + offset, noise_y + offset, random)

        radius = geometry.base_radius_km * (1 + noise_value * geometry.irregularity)
        lat_offset = (math.cos(angle) * radius) / KM_PER_DEGREE_LAT
        lng_offset = (math.sin(angle) * radius) / km_per_degree_lng

        coordinates.append(Coordinate(lng + lng_offset, lat + lat_offset))

    logger.debug(
        "Generated zone",
        mode=profile.mode.value,
        seed=seed,
        vertices=len(coordinates),
    )
    return Polygon(tuple(coordinates))


def is_generated_mode(mode) -> bool:
    """True if the mode builds its own zone geometry."""
    profile = get_mode_profile(mode)
    return profile is not None and profile.geometry is not None

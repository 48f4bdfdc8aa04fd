"""
Core zone engine functionality.
"""

from .lcg_prng import LCGPRNG, make_random_stream, seed_from_coordinates
from .noise import simplex_noise_2d
from .polygon import (Coordinate, Polygon, centroid, polygon_area, scale_polygon,
                      to_boundary_format, ring_difference)
from .zone_generator import generate_zone
from .zone_morphing import ZoneColors, ZoneChange, morph_zone, scale_for_warming, zone_colors, summarize_zone_change
from .climate_anchors import (ClimateAnchor, ClimateAnchorSet, ClimateProjection, value_at_year,
                              project_climate, TEMPERATURE_ANCHORS, RAINFALL_INTENSITY_ANCHORS,
                              SEA_LEVEL_RISE_ANCHORS)
from .scenario import ZoneScenario, ZoneSnapshot, ZoneCache, ProjectionTimeline

__all__ = ['LCGPRNG', 'make_random_stream', 'seed_from_coordinates', 'simplex_noise_2d',
           'Coordinate', 'Polygon', 'centroid', 'polygon_area', 'scale_polygon',
           'to_boundary_format', 'ring_difference', 'generate_zone',
           'ZoneColors', 'ZoneChange', 'morph_zone', 'scale_for_warming', 'zone_colors',
           'summarize_zone_change', 'ClimateAnchor', 'ClimateAnchorSet', 'ClimateProjection',
           'value_at_year', 'project_climate', 'TEMPERATURE_ANCHORS',
           'RAINFALL_INTENSITY_ANCHORS', 'SEA_LEVEL_RISE_ANCHORS',
           'ZoneScenario', 'ZoneSnapshot', 'ZoneCache', 'ProjectionTimeline']

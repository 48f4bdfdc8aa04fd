"""
Polygon geometry in a locally flattened lon/lat frame.

This module implements:
- Vertex-mean centroid
- Shoelace area converted to km² (111 km per degree, cosine-scaled longitude)
- Uniform scaling about the centroid
- Boundary (GeoJSON-style) export and ring-difference overlays

The km conversion is a flat-Earth approximation for regional zones a few tens
of km across. It does not hold near the poles or across wide longitude spans.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import structlog

logger = structlog.get_logger()

KM_PER_DEGREE_LAT = 111.0


class Coordinate(NamedTuple):
    """A (longitude, latitude) pair in decimal degrees."""
    lng: float
    lat: float


@dataclass(frozen=True)
class Polygon:
    """
    Closed ring of coordinates.

    The closing edge back to the first vertex is implicit; the first vertex is
    never repeated at the end.

    A ring with no vertices is a legal sentinel for "no zone" (modes without
    geometry, unusable centers). It has area 0 and exports as an empty ring.
    Generated zones always have at least three vertices.
    """
    coordinates: Tuple[Coordinate, ...]

    def __post_init__(self):
        # Normalise any sequence of pairs into an immutable tuple of Coordinates
        object.__setattr__(
            self,
            "coordinates",
            tuple(Coordinate(float(lng), float(lat)) for lng, lat in self.coordinates),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> "Polygon":
        """Build from ``[lng, lat]`` pairs, dropping an explicit closing vertex."""
        coords = [tuple(p) for p in pairs]
        if len(coords) > 1 and coords[0] == coords[-1]:
            coords = coords[:-1]
        return cls(tuple(coords))

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(self.coordinates)

    def as_array(self) -> np.ndarray:
        """Vertices as an (n, 2) float array of [lng, lat]."""
        if not self.coordinates:
            return np.zeros((0, 2), dtype=np.float64)
        return np.asarray(self.coordinates, dtype=np.float64)

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.as_array())))


def centroid(polygon: Polygon) -> Coordinate:
    """
    Arithmetic mean of the vertices (not area weighted).

    This point is the pivot for every scale and morph.
    """
    coords = polygon.as_array()
    if len(coords) == 0:
        return Coordinate(0.0, 0.0)
    mean = coords.mean(axis=0)
    return Coordinate(float(mean[0]), float(mean[1]))


def polygon_area(polygon: Polygon) -> float:
    """
    Planar area in km².

    Winding order does not matter. Polygons with fewer than three vertices or
    with non-finite coordinates have area 0.0.
    """
    coords = polygon.as_array()
    n = len(coords)
    if n < 3:
        return 0.0
    if not np.all(np.isfinite(coords)):
        logger.warning("Non-finite polygon coordinates, area set to zero", vertices=n)
        return 0.0

    lng = coords[:, 0]
    lat = coords[:, 1]
    lng_next = np.roll(lng, -1)
    lat_next = np.roll(lat, -1)
    square_degrees = abs(float(np.sum(lng * lat_next - lng_next * lat))) / 2

    km_per_degree_lng = KM_PER_DEGREE_LAT * math.cos(math.radians(float(lat.mean())))
    return square_degrees * KM_PER_DEGREE_LAT * km_per_degree_lng


def scale_polygon(polygon: Polygon, factor: float) -> Polygon:
    """
    Scale every vertex's offset from the centroid by ``factor``.

    A factor of 0 collapses the ring onto its centroid. Non-finite factors or
    coordinates return the polygon unchanged.
    """
    if not math.isfinite(factor) or not polygon.is_finite():
        logger.warning("Cannot scale polygon with non-finite input", factor=factor)
        return polygon
    if len(polygon) == 0 or factor == 1:
        return polygon

    coords = polygon.as_array()
    pivot = coords.mean(axis=0)
    scaled = pivot + (coords - pivot) * factor
    return Polygon(tuple(Coordinate(float(lng), float(lat)) for lng, lat in scaled))


def _closed_ring(polygon: Polygon) -> List[List[float]]:
    ring = [[c.lng, c.lat] for c in polygon.coordinates]
    if ring:
        ring.append(list(ring[0]))
    return ring


def to_boundary_format(polygon: Polygon) -> Dict[str, Any]:
    """
    Export as a GeoJSON Polygon feature with an explicitly closed ring.

    Args:
        polygon: Ring to export

    Returns:
        Feature dict whose geometry holds a single ring of [lng, lat] pairs
    """
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "Polygon",
            "coordinates": [_closed_ring(polygon)],
        },
    }


def ring_difference(outer: Polygon, inner: Polygon) -> Optional[Dict[str, Any]]:
    """
    Area inside ``outer`` but outside ``inner``, as a polygon with a hole.

    Used for the loss/gain overlay. The inner ring is closed and then reversed
    so renderers treat it as a hole.

    Returns:
        Feature dict with two rings, or None when ``inner`` is at least as
        large as ``outer``
    """
    if polygon_area(inner) >= polygon_area(outer):
        return None

    inner_ring = _closed_ring(inner)
    inner_ring.reverse()
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "Polygon",
            "coordinates": [_closed_ring(outer), inner_ring],
        },
    }

"""End-to-end tests for the scenario facade, cache and timeline."""

import pytest
from py_climzone.config.settings import Settings
from py_climzone.core.polygon import Coordinate, Polygon, polygon_area
from py_climzone.core.scenario import ProjectionTimeline, ZoneCache, ZoneScenario
from py_climzone.core.zone_generator import generate_zone

CENTER = Coordinate(lng=37.9062, lat=-0.0236)


class TestCoastalScenario:
    """Coastal zone around a fixed center, baseline generated once."""

    @pytest.fixture
    def scenario(self):
        return ZoneScenario(CENTER, "coastal")

    def test_baseline_matches_generator(self, scenario):
        assert scenario.baseline == generate_zone(CENTER, "coastal")
        assert scenario.baseline_area_km2 > 0

    def test_no_warming_keeps_area(self, scenario):
        snapshot = scenario.at_warming_level(0)
        assert snapshot.current_area_km2 == pytest.approx(scenario.baseline_area_km2, rel=1e-6)
        assert snapshot.change_ring is None

    def test_max_warming_shrinks_to_floor(self, scenario):
        snapshot = scenario.at_warming_level(3)
        assert snapshot.scale == pytest.approx(0.60)
        assert snapshot.current_area_km2 == pytest.approx(0.60 ** 2 * scenario.baseline_area_km2, rel=1e-9)
        assert snapshot.change.is_adverse
        assert snapshot.change.label == "At Risk"

    def test_loss_ring(self, scenario):
        snapshot = scenario.at_warming_level(2)
        outer, inner = snapshot.change_ring["geometry"]["coordinates"]
        assert outer == snapshot.baseline_boundary["geometry"]["coordinates"][0]
        assert len(inner) == len(snapshot.current) + 1

    def test_boundary_is_current_zone(self, scenario):
        snapshot = scenario.at_warming_level(1)
        ring = snapshot.boundary["geometry"]["coordinates"][0]
        assert ring[0] == [snapshot.current.coordinates[0].lng, snapshot.current.coordinates[0].lat]

    def test_at_year_uses_projected_warming(self, scenario):
        snapshot = scenario.at_year(2050)
        assert snapshot.warming_level == 2.1
        assert snapshot.projection.sea_level_rise_m == 0.19
        assert snapshot.scale == pytest.approx(1 - (2.1 / 3) * 0.4)


class TestOtherModes:
    """Test expand and passthrough modes through the facade."""

    def test_flood_gain_ring(self):
        scenario = ZoneScenario(CENTER, "flood")
        snapshot = scenario.at_warming_level(3)
        assert snapshot.current_area_km2 == pytest.approx(2.25 * scenario.baseline_area_km2, rel=1e-9)
        assert snapshot.change_ring is not None
        outer, _ = snapshot.change_ring["geometry"]["coordinates"]
        assert outer == snapshot.boundary["geometry"]["coordinates"][0]

    def test_portfolio_with_external_boundary(self):
        boundary = Polygon(((37.0, -1.0), (37.2, -1.0), (37.1, -0.8)))
        scenario = ZoneScenario(CENTER, "portfolio", external_boundary=boundary)
        snapshot = scenario.at_warming_level(2.5)
        assert snapshot.current is boundary
        assert snapshot.change_ring is None
        assert snapshot.colors.outline_color == "#a855f7"

    def test_external_boundary_from_pairs(self):
        """Test a closed GeoJSON-style ring is accepted as the baseline."""
        ring = [[37.0, -1.0], [37.2, -1.0], [37.1, -0.8], [37.0, -1.0]]
        scenario = ZoneScenario(CENTER, "agriculture", external_boundary=ring)
        assert scenario.baseline == Polygon(((37.0, -1.0), (37.2, -1.0), (37.1, -0.8)))
        snapshot = scenario.at_warming_level(3)
        assert snapshot.scale == pytest.approx(0.55)
        assert snapshot.change.zone_label == "Viable Growing Area"

    def test_unknown_mode_degrades(self):
        snapshot = ZoneScenario(CENTER, "volcano").at_warming_level(1)
        assert len(snapshot.current) == 0
        assert snapshot.current_area_km2 == 0.0
        assert snapshot.mode == "volcano"


class TestZoneCache:
    """Test the caller-owned zone cache."""

    def test_hit_returns_same_object(self):
        cache = ZoneCache(max_entries=4)
        first = cache.get_or_generate(CENTER, "agriculture")
        second = cache.get_or_generate(CENTER, "agriculture")
        assert first is second
        assert cache.hits == 1
        assert cache.misses == 1

    def test_key_by_mode(self):
        cache = ZoneCache(max_entries=4)
        cache.get_or_generate(CENTER, "agriculture")
        cache.get_or_generate(CENTER, "flood")
        assert len(cache) == 2
        assert (CENTER.lat, CENTER.lng, "flood") in cache

    def test_lru_eviction(self):
        cache = ZoneCache(max_entries=2)
        a = Coordinate(10.0, 10.0)
        b = Coordinate(20.0, 20.0)
        c = Coordinate(30.0, 30.0)
        cache.get_or_generate(a, "coastal")
        cache.get_or_generate(b, "coastal")
        cache.get_or_generate(a, "coastal")  # a is now most recent
        cache.get_or_generate(c, "coastal")
        assert ZoneCache.make_key(b, "coastal") not in cache
        assert ZoneCache.make_key(a, "coastal") in cache

    def test_injected_eviction(self):
        cache = ZoneCache(max_entries=2, eviction=lambda keys: keys[-1])
        a = Coordinate(10.0, 10.0)
        b = Coordinate(20.0, 20.0)
        cache.get_or_generate(a, "coastal")
        cache.get_or_generate(b, "coastal")
        cache.get_or_generate(Coordinate(30.0, 30.0), "coastal")
        assert ZoneCache.make_key(a, "coastal") in cache
        assert ZoneCache.make_key(b, "coastal") not in cache

    def test_eviction_of_unknown_key_raises(self):
        cache = ZoneCache(max_entries=1, eviction=lambda keys: (0.0, 0.0, "flood"))
        cache.get_or_generate(Coordinate(10.0, 10.0), "coastal")
        with pytest.raises(KeyError):
            cache.get_or_generate(Coordinate(20.0, 20.0), "coastal")
        assert len(cache) == 1

    def test_scenario_uses_cache(self):
        cache = ZoneCache(max_entries=2)
        ZoneScenario(CENTER, "coastal", cache=cache)
        ZoneScenario(CENTER, "coastal", cache=cache)
        assert cache.hits == 1

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            ZoneCache(max_entries=0)

    def test_clear(self):
        cache = ZoneCache(max_entries=2)
        cache.get_or_generate(CENTER, "flood")
        cache.clear()
        assert len(cache) == 0


class TestProjectionTimeline:
    """Test the projection year range."""

    def test_defaults(self):
        timeline = ProjectionTimeline(config=Settings())
        years = timeline.years()
        assert years[0] == 2026
        assert years[-1] == 2050
        assert len(years) == 25

    def test_wraps(self):
        timeline = ProjectionTimeline(2026, 2050)
        assert timeline.next_year(2030) == 2031
        assert timeline.next_year(2050) == 2026

    def test_projections(self):
        projections = ProjectionTimeline(2030, 2032).projections()
        assert [p.year for p in projections] == [2030, 2031, 2032]
        assert projections[0].temperature_c == 1.5

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            ProjectionTimeline(2050, 2026)

"""
Tests for map marker declustering.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest

from app.services.map_service import (
    HAZARD_ICON,
    STATUS_COLORS,
    compute_bounds,
    decluster_positions,
    get_map_markers,
)
from conftest import make_report


class TestDeclusterPositions:

    def test_nine_colocated_reports(self):
        reports = [make_report(f"r{i}", lat=12.000, lng=77.000) for i in range(9)]
        positions = decluster_positions(reports)

        for i in range(8):
            angle = math.radians(i * 45)
            pos = positions[f"r{i}"]
            assert pos.lat == pytest.approx(12.0 + math.cos(angle) * 0.00015)
            assert pos.lng == pytest.approx(77.0 + math.sin(angle) * 0.00015)

        ninth = positions["r8"]
        assert ninth.lat == pytest.approx(12.0003)
        assert ninth.lng == pytest.approx(77.0)

        coords = {(round(p.lat, 9), round(p.lng, 9)) for p in positions.values()}
        assert len(coords) == 9

    def test_single_report_is_offset_by_first_ring_slot(self):
        positions = decluster_positions([make_report("solo", lat=10.0, lng=20.0)])
        assert positions["solo"].lat == pytest.approx(10.00015)
        assert positions["solo"].lng == pytest.approx(20.0)

    def test_near_identical_coordinates_share_a_group(self):
        a = make_report("a", lat=12.000001, lng=77.000001)
        b = make_report("b", lat=12.000002, lng=77.000002)
        positions = decluster_positions([a, b])
        # b takes the second slot (45°) of the shared ring
        assert positions["b"].lng - b.location.lng == pytest.approx(math.sin(math.pi / 4) * 0.00015)

    def test_distinct_locations_do_not_interact(self):
        a = make_report("a", lat=12.0, lng=77.0)
        b = make_report("b", lat=13.0, lng=78.0)
        positions = decluster_positions([a, b])
        assert positions["b"].lat == pytest.approx(13.00015)
        assert positions["b"].lng == pytest.approx(78.0)

    def test_input_order_decides_slots(self):
        a = make_report("a")
        b = make_report("b")
        forward = decluster_positions([a, b])
        backward = decluster_positions([b, a])
        assert forward["a"] == backward["b"]
        assert forward == decluster_positions([a, b])

    def test_empty_input(self):
        assert decluster_positions([]) == {}


class TestMapMarkers:

    def test_markers_are_ordered_by_reported_at_then_id(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        late = make_report("late", reported_at=base + timedelta(hours=1))
        early = make_report("early", reported_at=base)
        payload = get_map_markers([late, early])

        assert [m["id"] for m in payload["markers"]] == ["early", "late"]
        assert payload["markers"][0]["latitude"] == pytest.approx(12.00015)

    def test_marker_presentation(self):
        hazard = make_report("h", is_rainy_hazard=True, priority="critical", description="x" * 150)
        resolved = make_report("r", lat=1.0, lng=2.0, type="waste", status="resolved")
        markers = {m["id"]: m for m in get_map_markers([hazard, resolved])["markers"]}

        assert markers["h"]["icon"] == HAZARD_ICON
        assert markers["h"]["color"] == STATUS_COLORS["pending"]
        assert markers["h"]["snippet"] == "x" * 100 + "..."
        assert markers["r"]["color"] == STATUS_COLORS["resolved"]
        assert markers["r"]["icon"] != HAZARD_ICON
        assert markers["r"]["original_latitude"] == 1.0

    def test_bounds(self):
        reports = [make_report("a", lat=1.0, lng=5.0), make_report("b", lat=3.0, lng=2.0)]
        assert compute_bounds(reports) == {"south": 1.0, "west": 2.0, "north": 3.0, "east": 5.0}
        assert compute_bounds([]) is None

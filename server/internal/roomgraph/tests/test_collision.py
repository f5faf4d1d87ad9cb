"""
Tests for boxes, shell overlap and the spatial index.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from internal.roomgraph.collision import (
    Box,
    SpatialIndex,
    interval_overlap,
    overlap_amount,
    shells_overlap,
)


def test_box_extents():
    box = Box((0, 10, 0), (10, 4, 6))
    assert box.min(0) == -5
    assert box.max(0) == 5
    assert box.min(1) == 8
    assert box.max(1) == 12
    assert box.half(2) == 3


def test_expanded():
    box = Box((0, 0, 0), (10, 10, 10)).expanded(1)
    assert box.size == (12.0, 12.0, 12.0)
    assert box.center == (0.0, 0.0, 0.0)


def test_touching_shells_do_not_overlap():
    """Shells that meet exactly are neighbours, not a collision"""
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((12, 0, 0), (10, 10, 10))
    assert not shells_overlap(a, b, margin=1)


def test_shells_overlap_with_margin():
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((11.5, 0, 0), (10, 10, 10))
    assert shells_overlap(a, b, margin=1)
    # Without walls the interiors are apart
    assert not shells_overlap(a, b, margin=0)


def test_overlap_within_epsilon_ignored():
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((11.995, 0, 0), (10, 10, 10))
    assert not shells_overlap(a, b, margin=1)


def test_overlap_needs_all_axes():
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((5, 0, 50), (10, 10, 10))
    assert not shells_overlap(a, b, margin=1)


def test_overlap_amount_none_when_apart():
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((30, 0, 0), (10, 10, 10))
    assert overlap_amount(a, b, margin=1) is None


def test_overlap_amount_picks_cheaper_push():
    a = Box((0, 0, 0), (10, 10, 10))
    b = Box((8, 0, 0), (10, 10, 10))
    shift = overlap_amount(a, b, margin=0)
    # Moving a 2 units towards -x clears b; +x would need 18
    assert shift[0] == pytest.approx(-2)
    assert shift[1] == pytest.approx(-10)
    assert shift[2] == pytest.approx(-10)


def test_interval_overlap():
    a = Box((0, 0, 0), (10, 10, 10))
    assert interval_overlap(a, Box((8, 0, 0), (10, 10, 10)), 0) == pytest.approx(2)
    assert interval_overlap(a, Box((20, 0, 0), (10, 10, 10)), 0) == pytest.approx(-10)


def test_spatial_index_lookup():
    index = SpatialIndex()
    index.add(1, Box((0, 0, 0), (10, 10, 10)))
    index.add(2, Box((30, 0, 0), (10, 10, 10)))

    assert len(index) == 2
    assert index.get(2) == Box((30, 0, 0), (10, 10, 10))
    assert index.get(3) is None
    assert [room_id for room_id, _ in index] == [1, 2]


def test_spatial_index_overlaps_any():
    index = SpatialIndex()
    index.add(1, Box((0, 0, 0), (10, 10, 10)))
    index.add(2, Box((30, 0, 0), (10, 10, 10)))

    probe = Box((4, 0, 0), (10, 10, 10))
    assert index.overlaps_any(probe, margin=1) == 1
    assert index.overlaps_any(probe, margin=1, exclude_id=1) is None
    assert index.overlaps_any(Box((60, 0, 0), (10, 10, 10)), margin=1) is None


def test_first_overlap_in_insertion_order():
    index = SpatialIndex()
    index.add(1, Box((0, 0, 0), (10, 10, 10)))
    index.add(2, Box((8, 0, 0), (10, 10, 10)))

    hit = index.first_overlap(Box((4, 0, 0), (10, 10, 10)), margin=0)
    assert hit is not None
    room_id, shift = hit
    assert room_id == 1
    assert len(shift) == 3

    room_id, _ = index.first_overlap(Box((4, 0, 0), (10, 10, 10)), margin=0, exclude_id=1)
    assert room_id == 2

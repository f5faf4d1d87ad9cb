"""
Tests for end-to-end layout generation.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from pydantic import ValidationError
from internal.roomgraph import generation
from internal.roomgraph.directions import Axis
from internal.roomgraph.models import ConfigurationError, Layout, LayoutConfig, TrussType
from internal.roomgraph.validation import validate_layout

SEEDS = ["alpha", "beta", 7, 1234]


def _chain(**overrides):
    values = dict(
        seed=42,
        base_unit=5,
        main_path_length=3,
        spur_count=0,
        straightness=100,
        vertical_chance=0,
        allow_up=False,
        allow_down=False,
    )
    values.update(overrides)
    return values


def test_generate_layout_returns_layout():
    layout = generation.generate_layout({"seed": "BeverlyMansion"})
    assert isinstance(layout, Layout)
    assert layout.version == 1
    assert layout.seed_input == "BeverlyMansion"
    assert len(layout.rooms) >= 1
    assert layout.spawn is not None
    assert layout.spawn.room_id == 1


def test_generation_is_deterministic():
    """Same seed and settings give byte-identical output"""
    first = generation.generate_layout({"seed": "BeverlyMansion"})
    second = generation.generate_layout({"seed": "BeverlyMansion"})
    assert first.model_dump_json() == second.model_dump_json()


def test_different_seeds_differ():
    first = generation.generate_layout({"seed": "north"})
    second = generation.generate_layout({"seed": "south"})
    assert first.model_dump()["rooms"] != second.model_dump()["rooms"]


def test_seed_header():
    layout = generation.generate_layout({"seed": 42, "main_path_length": 2, "spur_count": 0})
    assert layout.seed == 42
    assert layout.seeds["rooms"] == 42
    assert layout.seeds["pads"] == 40042


def test_missing_seed_is_generated():
    layout = generation.generate_layout({"main_path_length": 2, "spur_count": 0})
    assert isinstance(layout.seed_input, str)
    assert len(layout.seed_input) == 12


@pytest.mark.parametrize("seed", SEEDS)
def test_default_layouts_are_valid(seed):
    config = LayoutConfig(seed=seed)
    layout = generation.generate_layout(config)
    assert validate_layout(layout, config) == []
    assert [d for d in layout.diagnostics if d.stage == "layout"] == []


@pytest.mark.parametrize("seed", SEEDS)
def test_every_child_has_a_door(seed):
    layout = generation.generate_layout({"seed": seed})
    for room in layout.rooms:
        if room.parent_id is None:
            continue
        door = layout.get_door_between(room.parent_id, room.id)
        assert door is not None
        assert (door.from_room, door.to_room) == (room.parent_id, room.id)


@pytest.mark.parametrize("seed", SEEDS)
def test_trusses_only_where_needed(seed):
    layout = generation.generate_layout({"seed": seed})
    threshold = LayoutConfig().floor_threshold
    doors = {door.id: door for door in layout.doors}
    for truss in layout.trusses:
        door = doors[truss.door_id]
        room = layout.get_room(truss.room_id)
        floor = room.position[1] - room.dims[1] / 2
        if truss.type == TrussType.CEILING:
            assert door.axis == Axis.Y
            other = layout.get_room(door.from_room if door.to_room == room.id else door.to_room)
            other_floor = other.position[1] - other.dims[1] / 2
            assert other_floor - floor > threshold
        else:
            assert door.axis != Axis.Y
            assert door.bottom - floor > threshold


@pytest.mark.parametrize("seed", SEEDS)
def test_one_light_per_room(seed):
    layout = generation.generate_layout({"seed": seed})
    assert len(layout.lights) == len(layout.rooms)
    for room in layout.rooms:
        assert layout.get_light_for_room(room.id) is not None


def test_pads_never_in_spawn_room():
    layout = generation.generate_layout({"seed": "pads", "pad_count": 4})
    assert len(layout.pads) <= 4
    for pad in layout.pads:
        assert pad.room_id != 1
        assert layout.get_pad(pad.id) is pad


def test_three_room_chain():
    layout = generation.generate_layout(_chain())

    assert [room.id for room in layout.rooms] == [1, 2, 3]
    assert len(layout.doors) == 2
    assert layout.get_door_between(1, 2) is not None
    assert layout.get_door_between(2, 3) is not None
    assert len(layout.lights) == 3
    assert [d for d in layout.diagnostics if d.stage in ("rooms", "doors", "layout")] == []


def test_default_chain_settings_stay_a_chain():
    config = LayoutConfig(seed=42, base_unit=5, main_path_length=3, spur_count=0)
    layout = generation.generate_layout(config)
    assert [room.id for room in layout.rooms] == [1, 2, 3]
    for room in layout.rooms[1:]:
        assert room.parent_id == room.id - 1
        assert layout.get_door_between(room.parent_id, room.id) is not None
    assert len(layout.doors) == 2
    assert validate_layout(layout, config) == []


@pytest.mark.parametrize("seed", SEEDS)
def test_no_vertical_offsets_without_vertical_movement(seed):
    layout = generation.generate_layout({"seed": seed, "allow_up": False, "allow_down": False})
    for room in layout.rooms:
        if room.parent_id is None:
            continue
        parent = layout.get_room(room.parent_id)
        assert not room.attach_face.is_vertical
        assert room.position[1] == parent.position[1]
    assert all(door.axis != Axis.Y for door in layout.doors)


def test_zero_wall_thickness_still_gets_doors():
    layout = generation.generate_layout({"seed": "flush", "wall_thickness": 0})
    assert len(layout.doors) == len(layout.rooms) - 1
    assert [d for d in layout.diagnostics if d.stage == "doors"] == []


@pytest.mark.parametrize("seed", SEEDS + [0])
def test_zero_wall_thickness_and_door_size_keeps_rooms_connected(seed):
    config = LayoutConfig(seed=seed, wall_thickness=0, min_door_size=0, door_size=0)
    layout = generation.generate_layout(config)
    assert validate_layout(layout, config) == []
    for room in layout.rooms[1:]:
        parent = layout.get_room(room.parent_id)
        door = layout.get_door_between(parent.id, room.id)
        assert door is not None
        for axis in (door.width_axis, door.height_axis):
            low = max(parent.position[axis] - parent.dims[axis] / 2, room.position[axis] - room.dims[axis] / 2)
            high = min(parent.position[axis] + parent.dims[axis] / 2, room.position[axis] + room.dims[axis] / 2)
            assert high > low
            assert low <= door.center[axis] <= high


def test_preset_applied_under_explicit_settings():
    layout = generation.generate_layout({"seed": 3, "preset": "Station", "base_unit": 20})
    assert layout.settings.base_unit == 20

    config = generation.resolve_config({"seed": 3, "preset": "Station"})
    assert config.base_unit == 18


def test_phases_switch_mid_run():
    layout = generation.generate_layout(
        {
            "seed": "phased",
            "phases": [
                {"rooms": 2, "vertical_chance": 0},
                {"preset": "Labyrinth"},
            ],
        }
    )
    # The active config after the switch is what the later stages saw
    assert layout.settings.base_unit == 12
    assert [d for d in layout.diagnostics if d.stage == "layout"] == []


@pytest.mark.parametrize(
    "values",
    [
        {"straightness": 101},
        {"goal_bias": -1},
        {"size_range": (3.0, 1.0)},
        {"height_scale": (0.0, 1.0)},
        {"base_unit": 0},
        {"door_size": 2},
        {"min_y": 10, "max_y": 0},
        {"spur_count": {"min": 5, "max": 2}},
        {"bounds": {"min": (10, 0, 0), "max": (0, 10, 10)}},
        {"phases": [{"paths": 0}]},
        {"phases": [{"rooms": 2, "bogus": 1}]},
        {"unknown_setting": 1},
    ],
)
def test_invalid_config_fails_fast(values):
    with pytest.raises(ValidationError):
        generation.generate_layout(values)


def test_unknown_preset_fails_fast():
    with pytest.raises(ConfigurationError):
        generation.generate_layout({"preset": "Skyscraper"})


def test_unknown_phase_preset_fails_fast():
    with pytest.raises(ConfigurationError):
        generation.generate_layout({"phases": [{"preset": "Skyscraper", "rooms": 3}]})


def test_layout_round_trips_through_json():
    layout = generation.generate_layout(_chain())
    restored = Layout.model_validate_json(layout.model_dump_json())
    assert restored == layout

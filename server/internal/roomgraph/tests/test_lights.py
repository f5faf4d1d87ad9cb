"""
Tests for light planning.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from internal.roomgraph.directions import Direction
from internal.roomgraph.doors import plan_doors
from internal.roomgraph.lights import choose_wall, door_faces, plan_lights

PARENT = ((0, 0, 0), (20, 10, 20), None)


def test_lone_room_lit_on_north_wall(make_context):
    ctx = make_context([((0, 0, 0), (20, 10, 16), None)])
    lights = plan_lights(ctx)

    assert len(lights) == 1
    light = lights[0]
    assert light.wall == Direction.N
    assert light.room_id == 1
    # Two below the ceiling, just inside the north wall
    assert light.position == pytest.approx((0, 3, 7.9))
    assert light.size == pytest.approx((10, 1, 0.3))


def test_light_avoids_door_wall(make_context):
    ctx = make_context([PARENT, ((0, 0, 17), (10, 10, 10), 1)])
    plan_doors(ctx)

    assert door_faces(ctx, ctx.rooms[1]) == {Direction.N}
    assert door_faces(ctx, ctx.rooms[2]) == {Direction.S}

    lights = plan_lights(ctx)
    assert [light.wall for light in lights] == [Direction.S, Direction.N]
    assert lights[0].position == pytest.approx((0, 3, -9.9))


def test_east_west_strip_orientation(make_context):
    ctx = make_context(
        [
            PARENT,
            ((0, 0, 17), (10, 10, 10), 1),
            ((0, 0, -17), (10, 10, 10), 1),
        ]
    )
    plan_doors(ctx)
    light = plan_lights(ctx)[0]
    assert light.wall == Direction.E
    assert light.position == pytest.approx((9.9, 3, 0))
    assert light.size == pytest.approx((0.3, 1, 10))


def test_all_walls_taken_falls_back_to_north(make_context):
    ctx = make_context(
        [
            PARENT,
            ((17, 0, 0), (10, 10, 10), 1),
            ((-17, 0, 0), (10, 10, 10), 1),
            ((0, 0, 17), (10, 10, 10), 1),
            ((0, 0, -17), (10, 10, 10), 1),
        ]
    )
    plan_doors(ctx)
    assert choose_wall(ctx, ctx.rooms[1]) == Direction.N


def test_vertical_doors_do_not_take_walls(make_context):
    ctx = make_context([PARENT, ((0, 12, 0), (10, 10, 10), 1)])
    plan_doors(ctx)
    assert door_faces(ctx, ctx.rooms[1]) == set()


def test_strip_width_clamped(make_context):
    ctx = make_context(
        [
            ((0, 0, 0), (40, 10, 40), None),
            ((0, 0, 100), (5, 10, 5), None),
        ]
    )
    lights = plan_lights(ctx)
    assert lights[0].size[0] == pytest.approx(12)
    assert lights[1].size[0] == pytest.approx(4)


def test_one_light_per_room(make_context):
    ctx = make_context(
        [
            PARENT,
            ((17, 0, 0), (10, 10, 10), 1),
            ((34, 0, 0), (20, 10, 10), 2),
        ]
    )
    plan_doors(ctx)
    plan_lights(ctx)
    for room_id in ctx.rooms:
        assert len(ctx.get_lights_for_room(room_id)) == 1
    assert [light.id for light in ctx.lights] == [1, 2, 3]

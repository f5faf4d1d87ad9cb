"""
Light planning: one strip light per room, high on a wall without a door.
"""

import logging
from typing import List, Set

from .context import LayoutContext
from .directions import Axis, Direction, WALL_FACES, face_for
from .models import Light, Room

logger = logging.getLogger(__name__)

MIN_STRIP = 4.0
MAX_STRIP = 12.0
STRIP_RATIO = 0.5
# Distance below the ceiling
CEILING_DROP = 2.0
# Distance in from the wall surface
WALL_INSET = 0.1
STRIP_HEIGHT = 1.0
STRIP_DEPTH = 0.3


def door_faces(ctx: LayoutContext, room: Room) -> Set[Direction]:
    """Wall faces of a room that carry a door."""
    faces = set()
    for door in ctx.get_doors_for_room(room.id):
        if door.axis == Axis.Y:
            continue
        sign = 1 if door.center[door.axis] > room.position[door.axis] else -1
        faces.add(face_for(door.axis, sign))
    return faces


def choose_wall(ctx: LayoutContext, room: Room) -> Direction:
    """First wall in N, S, E, W order without a door; N when every wall has one."""
    taken = door_faces(ctx, room)
    for face in WALL_FACES:
        if face not in taken:
            return face
    return Direction.N


def plan_light(light_id: int, room: Room, wall: Direction) -> Light:
    x, y, z = room.position
    width, height, depth = room.dims

    wall_width = width if wall in (Direction.N, Direction.S) else depth
    strip = min(MAX_STRIP, max(MIN_STRIP, wall_width * STRIP_RATIO))
    light_y = y + height / 2.0 - CEILING_DROP

    if wall == Direction.N:
        position = (x, light_y, z + depth / 2.0 - WALL_INSET)
    elif wall == Direction.S:
        position = (x, light_y, z - depth / 2.0 + WALL_INSET)
    elif wall == Direction.E:
        position = (x + width / 2.0 - WALL_INSET, light_y, z)
    else:
        position = (x - width / 2.0 + WALL_INSET, light_y, z)

    if wall in (Direction.N, Direction.S):
        size = (strip, STRIP_HEIGHT, STRIP_DEPTH)
    else:
        size = (STRIP_DEPTH, STRIP_HEIGHT, strip)

    return Light(id=light_id, room_id=room.id, position=position, size=size, wall=wall)


def plan_lights(ctx: LayoutContext) -> List[Light]:
    """Place exactly one light in every room, in room id order."""
    for room_id in sorted(ctx.rooms):
        room = ctx.rooms[room_id]
        wall = choose_wall(ctx, room)
        ctx.lights.append(plan_light(len(ctx.lights) + 1, room, wall))

    logger.info("Placed %d lights", len(ctx.lights))
    return ctx.lights

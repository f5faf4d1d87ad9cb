"""
Truss planning: climbable columns wherever a doorway sits well above a floor.

A vertical door (ceiling/floor opening) gets one ceiling truss standing in
the lower room when the floors differ by more than `floor_threshold`. A
wall door gets a wall truss on each side whose floor is more than
`floor_threshold` below the door's sill.
"""

import logging
from typing import List

from .context import LayoutContext
from .directions import Axis
from .models import Door, Room, Truss, TrussType

logger = logging.getLogger(__name__)

TRUSS_THICKNESS = 2.0
# Ceiling trusses stand this far in from the door edge
CEILING_EDGE_INSET = 1.0
# Wall trusses stand this far out from the wall face
WALL_STANDOFF = 1.0


def _ceiling_truss(ctx: LayoutContext, door: Door, lower: Room, upper: Room) -> Truss:
    gap = upper.floor_y() - lower.floor_y()
    return Truss(
        id=len(ctx.trusses) + 1,
        door_id=door.id,
        room_id=lower.id,
        position=(
            door.center[0] - door.width / 2.0 + CEILING_EDGE_INSET,
            lower.floor_y() + gap / 2.0,
            door.center[2],
        ),
        size=(TRUSS_THICKNESS, gap, TRUSS_THICKNESS),
        type=TrussType.CEILING,
    )


def _wall_truss(ctx: LayoutContext, door: Door, room: Room, distance: float) -> Truss:
    axis = door.axis
    into_room = 1.0 if room.position[axis] > door.center[axis] else -1.0

    position = [0.0, 0.0, 0.0]
    position[door.width_axis] = door.center[door.width_axis]
    position[Axis.Y] = room.floor_y() + distance / 2.0
    position[axis] = door.center[axis] + into_room * (ctx.config.wall_thickness / 2.0 + WALL_STANDOFF)

    return Truss(
        id=len(ctx.trusses) + 1,
        door_id=door.id,
        room_id=room.id,
        position=(position[0], position[1], position[2]),
        size=(TRUSS_THICKNESS, distance, TRUSS_THICKNESS),
        type=TrussType.WALL,
    )


def plan_trusses(ctx: LayoutContext) -> List[Truss]:
    """
    Add the trusses needed to reach every door.

    Args:
        ctx: Layout context with rooms and doors placed

    Returns:
        Trusses added to the context
    """
    threshold = ctx.config.floor_threshold

    for door in ctx.doors:
        room_a = ctx.rooms[door.from_room]
        room_b = ctx.rooms[door.to_room]

        if door.axis == Axis.Y:
            lower, upper = (room_a, room_b) if room_a.position[1] < room_b.position[1] else (room_b, room_a)
            if upper.floor_y() - lower.floor_y() > threshold:
                ctx.trusses.append(_ceiling_truss(ctx, door, lower, upper))
            continue

        for room in (room_a, room_b):
            distance = door.bottom - room.floor_y()
            if distance > threshold:
                ctx.trusses.append(_wall_truss(ctx, door, room, distance))

    logger.info("Placed %d trusses", len(ctx.trusses))
    return ctx.trusses

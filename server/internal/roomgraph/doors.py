"""
Door planning: one opening per parent/child pair where their shells meet.
"""

import logging
from typing import List, Optional, Tuple

from .collision import Box
from .context import LayoutContext
from .directions import Axis
from .models import Door, LayoutConfig

logger = logging.getLogger(__name__)

# Shell faces closer than this count as touching
TOUCH_TOLERANCE = 0.1
# Kept clear between a door and the edge of the shared wall
EDGE_MARGIN = 2.0
# Wall doors start this far above the higher of the two floors
SILL_MARGIN = 1.0

# Touching axis -> (width axis, height axis)
OPENING_AXES = {
    Axis.X: (Axis.Z, Axis.Y),
    Axis.Y: (Axis.X, Axis.Z),
    Axis.Z: (Axis.X, Axis.Y),
}


def find_touching_axis(parent: Box, child: Box, wall_thickness: float) -> Optional[Tuple[Axis, int]]:
    """
    Find the axis on which two rooms' shells touch face to face.

    Returns:
        (axis, sign) where sign is +1 if the child lies on the parent's
        positive side, or None if the shells do not touch
    """
    for axis in Axis:
        if abs((parent.max(axis) + wall_thickness) - (child.min(axis) - wall_thickness)) < TOUCH_TOLERANCE:
            return axis, 1
        if abs((parent.min(axis) - wall_thickness) - (child.max(axis) + wall_thickness)) < TOUCH_TOLERANCE:
            return axis, -1
    return None


def opening_size(overlap: float, config: LayoutConfig) -> float:
    """Door size along one axis of a shared wall whose interior overlap is `overlap`."""
    size = min(config.door_size, overlap - 2 * EDGE_MARGIN)
    if size < config.min_door_size:
        size = min(config.min_door_size, overlap)
    return max(0.0, size)


def plan_door(door_id: int, parent_id: int, parent: Box, child_id: int, child: Box, config: LayoutConfig) -> Optional[Door]:
    """Build the door between a parent and child room, or None if they share no wall."""
    touching = find_touching_axis(parent, child, config.wall_thickness)
    if touching is None:
        return None
    axis, sign = touching
    width_axis, height_axis = OPENING_AXES[axis]

    center = [0.0, 0.0, 0.0]
    center[axis] = parent.center[axis] + sign * (parent.half(axis) + config.wall_thickness)

    sizes = {}
    for opening_axis in (width_axis, height_axis):
        low = max(parent.min(opening_axis), child.min(opening_axis))
        high = min(parent.max(opening_axis), child.max(opening_axis))
        if high - low <= 0:
            return None
        sizes[opening_axis] = (low, high, opening_size(high - low, config))

    low, high, width = sizes[width_axis]
    center[width_axis] = (low + high) / 2.0

    low, high, height = sizes[height_axis]
    bottom = None
    if height_axis == Axis.Y:
        bottom = low + min(SILL_MARGIN, max(0.0, (high - low) - height))
        center[height_axis] = bottom + height / 2.0
    else:
        center[height_axis] = (low + high) / 2.0

    return Door(
        id=door_id,
        from_room=parent_id,
        to_room=child_id,
        center=(center[0], center[1], center[2]),
        width=width,
        height=height,
        axis=axis,
        width_axis=width_axis,
        height_axis=height_axis,
        bottom=bottom,
    )


def plan_doors(ctx: LayoutContext) -> List[Door]:
    """
    Place one door for every room that has a parent, in room id order.

    Args:
        ctx: Layout context with rooms placed

    Returns:
        Doors added to the context
    """
    config = ctx.config
    for room_id in sorted(ctx.rooms):
        room = ctx.rooms[room_id]
        if room.parent_id is None:
            continue

        parent_box = ctx.get_room_box(room.parent_id)
        child_box = ctx.get_room_box(room_id)
        door = plan_door(len(ctx.doors) + 1, room.parent_id, parent_box, room_id, child_box, config)
        if door is None:
            ctx.report(
                "doors",
                f"Rooms {room.parent_id} and {room_id} do not share a wall, no door placed",
                room_id=room_id,
            )
            continue

        if min(door.width, door.height) < config.min_door_size:
            ctx.report(
                "doors",
                f"Door {door.id} between rooms {room.parent_id} and {room_id} is only "
                f"{door.width:.1f} x {door.height:.1f}",
                room_id=room_id,
                door_id=door.id,
            )

        ctx.doors.append(door)
        logger.debug(
            "Door %d: rooms %d-%d axis %s, %.1f x %.1f",
            door.id,
            door.from_room,
            door.to_room,
            door.axis.name,
            door.width,
            door.height,
        )

    logger.info("Placed %d doors", len(ctx.doors))
    return ctx.doors

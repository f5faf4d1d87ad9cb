"""
Pad planning: sparse interaction points on safe floor spots, plus the spawn.

Each obstacle near a candidate spot (door openings, trusses, the room's
light, pads already placed) is turned into an exclusion zone: a shapely box
in the XZ plane plus a Y span. A candidate is safe when it lies strictly
inside none of them.
"""

import logging
import math
from typing import List, NamedTuple, Optional, Sequence

import shapely.geometry as sg

from .context import LayoutContext
from .directions import Axis
from .models import Door, Light, Pad, Room, Spawn, Truss, TrussType, Vec3

logger = logging.getLogger(__name__)

# Clearance kept around every obstacle
CHECK_RADIUS = 4.0
# Extra XZ clearance around ceiling trusses
CEILING_TRUSS_RING = 2.0
# Half extent of a placed pad's footprint
PAD_HALF_EXTENT = 3.0
# Candidates sit this far above the floor; pads a further PAD_LIFT above that
CANDIDATE_LIFT = 0.5
PAD_LIFT = 0.1
SPAWN_LIFT = 3.0

# Candidate offsets as fractions of (width, depth), tried in order
CANDIDATE_OFFSETS = [
    (0.0, 0.0),
    (-1 / 4, -1 / 4),
    (1 / 4, -1 / 4),
    (-1 / 4, 1 / 4),
    (1 / 4, 1 / 4),
    (-1 / 3, 0.0),
    (1 / 3, 0.0),
    (0.0, -1 / 3),
    (0.0, 1 / 3),
    (-1 / 6, -1 / 6),
    (1 / 6, -1 / 6),
    (-1 / 6, 1 / 6),
    (1 / 6, 1 / 6),
]


class Exclusion(NamedTuple):
    """An XZ footprint with the height range it applies to."""

    footprint: sg.Polygon
    y_min: float = -math.inf
    y_max: float = math.inf

    def contains(self, position: Sequence[float]) -> bool:
        if not (self.y_min < position[1] < self.y_max):
            return False
        return self.footprint.contains(sg.Point(position[0], position[2]))


def _xz_box(x: float, z: float, half_x: float, half_z: float) -> sg.Polygon:
    return sg.box(x - half_x, z - half_z, x + half_x, z + half_z)


def door_exclusion(door: Door, radius: float = CHECK_RADIUS) -> Exclusion:
    """Zone around a door opening. Ceiling/floor openings block every height."""
    x, y, z = door.center
    half_width = door.width / 2.0 + radius
    half_height = door.height / 2.0 + radius

    if door.axis == Axis.Y:
        # Width runs along X, height along Z
        return Exclusion(_xz_box(x, z, half_width, half_height))
    if door.axis == Axis.X:
        return Exclusion(_xz_box(x, z, radius, half_width), y - half_height, y + half_height)
    return Exclusion(_xz_box(x, z, half_width, radius), y - half_height, y + half_height)


def truss_exclusions(truss: Truss, radius: float = CHECK_RADIUS) -> List[Exclusion]:
    x, y, z = truss.position
    sx, sy, sz = truss.size
    zones = [Exclusion(_xz_box(x, z, sx / 2.0 + radius, sz / 2.0 + radius), y - sy / 2.0 - radius, y + sy / 2.0 + radius)]
    if truss.type == TrussType.CEILING:
        ring = radius + CEILING_TRUSS_RING
        zones.append(Exclusion(_xz_box(x, z, sx / 2.0 + ring, sz / 2.0 + ring)))
    return zones


def light_exclusion(light: Light, radius: float = CHECK_RADIUS) -> Exclusion:
    x, y, z = light.position
    sx, sy, sz = light.size
    return Exclusion(_xz_box(x, z, sx / 2.0 + radius, sz / 2.0 + radius), y - sy / 2.0 - radius, y + sy / 2.0 + radius)


def pad_exclusion(pad: Pad, radius: float = CHECK_RADIUS) -> Exclusion:
    x, _, z = pad.position
    extent = PAD_HALF_EXTENT + radius
    return Exclusion(_xz_box(x, z, extent, extent))


def room_exclusions(ctx: LayoutContext, room_id: int) -> List[Exclusion]:
    """Every exclusion zone that applies to pads in one room."""
    zones = [door_exclusion(door) for door in ctx.get_doors_for_room(room_id)]
    for truss in ctx.get_trusses_for_room(room_id):
        zones.extend(truss_exclusions(truss))
    zones.extend(light_exclusion(light) for light in ctx.get_lights_for_room(room_id))
    zones.extend(pad_exclusion(pad) for pad in ctx.pads)
    return zones


def floor_candidates(room: Room) -> List[Vec3]:
    """Candidate pad spots just above the room floor, most central first."""
    x, _, z = room.position
    width, _, depth = room.dims
    y = room.floor_y() + CANDIDATE_LIFT
    return [(x + fx * width, y, z + fz * depth) for fx, fz in CANDIDATE_OFFSETS]


def find_safe_floor_position(ctx: LayoutContext, room_id: int) -> Optional[Vec3]:
    """
    Find the first floor spot in a room clear of every exclusion zone.

    Args:
        ctx: Layout context with rooms, doors, trusses and lights placed
        room_id: Room to search

    Returns:
        Candidate position (CANDIDATE_LIFT above the floor) or None
    """
    room = ctx.get_room(room_id)
    if room is None:
        return None

    zones = room_exclusions(ctx, room_id)
    for candidate in floor_candidates(room):
        if not any(zone.contains(candidate) for zone in zones):
            return candidate
    return None


def pad_target_count(ctx: LayoutContext) -> int:
    config = ctx.config
    if config.pad_count is not None:
        return config.pad_count
    return 1 + ctx.room_count // config.rooms_per_pad


def plan_pads(ctx: LayoutContext) -> List[Pad]:
    """
    Spread pads across the rooms, skipping room 1 (the spawn room).

    Rooms are visited at a fixed stride. If a room has no safe spot the next
    room is tried once before the slot is given up.

    Args:
        ctx: Layout context with every other artifact placed

    Returns:
        Pads added to the context
    """
    room_count = ctx.room_count
    pad_count = pad_target_count(ctx)
    if pad_count <= 0:
        logger.info("Placed 0 pads")
        return ctx.pads

    step = max(1, (room_count - 1) // pad_count)
    room_id = 2

    for _ in range(pad_count):
        if room_id > room_count:
            break

        position = find_safe_floor_position(ctx, room_id)
        if position is None and room_id + 1 <= room_count:
            ctx.report("pads", f"No safe pad position in room {room_id}, trying room {room_id + 1}", room_id=room_id)
            room_id += 1
            position = find_safe_floor_position(ctx, room_id)

        if position is None:
            ctx.report("pads", f"No safe pad position in room {room_id}, pad skipped", room_id=room_id)
        else:
            pad = Pad(
                id=f"pad_{len(ctx.pads) + 1}",
                room_id=room_id,
                position=(position[0], position[1] + PAD_LIFT, position[2]),
            )
            ctx.pads.append(pad)
            logger.debug("Pad %s in room %d at (%.1f, %.1f, %.1f)", pad.id, room_id, *pad.position)

        room_id += step

    logger.info("Placed %d of %d pads", len(ctx.pads), pad_count)
    return ctx.pads


def plan_spawn(ctx: LayoutContext) -> Optional[Spawn]:
    """Spawn point at the center of room 1, a little above its floor."""
    room = ctx.get_room(1)
    if room is None:
        return None
    x, _, z = room.position
    ctx.spawn = Spawn(room_id=room.id, position=(x, room.floor_y() + SPAWN_LIFT, z))
    return ctx.spawn

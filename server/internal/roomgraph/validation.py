"""
Layout invariant checks.

Used at the end of every generation run (problems become diagnostics) and
by the tests.
"""

from typing import List

from .collision import Box, shells_overlap
from .doors import OPENING_AXES
from .models import Layout, LayoutConfig
from .pads import CANDIDATE_LIFT, door_exclusion, light_exclusion, pad_exclusion, truss_exclusions

# Float slack for size comparisons
TOLERANCE = 1e-6


def check_room_overlaps(layout: Layout, config: LayoutConfig) -> List[str]:
    """Rooms that are not directly connected must keep their shells apart."""
    problems = []
    boxes = [(room, Box(room.position, room.dims)) for room in layout.rooms]
    for i, (room_a, box_a) in enumerate(boxes):
        for room_b, box_b in boxes[i + 1:]:
            if room_b.id in room_a.connections:
                continue
            if shells_overlap(box_a, box_b, config.wall_thickness):
                problems.append(f"Rooms {room_a.id} and {room_b.id} overlap")
    return problems


def check_doors(layout: Layout, config: LayoutConfig) -> List[str]:
    """Doors must fit the shared wall and meet the minimum size when it allows."""
    problems = []
    for door in layout.doors:
        room_a = layout.get_room(door.from_room)
        room_b = layout.get_room(door.to_room)
        if room_a is None or room_b is None:
            problems.append(f"Door {door.id} references a missing room")
            continue

        box_a = Box(room_a.position, room_a.dims)
        box_b = Box(room_b.position, room_b.dims)
        if (door.width_axis, door.height_axis) != OPENING_AXES[door.axis]:
            problems.append(f"Door {door.id} has inconsistent axes")

        for size, axis, label in ((door.width, door.width_axis, "width"), (door.height, door.height_axis, "height")):
            low = max(box_a.min(axis), box_b.min(axis))
            high = min(box_a.max(axis), box_b.max(axis))
            overlap = high - low
            if size < 0:
                problems.append(f"Door {door.id} has negative {label}")
            if size > max(0.0, overlap) + TOLERANCE:
                problems.append(f"Door {door.id} {label} {size:.2f} exceeds shared wall {overlap:.2f}")
            if overlap >= config.min_door_size and size < config.min_door_size - TOLERANCE:
                problems.append(f"Door {door.id} {label} {size:.2f} is below the minimum door size")
            center = door.center[axis]
            if center - size / 2.0 < low - TOLERANCE or center + size / 2.0 > high + TOLERANCE:
                problems.append(f"Door {door.id} {label} extends past the shared wall")
    return problems


def check_lights(layout: Layout) -> List[str]:
    problems = []
    for room in layout.rooms:
        count = sum(1 for light in layout.lights if light.room_id == room.id)
        if count != 1:
            problems.append(f"Room {room.id} has {count} lights")
    return problems


def check_pads(layout: Layout) -> List[str]:
    """No pad may sit inside another obstacle's exclusion zone."""
    problems = []
    for pad in layout.pads:
        room = layout.get_room(pad.room_id)
        if room is None:
            problems.append(f"Pad {pad.id} references a missing room")
            continue

        doors = layout.get_doors_for_room(pad.room_id)
        door_ids = {door.id for door in doors}

        zones = [door_exclusion(door) for door in doors]
        for truss in layout.trusses:
            if truss.door_id in door_ids:
                zones.extend(truss_exclusions(truss))
        zones.extend(light_exclusion(light) for light in layout.lights if light.room_id == pad.room_id)
        zones.extend(pad_exclusion(other) for other in layout.pads if other.id != pad.id)

        # Same height the candidate was tested at
        spot = (pad.position[0], room.floor_y() + CANDIDATE_LIFT, pad.position[2])
        if any(zone.contains(spot) for zone in zones):
            problems.append(f"Pad {pad.id} in room {pad.room_id} is too close to an obstacle")
    return problems


def validate_layout(layout: Layout, config: LayoutConfig) -> List[str]:
    """
    Check a finished layout against its geometric invariants.

    Args:
        layout: Generated layout
        config: Config active at the end of the run

    Returns:
        Human-readable problems (empty when the layout is valid)
    """
    problems = []
    problems.extend(check_room_overlaps(layout, config))
    problems.extend(check_doors(layout, config))
    problems.extend(check_lights(layout))
    problems.extend(check_pads(layout))
    return problems

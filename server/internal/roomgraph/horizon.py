"""
Horizon scanning: how far a room can extend in one direction.
"""

from typing import Optional

from .collision import Box, SpatialIndex
from .directions import Direction, perpendicular_axes


def scan(
    index: SpatialIndex,
    from_box: Box,
    direction: Direction,
    max_distance: float,
    exclude_id: Optional[int] = None,
    margin: float = 0.0,
) -> float:
    """
    Distance from `from_box`'s face to the nearest room shell ahead of it.

    Not a full raycast: a placed box is a hit only if it lies strictly ahead
    along the direction's axis and its extent on both perpendicular axes
    overlaps `from_box`'s extent there.

    Args:
        index: Placed rooms
        from_box: Interior box of the room scanning outward
        direction: Scan direction
        max_distance: Scan limit
        exclude_id: Room to ignore (normally the scanning room itself)
        margin: Shell thickness applied to obstacles

    Returns:
        Distance to the nearest hit, or max_distance if the way is clear
    """
    axis = direction.axis
    sign = direction.sign
    start = from_box.center[axis] + sign * from_box.half(axis)
    perp = perpendicular_axes(axis)

    nearest = max_distance
    for room_id, placed in index:
        if room_id == exclude_id:
            continue

        if sign > 0:
            distance = (placed.min(axis) - margin) - start
        else:
            distance = start - (placed.max(axis) + margin)

        if distance <= 0 or distance >= nearest:
            continue

        hit = True
        for check_axis in perp:
            our_min = from_box.min(check_axis)
            our_max = from_box.max(check_axis)
            if our_max <= placed.min(check_axis) - margin or our_min >= placed.max(check_axis) + margin:
                hit = False
                break

        if hit:
            nearest = distance

    return nearest

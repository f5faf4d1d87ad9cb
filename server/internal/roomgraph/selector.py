"""
Direction and dimension selection for the next room on a path.

Direction choice is a biased random walk: keep going straight, head for the
goal, or pick any direction with a clear horizon, in that order of
preference. Room dimensions are drawn from the configured ranges and capped
by the free space the horizon scan found.
"""

import math
from typing import List, Optional, Sequence, Tuple

from .collision import Box, SpatialIndex
from .directions import ALL_DIRECTIONS, Direction
from .horizon import scan
from .models import LayoutConfig, Vec3
from .rng import XorShiftRandom

# Goal directions are only considered when the goal is further than this
GOAL_DEADZONE = 1.0


def snap_to_grid(value: float, grid: float) -> float:
    """Snap a value to the nearest multiple of grid."""
    return math.floor(value / grid + 0.5) * grid


def snap_down(value: float, grid: float) -> float:
    """Snap a value down to a multiple of grid."""
    return math.floor(value / grid) * grid


def is_direction_allowed(direction: Direction, position: Sequence[float], config: LayoutConfig) -> bool:
    """Check vertical toggles, vertical limits and world bounds for a direction."""
    if direction == Direction.U and (not config.allow_up or position[1] >= config.max_y):
        return False
    if direction == Direction.D and (not config.allow_down or position[1] <= config.min_y):
        return False

    if config.bounds is not None:
        probe_distance = config.base_unit * 2
        vec = direction.vector
        for axis in range(3):
            probe = position[axis] + vec[axis] * probe_distance
            if probe < config.bounds.min[axis] or probe > config.bounds.max[axis]:
                return False

    return True


def goal_directions(position: Sequence[float], goal: Sequence[float]) -> List[Direction]:
    """Horizontal directions that reduce the distance to the goal (E/W first, then N/S)."""
    result = []
    dx = goal[0] - position[0]
    dz = goal[2] - position[2]
    if abs(dx) > GOAL_DEADZONE:
        result.append(Direction.E if dx > 0 else Direction.W)
    if abs(dz) > GOAL_DEADZONE:
        result.append(Direction.N if dz > 0 else Direction.S)
    return result


def pick_direction(
    rng: XorShiftRandom,
    index: SpatialIndex,
    room_id: int,
    room_box: Box,
    last_direction: Optional[Direction],
    config: LayoutConfig,
    goal: Optional[Vec3] = None,
) -> Tuple[Optional[Direction], float]:
    """
    Choose the direction for the next room and the free space available there.

    Args:
        rng: Room-stage random generator
        index: Placed rooms
        room_id: Id of the room growing outward
        room_box: Interior box of that room
        last_direction: Direction used to reach this room, if any
        config: Active generation config
        goal: Optional point the path should drift towards

    Returns:
        (direction, available_distance), or (None, 0.0) to end the path
    """
    position = room_box.center
    base_unit = config.base_unit
    scan_limit = config.scan_distance * base_unit

    allowed = [
        d
        for d in ALL_DIRECTIONS
        if not (last_direction is not None and d == last_direction.opposite)
        and is_direction_allowed(d, position, config)
    ]
    if not allowed:
        return None, 0.0

    horizontal = [d for d in allowed if not d.is_vertical]
    vertical = [d for d in allowed if d.is_vertical]

    use_vertical = bool(vertical) and rng.next_int(1, 100) <= config.vertical_chance
    pool = vertical if use_vertical else horizontal
    if not pool:
        pool = allowed

    clear: List[Tuple[Direction, float]] = []
    blocked: List[Tuple[Direction, float]] = []
    for direction in pool:
        distance = scan(index, room_box, direction, scan_limit, exclude_id=room_id, margin=config.wall_thickness)
        if distance >= scan_limit:
            clear.append((direction, distance))
        elif distance > base_unit:
            blocked.append((direction, distance))

    # Straightness: keep heading the same way
    if last_direction is not None and config.straightness > 0:
        for direction, distance in clear:
            if direction == last_direction and rng.next_int(1, 100) <= config.straightness:
                return direction, distance

    # Goal bias: prefer directions that close the distance to the goal
    if goal is not None and config.goal_bias > 0 and clear:
        wanted = goal_directions(position, goal)
        for direction, distance in clear:
            for goal_direction in wanted:
                if direction == goal_direction and rng.next_int(1, 100) <= config.goal_bias:
                    return direction, distance

    if clear:
        direction, distance = rng.choice(clear)
        return direction, distance
    if blocked:
        best = blocked[0]
        for candidate in blocked[1:]:
            if candidate[1] > best[1]:
                best = candidate
        return best
    return None, 0.0


def random_room_dims(rng: XorShiftRandom, config: LayoutConfig) -> List[float]:
    """
    Draw room dimensions [width, height, depth] from the configured ranges.

    Three draws are made, always in the order size, aspect, height.
    """
    grid = config.grid_snap
    min_size = config.effective_min_room_size

    size = config.base_unit * rng.next_float(*config.size_range)
    aspect = rng.next_float(*config.aspect_ratio)
    height_mult = rng.next_float(*config.height_scale)

    width = size * math.sqrt(aspect)
    depth = size / math.sqrt(aspect)
    height = size * height_mult

    return [
        max(min_size, snap_to_grid(width, grid)),
        max(min_size, snap_to_grid(height, grid)),
        max(min_size, snap_to_grid(depth, grid)),
    ]


def cap_to_available(dims: List[float], direction: Direction, available: float, config: LayoutConfig) -> List[float]:
    """Limit the movement-axis dimension to the scanned free space minus one base unit."""
    axis = direction.axis
    limit = max(config.effective_min_room_size, snap_down(available - config.base_unit, config.grid_snap))
    capped = list(dims)
    capped[axis] = min(capped[axis], limit)
    return capped

"""
Room graph builder: grows a tree of non-overlapping room volumes.

Generation starts with a root room at the origin and grows a main path one
room at a time. Each new room is attached to the face of the current room
picked by the direction selector, so that their shells touch exactly. If it
collides with any other room it is shifted sideways (never along the
movement axis, which would break the connection) and retried a bounded
number of times. When a path ends, spur paths start from junction rooms
(rooms with exactly two connections) until the spur budget is spent.

A room that cannot be placed ends its path early; it never aborts the run.
"""

import logging
import math
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .collision import Box, SpatialIndex, interval_overlap
from .context import LayoutContext
from .directions import Axis, Direction, perpendicular_axes
from .models import LayoutConfig, PathType, Room, Vec3
from .phases import PhaseTracker
from .selector import cap_to_available, pick_direction, random_room_dims

logger = logging.getLogger(__name__)

# Pushes smaller than this are rounding noise, not a usable shift axis
SHIFT_THRESHOLD = 0.1
# Extra clearance added on top of the wall thickness when shifting
SHIFT_CLEARANCE = 0.5


class Placed(NamedTuple):
    position: Vec3
    dims: Vec3


class Failed(NamedTuple):
    reason: str


PlacementResult = Union[Placed, Failed]


class BuilderState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    COMPLETE = "complete"


def attachment_position(
    parent: Box, dims: Sequence[float], direction: Direction, wall_thickness: float
) -> List[float]:
    """Center for a room of `dims` whose shell touches the parent's shell on `direction`'s face."""
    axis = direction.axis
    position = list(parent.center)
    position[axis] += direction.sign * (
        parent.half(axis) + wall_thickness + dims[axis] / 2.0 + wall_thickness
    )
    return position


def wall_overlaps(a: Box, b: Box, touch_axis: int) -> Tuple[float, float]:
    """Interior overlap of two rooms on the two axes perpendicular to `touch_axis` (negative if apart)."""
    first, second = perpendicular_axes(Axis(touch_axis))
    return (interval_overlap(a, b, first), interval_overlap(a, b, second))


def place_room(
    index: SpatialIndex,
    parent_id: int,
    parent: Box,
    dims: Sequence[float],
    direction: Direction,
    config: LayoutConfig,
) -> PlacementResult:
    """
    Find a collision-free position for a new room attached to `parent`.

    Args:
        index: Rooms placed so far
        parent_id: Id of the room being attached to (excluded from collision)
        parent: Parent interior box
        dims: New room dimensions
        direction: Face of the parent to attach on
        config: Active config (wall thickness, door size, retry budget)

    Returns:
        Placed(position, dims) or Failed(reason)
    """
    axis = direction.axis
    margin = config.wall_thickness
    position = attachment_position(parent, dims, direction, margin)

    shift_axes = [a for a in perpendicular_axes(axis)]
    if not (config.allow_up or config.allow_down):
        # Vertical movement disabled: keep every room level with its parent
        shift_axes = [a for a in shift_axes if a != Axis.Y]

    max_attempts = config.max_shift_attempts
    for attempt in range(1, max_attempts + 1):
        hit = index.first_overlap(Box(position, dims), margin, exclude_id=parent_id)
        if hit is None:
            break

        if attempt == max_attempts:
            return Failed(f"placement failed after {max_attempts} shift attempts")

        other_id, shift = hit
        usable = [a for a in shift_axes if abs(shift[a]) > SHIFT_THRESHOLD]
        if not usable:
            return Failed(f"overlap with room {other_id} cannot be cleared off the movement axis")

        # Smallest separating push, first axis on ties
        shift_axis = min(usable, key=lambda a: abs(shift[a]))
        amount = shift[shift_axis]
        position[shift_axis] += amount + math.copysign(margin + SHIFT_CLEARANCE, amount)

        overlap = min(wall_overlaps(parent, Box(position, dims), axis))
        if overlap <= 0 or overlap < config.min_door_size:
            return Failed(
                f"shift reduced wall overlap to {overlap:.1f} (need {config.min_door_size:.1f} for a door)"
            )
        logger.debug("Shifted room off room %d (attempt %d), wall overlap %.1f", other_id, attempt, overlap)

    overlap = min(wall_overlaps(parent, Box(position, dims), axis))
    if overlap <= 0 or overlap < config.min_door_size:
        return Failed(f"insufficient wall overlap for door: {overlap:.1f} < {config.min_door_size:.1f}")

    return Placed((position[0], position[1], position[2]), (dims[0], dims[1], dims[2]))


class RoomGraphBuilder:
    """Grows the room graph for one LayoutContext."""

    def __init__(self, ctx: LayoutContext):
        self.ctx = ctx
        self.phases = PhaseTracker(ctx.config.phases)
        self.state = BuilderState.IDLE

        self.root_id: Optional[int] = None
        self.path_index = -1
        self.path_type = PathType.MAIN
        self.path_segment_cap = 0
        self.segments_in_path = 0
        self.current_room_id: Optional[int] = None
        self.last_direction: Optional[Direction] = None

        self.spur_budget: Optional[int] = None
        self.spurs_started = 0
        self._next_room_id = 1

    def build(self) -> List[Room]:
        """
        Run generation to completion.

        Returns:
            Rooms in discovery order (also stored on the context)
        """
        if self.state is not BuilderState.IDLE:
            raise RuntimeError("RoomGraphBuilder.build() can only run once")

        ctx = self.ctx
        self.state = BuilderState.GENERATING
        ctx.config = self.phases.start(ctx.config)

        dims = random_room_dims(ctx.rng, ctx.config)
        root = self._create_room(ctx.config.origin, dims, None, None)
        self.root_id = root.id
        self._start_path(root.id, PathType.MAIN)

        while self.state is BuilderState.GENERATING:
            if self.segments_in_path >= self.path_segment_cap:
                self._end_path()
            elif not self._grow():
                # Blocked: end this path early
                self.segments_in_path = self.path_segment_cap

        logger.info(
            "Room graph complete: %d rooms, %d paths (%d spurs)",
            ctx.room_count,
            self.path_index + 1,
            self.spurs_started,
        )
        return list(ctx.rooms.values())

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _start_path(self, from_room_id: int, path_type: PathType) -> None:
        config = self.ctx.config
        self.path_index += 1
        self.path_type = path_type
        self.current_room_id = from_room_id
        self.last_direction = None
        self.segments_in_path = 0

        if path_type is PathType.MAIN and config.main_path_length is not None:
            self.path_segment_cap = config.main_path_length - 1
        else:
            self.path_segment_cap = config.max_segments_per_path

        logger.debug("Starting %s path %d from room %d", path_type.value, self.path_index, from_room_id)

    def _end_path(self) -> None:
        ctx = self.ctx
        logger.debug("Path %d complete", self.path_index)
        ctx.config = self.phases.record_path(ctx.config)

        if self.spur_budget is None:
            spur_count = ctx.config.spur_count
            self.spur_budget = ctx.rng.next_int(spur_count.min, spur_count.max)

        candidates = self.junction_candidates()
        if self.spurs_started < self.spur_budget and candidates:
            pick = candidates[ctx.rng.next_int(0, len(candidates) - 1)]
            self.spurs_started += 1
            self._start_path(pick, PathType.SPUR)
        else:
            self.state = BuilderState.COMPLETE

    def junction_candidates(self) -> List[int]:
        """Rooms with exactly two connections, excluding the root."""
        return [
            room.id
            for room in self.ctx.rooms.values()
            if len(room.connections) == 2 and room.id != self.root_id
        ]

    def _current_goal(self) -> Optional[Vec3]:
        goals = self.ctx.config.goals
        if not goals:
            return None
        return goals[self.path_index % len(goals)]

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def _grow(self) -> bool:
        """Try to add one room to the current path. Returns False if the path is blocked."""
        ctx = self.ctx
        config = ctx.config
        parent_id = self.current_room_id
        parent_box = ctx.get_room_box(parent_id)

        direction, available = pick_direction(
            ctx.rng,
            ctx.index,
            parent_id,
            parent_box,
            self.last_direction,
            config,
            self._current_goal(),
        )
        if direction is None:
            logger.info("Path %d terminated at room %d: no usable direction", self.path_index, parent_id)
            return False

        dims = cap_to_available(random_room_dims(ctx.rng, config), direction, available, config)
        result = place_room(ctx.index, parent_id, parent_box, dims, direction, config)
        if isinstance(result, Failed):
            ctx.report(
                "rooms",
                f"Path {self.path_index} ended early at room {parent_id} heading {direction.value}: {result.reason}",
                room_id=parent_id,
            )
            return False

        room = self._create_room(result.position, result.dims, parent_id, direction)
        self.current_room_id = room.id
        self.last_direction = direction
        self.segments_in_path += 1
        return True

    def _create_room(
        self,
        position: Sequence[float],
        dims: Sequence[float],
        parent_id: Optional[int],
        direction: Optional[Direction],
    ) -> Room:
        ctx = self.ctx
        room_id = self._next_room_id
        self._next_room_id += 1

        room = Room(
            id=room_id,
            position=(position[0], position[1], position[2]),
            dims=(dims[0], dims[1], dims[2]),
            parent_id=parent_id,
            connections=[parent_id] if parent_id is not None else [],
            path_type=self.path_type,
            path_index=max(self.path_index, 0),
            attach_face=direction,
        )
        if parent_id is not None:
            ctx.rooms[parent_id].connections.append(room_id)
        ctx.add_room(room)

        logger.debug(
            "Room %d at (%.1f, %.1f, %.1f) dims (%.1f, %.1f, %.1f)",
            room_id,
            *room.position,
            *room.dims,
        )

        ctx.config = self.phases.record_room(ctx.config)
        return room

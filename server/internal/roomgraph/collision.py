"""
Axis-aligned bounding boxes and shell collision tests.

Rooms are interior boxes. Their walls ("shells") extend `margin`
(the wall thickness) beyond the interior on every side, and two rooms
collide when their shells overlap on all three axes. Queries are linear
scans over the placed rooms; layouts are tens to low hundreds of rooms.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]

# Shells closer than this are treated as touching, not overlapping
OVERLAP_EPSILON = 0.01


class Box:
    """Axis-aligned box defined by its center and full size."""

    __slots__ = ("center", "size")

    def __init__(self, center: Sequence[float], size: Sequence[float]):
        self.center: Vec3 = (float(center[0]), float(center[1]), float(center[2]))
        self.size: Vec3 = (float(size[0]), float(size[1]), float(size[2]))

    def half(self, axis: int) -> float:
        return self.size[axis] / 2.0

    def min(self, axis: int) -> float:
        return self.center[axis] - self.size[axis] / 2.0

    def max(self, axis: int) -> float:
        return self.center[axis] + self.size[axis] / 2.0

    def expanded(self, margin: float) -> "Box":
        """Box grown by `margin` on every side."""
        return Box(self.center, tuple(s + 2.0 * margin for s in self.size))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return self.center == other.center and self.size == other.size

    def __repr__(self) -> str:
        return f"Box(center={self.center}, size={self.size})"


def shells_overlap(a: Box, b: Box, margin: float, epsilon: float = OVERLAP_EPSILON) -> bool:
    """
    Check whether the shells of two boxes overlap.

    Args:
        a: First interior box
        b: Second interior box
        margin: Shell thickness added to every side of both boxes
        epsilon: Tolerance under which touching shells do not count

    Returns:
        True if the expanded boxes overlap on all three axes
    """
    for axis in range(3):
        min_a = a.min(axis) - margin
        max_a = a.max(axis) + margin
        min_b = b.min(axis) - margin
        max_b = b.max(axis) + margin
        if max_a <= min_b + epsilon or max_b <= min_a + epsilon:
            return False
    return True


def overlap_amount(
    a: Box, b: Box, margin: float, epsilon: float = OVERLAP_EPSILON
) -> Optional[Vec3]:
    """
    Compute the push needed to move box `a` out of box `b`.

    For each axis the cheaper of the two push directions is chosen, signed
    positive when `a` must move towards +axis.

    Args:
        a: Box being placed
        b: Already placed box
        margin: Shell thickness added to every side of both boxes

    Returns:
        Per-axis signed push distances, or None if the shells do not overlap
    """
    if not shells_overlap(a, b, margin, epsilon):
        return None

    shift = []
    for axis in range(3):
        min_a = a.min(axis) - margin
        max_a = a.max(axis) + margin
        min_b = b.min(axis) - margin
        max_b = b.max(axis) + margin
        push_positive = max_b - min_a
        push_negative = max_a - min_b
        shift.append(push_positive if push_positive < push_negative else -push_negative)
    return (shift[0], shift[1], shift[2])


def interval_overlap(a: Box, b: Box, axis: int) -> float:
    """Length of the overlap of two interior boxes on one axis (negative if apart)."""
    return min(a.max(axis), b.max(axis)) - max(a.min(axis), b.min(axis))


class SpatialIndex:
    """Insertion-ordered registry of placed room boxes."""

    def __init__(self):
        self._entries: List[Tuple[int, Box]] = []

    def add(self, room_id: int, box: Box) -> None:
        self._entries.append((room_id, box))

    def get(self, room_id: int) -> Optional[Box]:
        for entry_id, box in self._entries:
            if entry_id == room_id:
                return box
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[int, Box]]:
        return iter(self._entries)

    def overlaps_any(
        self, box: Box, margin: float, exclude_id: Optional[int] = None
    ) -> Optional[int]:
        """Return the id of the first placed room whose shell overlaps `box`."""
        for room_id, placed in self._entries:
            if room_id == exclude_id:
                continue
            if shells_overlap(box, placed, margin):
                return room_id
        return None

    def first_overlap(
        self, box: Box, margin: float, exclude_id: Optional[int] = None
    ) -> Optional[Tuple[int, Vec3]]:
        """
        Find the first placed room overlapping `box` and the push to clear it.

        Returns:
            (room_id, shift) for the first overlap in insertion order, or None
        """
        for room_id, placed in self._entries:
            if room_id == exclude_id:
                continue
            shift = overlap_amount(box, placed, margin)
            if shift is not None:
                return room_id, shift
        return None

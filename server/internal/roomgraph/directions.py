"""
Axis-aligned growth directions and face names.
"""

from enum import Enum, IntEnum
from typing import Dict, Tuple


class Axis(IntEnum):
    X = 0
    Y = 1
    Z = 2


class Direction(str, Enum):
    """The six axis-aligned unit directions. Values double as face names."""

    N = "N"  # +Z
    S = "S"  # -Z
    E = "E"  # +X
    W = "W"  # -X
    U = "U"  # +Y (up)
    D = "D"  # -Y (down)

    @property
    def axis(self) -> Axis:
        return _AXIS[self]

    @property
    def sign(self) -> int:
        return _SIGN[self]

    @property
    def vector(self) -> Tuple[int, int, int]:
        vec = [0, 0, 0]
        vec[self.axis] = self.sign
        return (vec[0], vec[1], vec[2])

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def is_vertical(self) -> bool:
        return self.axis == Axis.Y


_AXIS: Dict[Direction, Axis] = {
    Direction.N: Axis.Z,
    Direction.S: Axis.Z,
    Direction.E: Axis.X,
    Direction.W: Axis.X,
    Direction.U: Axis.Y,
    Direction.D: Axis.Y,
}

_SIGN: Dict[Direction, int] = {
    Direction.N: 1,
    Direction.S: -1,
    Direction.E: 1,
    Direction.W: -1,
    Direction.U: 1,
    Direction.D: -1,
}

_OPPOSITE: Dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
    Direction.U: Direction.D,
    Direction.D: Direction.U,
}

# Scan/selection order
ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.N,
    Direction.S,
    Direction.E,
    Direction.W,
    Direction.U,
    Direction.D,
)

# Wall faces in light placement priority order
WALL_FACES: Tuple[Direction, ...] = (Direction.N, Direction.S, Direction.E, Direction.W)


def face_for(axis: Axis, sign: int) -> Direction:
    """Return the direction for an axis and sign (+1/-1)."""
    for direction in ALL_DIRECTIONS:
        if direction.axis == axis and direction.sign == sign:
            return direction
    raise ValueError(f"No direction for axis {axis} sign {sign}")


def perpendicular_axes(axis: Axis) -> Tuple[Axis, Axis]:
    """The two axes other than `axis`, in X, Y, Z order."""
    others = [a for a in Axis if a != axis]
    return (others[0], others[1])

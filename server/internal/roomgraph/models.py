"""
Data models for layout generation.

LayoutConfig is the validated input to a generation run. Layout and its
parts are the output handed to renderers: plain data, serializable with
model_dump()/model_dump_json(), with rooms referencing each other by id only.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .directions import Axis, Direction

Vec3 = Tuple[float, float, float]

LAYOUT_SCHEMA_VERSION = 1


class ConfigurationError(ValueError):
    """Raised before generation starts when a config cannot be used."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class SpurCount(BaseModel):
    """Inclusive range for the number of spur paths."""

    min: int = Field(default=2, ge=0)
    max: int = Field(default=5, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        # A bare int means exactly that many spurs
        if isinstance(value, int) and not isinstance(value, bool):
            return {"min": value, "max": value}
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return {"min": value[0], "max": value[1]}
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "SpurCount":
        if self.min > self.max:
            raise ValueError(f"spur_count min ({self.min}) exceeds max ({self.max})")
        return self


class Bounds(BaseModel):
    """Axis-aligned world limits for room growth."""

    min: Vec3
    max: Vec3

    @model_validator(mode="after")
    def _check_order(self) -> "Bounds":
        for axis in range(3):
            if self.min[axis] > self.max[axis]:
                raise ValueError(
                    f"bounds min {list(self.min)} exceeds max {list(self.max)} on axis {axis}"
                )
        return self


class Phase(BaseModel):
    """
    One step of multi-phase generation.

    The phase is active until `rooms` rooms or `paths` paths have been
    completed since it started. Any extra keys are direct config overrides
    applied (after the preset) when the phase becomes active.
    """

    model_config = ConfigDict(extra="allow")

    preset: Optional[str] = None
    rooms: Optional[int] = Field(default=None, ge=1)
    paths: Optional[int] = Field(default=None, ge=1)

    @property
    def overrides(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    @model_validator(mode="after")
    def _check_overrides(self) -> "Phase":
        unknown = sorted(set(self.overrides) - overridable_fields())
        if unknown:
            raise ValueError(f"Phase overrides unknown or fixed settings: {unknown}")
        return self


def _check_range(name: str, value: Tuple[float, float]) -> Tuple[float, float]:
    if value[0] > value[1]:
        raise ValueError(f"{name} min ({value[0]}) exceeds max ({value[1]})")
    if value[0] <= 0:
        raise ValueError(f"{name} values must be positive")
    return value


class LayoutConfig(BaseModel):
    """Settings for one layout generation run."""

    model_config = ConfigDict(extra="forbid")

    # Header
    name: str = "layout"
    seed: Optional[Union[int, str]] = None
    region_num: int = Field(default=1, ge=1)
    preset: Optional[str] = None

    # Placement anchors
    origin: Vec3 = (0.0, 20.0, 0.0)
    goals: List[Vec3] = Field(default_factory=list)

    # Core units
    base_unit: float = Field(default=15.0, gt=0)
    wall_thickness: float = Field(default=1.0, ge=0)

    # Path structure
    spur_count: SpurCount = Field(default_factory=SpurCount)
    main_path_length: Optional[int] = Field(default=None, ge=1)
    max_segments_per_path: int = Field(default=10, ge=0)
    straightness: int = Field(default=50, ge=0, le=100)
    goal_bias: int = Field(default=70, ge=0, le=100)

    # Vertical movement
    vertical_chance: int = Field(default=15, ge=0, le=100)
    allow_up: bool = True
    allow_down: bool = True
    min_y: float = -200.0
    max_y: float = 500.0

    # Room sizing
    size_range: Tuple[float, float] = (1.2, 2.5)
    height_scale: Tuple[float, float] = (0.8, 1.2)
    aspect_ratio: Tuple[float, float] = (0.6, 1.4)
    grid_snap: float = Field(default=5.0, gt=0)
    min_room_size: Optional[float] = Field(default=None, gt=0)

    # Spacing
    scan_distance: float = Field(default=5.0, gt=0)
    min_door_size: float = Field(default=4.0, ge=0)
    door_size: float = Field(default=12.0, ge=0)
    max_shift_attempts: int = Field(default=10, ge=1)

    # Derived artifacts
    floor_threshold: float = Field(default=5.0, ge=0)
    pad_count: Optional[int] = Field(default=None, ge=0)
    rooms_per_pad: int = Field(default=25, ge=1)

    # Boundaries and phases
    bounds: Optional[Bounds] = None
    phases: Optional[List[Phase]] = None

    # Render hints echoed into the layout
    material: str = "Brick"
    color: Tuple[int, int, int] = (140, 110, 90)

    @field_validator("size_range", "height_scale", "aspect_ratio")
    @classmethod
    def _check_ranges(cls, value: Tuple[float, float], info) -> Tuple[float, float]:
        return _check_range(info.field_name, value)

    @model_validator(mode="after")
    def _check_consistency(self) -> "LayoutConfig":
        if self.min_y > self.max_y:
            raise ValueError(f"min_y ({self.min_y}) exceeds max_y ({self.max_y})")
        if self.door_size < self.min_door_size:
            raise ValueError(
                f"door_size ({self.door_size}) is smaller than min_door_size ({self.min_door_size})"
            )
        return self

    @property
    def effective_min_room_size(self) -> float:
        return self.min_room_size if self.min_room_size is not None else self.base_unit

    def with_overrides(self, values: Dict[str, Any]) -> "LayoutConfig":
        """Return a validated copy with `values` replacing existing settings."""
        data = self.model_dump()
        data.update(values)
        return LayoutConfig.model_validate(data)


# Settings fixed for the whole run; presets and phases may not replace them
_FIXED_FIELDS = {"name", "seed", "region_num", "preset", "phases", "origin", "wall_thickness"}


def overridable_fields() -> set:
    """Config fields a preset or phase may replace."""
    return set(LayoutConfig.model_fields) - _FIXED_FIELDS


# ---------------------------------------------------------------------------
# Layout output
# ---------------------------------------------------------------------------


class PathType(str, Enum):
    MAIN = "main"
    SPUR = "spur"


class TrussType(str, Enum):
    CEILING = "ceiling"
    WALL = "wall"


class Room(BaseModel):
    id: int
    position: Vec3
    dims: Vec3
    parent_id: Optional[int] = None
    connections: List[int] = Field(default_factory=list)
    path_type: PathType = PathType.MAIN
    path_index: int = 0
    attach_face: Optional[Direction] = None

    def floor_y(self) -> float:
        return self.position[1] - self.dims[1] / 2.0

    def ceiling_y(self) -> float:
        return self.position[1] + self.dims[1] / 2.0


class Door(BaseModel):
    id: int
    from_room: int
    to_room: int
    center: Vec3
    width: float
    height: float
    axis: Axis
    width_axis: Axis
    height_axis: Axis
    bottom: Optional[float] = None

    def connects(self, room_id: int) -> bool:
        return room_id in (self.from_room, self.to_room)


class Truss(BaseModel):
    id: int
    door_id: int
    room_id: int
    position: Vec3
    size: Vec3
    type: TrussType


class Light(BaseModel):
    id: int
    room_id: int
    position: Vec3
    size: Vec3
    wall: Direction


class Pad(BaseModel):
    id: str
    room_id: int
    position: Vec3
    is_spawn: bool = False


class Spawn(BaseModel):
    room_id: int
    position: Vec3


class Diagnostic(BaseModel):
    """A non-fatal omission or problem reported during generation."""

    stage: str
    message: str
    room_id: Optional[int] = None
    door_id: Optional[int] = None


class LayoutSettings(BaseModel):
    wall_thickness: float
    door_size: float
    base_unit: float
    material: str
    color: Tuple[int, int, int]


class Layout(BaseModel):
    version: int = LAYOUT_SCHEMA_VERSION
    name: str
    seed: int
    seed_input: Union[int, str]
    seeds: Dict[str, int]
    region_num: int = 1
    rooms: List[Room] = Field(default_factory=list)
    doors: List[Door] = Field(default_factory=list)
    trusses: List[Truss] = Field(default_factory=list)
    lights: List[Light] = Field(default_factory=list)
    pads: List[Pad] = Field(default_factory=list)
    spawn: Optional[Spawn] = None
    settings: LayoutSettings
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    def get_room(self, room_id: int) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def get_doors_for_room(self, room_id: int) -> List[Door]:
        return [door for door in self.doors if door.connects(room_id)]

    def get_door_between(self, room_a: int, room_b: int) -> Optional[Door]:
        for door in self.doors:
            if door.connects(room_a) and door.connects(room_b):
                return door
        return None

    def get_light_for_room(self, room_id: int) -> Optional[Light]:
        for light in self.lights:
            if light.room_id == room_id:
                return light
        return None

    def get_pad(self, pad_id: str) -> Optional[Pad]:
        for pad in self.pads:
            if pad.id == pad_id:
                return pad
        return None

"""
Layout context: the state of one generation run.

A LayoutContext owns everything a run mutates: the active config, the
room-stage random generator, the spatial index and the output collections.
Each planner appends to its own collection and only reads the others.
Dropping the context discards the run.
"""

import logging
from typing import Dict, List, Optional

from .collision import Box, SpatialIndex
from .models import (
    Diagnostic,
    Door,
    Layout,
    LayoutConfig,
    LayoutSettings,
    Light,
    Pad,
    Room,
    Spawn,
    Truss,
)
from .rng import XorShiftRandom
from .seeds import SeedInput, derive_stage_seeds, seeded_random, string_to_seed

logger = logging.getLogger(__name__)


class LayoutContext:
    """Central, authoritative data store for one layout generation run."""

    def __init__(self, config: LayoutConfig, seed_input: SeedInput):
        self.config = config
        self.seed_input = seed_input
        self.seed = string_to_seed(seed_input)
        self.seeds = derive_stage_seeds(seed_input)
        self.rng: XorShiftRandom = seeded_random(self.seeds["rooms"])

        self.index = SpatialIndex()
        self.rooms: Dict[int, Room] = {}
        self.doors: List[Door] = []
        self.trusses: List[Truss] = []
        self.lights: List[Light] = []
        self.pads: List[Pad] = []
        self.spawn: Optional[Spawn] = None
        self.diagnostics: List[Diagnostic] = []

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def add_room(self, room: Room) -> None:
        self.rooms[room.id] = room
        self.index.add(room.id, Box(room.position, room.dims))

    def get_room(self, room_id: int) -> Optional[Room]:
        return self.rooms.get(room_id)

    def get_room_box(self, room_id: int) -> Optional[Box]:
        return self.index.get(room_id)

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    # ------------------------------------------------------------------
    # Queries for later planners
    # ------------------------------------------------------------------

    def get_doors_for_room(self, room_id: int) -> List[Door]:
        return [door for door in self.doors if door.connects(room_id)]

    def get_trusses_for_room(self, room_id: int) -> List[Truss]:
        """Trusses on any door of the room, whichever side they stand on."""
        door_ids = {door.id for door in self.get_doors_for_room(room_id)}
        return [truss for truss in self.trusses if truss.door_id in door_ids]

    def get_lights_for_room(self, room_id: int) -> List[Light]:
        return [light for light in self.lights if light.room_id == room_id]

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def report(
        self,
        stage: str,
        message: str,
        room_id: Optional[int] = None,
        door_id: Optional[int] = None,
    ) -> None:
        """Record a non-fatal omission and log it."""
        self.diagnostics.append(
            Diagnostic(stage=stage, message=message, room_id=room_id, door_id=door_id)
        )
        logger.warning("[%s] %s", stage, message)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_layout(self) -> Layout:
        config = self.config
        return Layout(
            name=config.name,
            seed=self.seed,
            seed_input=self.seed_input,
            seeds=dict(self.seeds),
            region_num=config.region_num,
            rooms=list(self.rooms.values()),
            doors=list(self.doors),
            trusses=list(self.trusses),
            lights=list(self.lights),
            pads=list(self.pads),
            spawn=self.spawn,
            settings=LayoutSettings(
                wall_thickness=config.wall_thickness,
                door_size=config.door_size,
                base_unit=config.base_unit,
                material=config.material,
                color=config.color,
            ),
            diagnostics=list(self.diagnostics),
        )

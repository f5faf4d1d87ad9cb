"""
Shared fixtures for room graph tests.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from internal.roomgraph import presets
from internal.roomgraph.context import LayoutContext
from internal.roomgraph.models import LayoutConfig, Room


@pytest.fixture(autouse=True)
def fresh_presets(monkeypatch):
    """Every test reads the bundled presets file from scratch."""
    monkeypatch.delenv("LAYOUT_PRESETS_PATH", raising=False)
    presets.clear_cache()
    yield
    presets.clear_cache()


@pytest.fixture
def make_context():
    """
    Build a LayoutContext from hand-placed rooms.

    Rooms are given as (position, dims, parent_id) tuples and get ids 1, 2, ...
    in order; connections are filled in from the parent ids.
    """

    def _make(room_specs, **config_values):
        ctx = LayoutContext(LayoutConfig(**config_values), 1)
        for room_id, (position, dims, parent_id) in enumerate(room_specs, start=1):
            connections = [parent_id] if parent_id is not None else []
            ctx.add_room(
                Room(
                    id=room_id,
                    position=position,
                    dims=dims,
                    parent_id=parent_id,
                    connections=connections,
                )
            )
            if parent_id is not None:
                ctx.rooms[parent_id].connections.append(room_id)
        return ctx

    return _make

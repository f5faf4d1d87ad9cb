"""
Layout generation entry point.

Runs every planning stage in order on one LayoutContext:
rooms -> doors -> trusses -> lights -> pads/spawn, then checks the result.
"""

import logging
from typing import Any, Dict, Union

from . import presets
from .builder import RoomGraphBuilder
from .context import LayoutContext
from .doors import plan_doors
from .lights import plan_lights
from .models import Layout, LayoutConfig
from .pads import plan_pads, plan_spawn
from .seeds import generate_seed
from .trusses import plan_trusses
from .validation import validate_layout

logger = logging.getLogger(__name__)


def resolve_config(config: Union[LayoutConfig, Dict[str, Any]]) -> LayoutConfig:
    """
    Validate a config and make it ready to run.

    Applies `config.preset` underneath the explicitly set fields, checks that
    every phase preset exists and fills in a seed when none was given.

    Raises:
        pydantic.ValidationError: If the settings are malformed
        ConfigurationError: If a preset is unknown or produces an invalid config
    """
    if not isinstance(config, LayoutConfig):
        config = LayoutConfig.model_validate(config)

    if config.preset:
        config = presets.apply_preset(config, config.preset, keep_explicit=True)

    for phase in config.phases or []:
        if phase.preset:
            presets.get_preset(phase.preset)

    if config.seed is None:
        config = config.model_copy(update={"seed": generate_seed()})

    return config


def generate_layout(config: Union[LayoutConfig, Dict[str, Any]]) -> Layout:
    """
    Generate a complete layout.

    Args:
        config: LayoutConfig or a dict of its fields

    Returns:
        Layout with rooms, doors, trusses, lights, pads and spawn. Omitted
        artifacts and any broken invariants are listed in its diagnostics.
    """
    config = resolve_config(config)
    ctx = LayoutContext(config, config.seed)
    logger.info(
        "Generating layout %r (seed=%r -> %d, preset=%s)",
        config.name,
        config.seed,
        ctx.seed,
        config.preset,
    )

    RoomGraphBuilder(ctx).build()
    plan_doors(ctx)
    plan_trusses(ctx)
    plan_lights(ctx)
    plan_pads(ctx)
    plan_spawn(ctx)

    for problem in validate_layout(ctx.to_layout(), ctx.config):
        ctx.report("layout", problem)

    layout = ctx.to_layout()
    logger.info(
        "Layout %r complete: %d rooms, %d doors, %d trusses, %d lights, %d pads, %d diagnostics",
        layout.name,
        len(layout.rooms),
        len(layout.doors),
        len(layout.trusses),
        len(layout.lights),
        len(layout.pads),
        len(layout.diagnostics),
    )
    return layout

"""
Multi-phase generation: switch presets/settings part way through a run.
"""

import logging
from typing import List, Optional

from . import presets
from .models import LayoutConfig, Phase

logger = logging.getLogger(__name__)


def apply_phase(config: LayoutConfig, phase: Phase) -> LayoutConfig:
    """Apply a phase's preset, then its direct overrides, to a config."""
    if phase.preset:
        config = presets.apply_preset(config, phase.preset)
    overrides = phase.overrides
    if overrides:
        config = config.with_overrides(overrides)
    return config


class PhaseTracker:
    """
    Tracks progress through the configured phases.

    Room and path completions are recorded as they happen; when the active
    phase's trigger is met the next phase is applied and the new active
    config is returned to the caller, who makes it visible to every later
    stage.
    """

    def __init__(self, phases: Optional[List[Phase]]):
        self.phases: List[Phase] = list(phases or [])
        self.current = 0
        self.rooms_in_phase = 0
        self.paths_in_phase = 0

    @property
    def total(self) -> int:
        return len(self.phases)

    def start(self, config: LayoutConfig) -> LayoutConfig:
        """Reset counters and apply the first phase, if any."""
        self.current = 0
        self.rooms_in_phase = 0
        self.paths_in_phase = 0
        if not self.phases:
            return config
        return apply_phase(config, self.phases[0])

    def record_room(self, config: LayoutConfig) -> LayoutConfig:
        self.rooms_in_phase += 1
        return self._advance_if_due(config)

    def record_path(self, config: LayoutConfig) -> LayoutConfig:
        self.paths_in_phase += 1
        return self._advance_if_due(config)

    def _advance_if_due(self, config: LayoutConfig) -> LayoutConfig:
        if self.current >= self.total:
            return config

        phase = self.phases[self.current]
        due = (phase.rooms is not None and self.rooms_in_phase >= phase.rooms) or (
            phase.paths is not None and self.paths_in_phase >= phase.paths
        )
        if not due:
            return config

        self.current += 1
        self.rooms_in_phase = 0
        self.paths_in_phase = 0

        if self.current < self.total:
            next_phase = self.phases[self.current]
            logger.info(
                "Switching to phase %d/%d (preset=%s)",
                self.current + 1,
                self.total,
                next_phase.preset,
            )
            return apply_phase(config, next_phase)
        return config

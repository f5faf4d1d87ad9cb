"""
Seed generation utilities for deterministic layout generation.
"""

import random
import string
from typing import Dict, Union

from .rng import MASK_32, XorShiftRandom

SeedInput = Union[int, str]

# Offsets added to the master seed for each planning stage so that one
# stage's draw count never shifts another stage's sequence
STAGE_SEED_OFFSETS: Dict[str, int] = {
    "rooms": 0,
    "doors": 10000,
    "trusses": 20000,
    "lights": 30000,
    "pads": 40000,
}

SEED_ALPHABET = string.ascii_lowercase + string.digits
GENERATED_SEED_LENGTH = 12


def string_to_seed(value: SeedInput) -> int:
    """
    Convert a seed value to a 32-bit numeric seed.

    Numeric seeds are used as-is (masked to 32 bits). Strings are hashed with
    a weighted byte sum over their UTF-8 bytes, so the same string always
    gives the same seed regardless of platform or PYTHONHASHSEED.

    Args:
        value: Integer seed or seed string (e.g. "BeverlyMansion")

    Returns:
        Numeric seed in [0, 2**32)
    """
    if isinstance(value, bool):
        raise TypeError("Seed must be an int or a string, not bool")
    if isinstance(value, int):
        return value & MASK_32
    if isinstance(value, str):
        total = 0
        for i, byte in enumerate(value.encode("utf-8"), start=1):
            total += byte * (i * 31)
        return total & MASK_32
    raise TypeError(f"Seed must be an int or a string, got {type(value).__name__}")


def derive_stage_seeds(master_seed: SeedInput) -> Dict[str, int]:
    """
    Generate one seed per planning stage from a master seed.

    Args:
        master_seed: Master seed (strings are hashed first)

    Returns:
        Mapping of stage name to numeric seed
    """
    master = string_to_seed(master_seed)
    return {stage: master + offset for stage, offset in STAGE_SEED_OFFSETS.items()}


def generate_seed() -> str:
    """Create a random seed string for runs that were not given one."""
    return "".join(random.choice(SEED_ALPHABET) for _ in range(GENERATED_SEED_LENGTH))


def seeded_random(seed: int) -> XorShiftRandom:
    """
    Create deterministic random number generator.

    Args:
        seed: Seed value

    Returns:
        Seeded XorShiftRandom instance
    """
    return XorShiftRandom(seed)

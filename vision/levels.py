"""
Difficulty levels: the fixed catalogue of ten computer opponents.

Each tier maps to a search depth and a mistake probability. Weaker tiers
search fewer plies and are more likely to throw away the searched move in
favour of a random one. The catalogue is built once at import time and is
read-only afterwards.
"""

from dataclasses import dataclass

from vision.constants import (
    DEPTH_2_TIER,
    DEPTH_3_TIER,
    EASIEST_TIER_RANDOM_RATE,
    LEVEL_DESCRIPTIONS,
    LEVEL_NAME_PREFIX,
    MAX_TIER,
    MIN_TIER,
    MISTAKE_DIVISOR,
)


class InvalidTierError(ValueError):
    """Raised for a difficulty tier outside MIN_TIER..MAX_TIER."""


@dataclass(frozen=True)
class Level:
    """
    One difficulty profile.

    Attributes:
        tier:                Difficulty, 1 (weakest) to 10 (strongest).
        name:                Display name, e.g. "Vision 7".
        description:         Short human-readable strength label.
        depth:               Search depth in plies.
        mistake_probability: Chance of replacing the searched move with a
                             random legal move.
        random_rate:         Chance of playing a random move before the level
                             policy is consulted at all. Non-zero only for the
                             easiest tier.
    """

    tier: int
    name: str
    description: str
    depth: int
    mistake_probability: float
    random_rate: float = 0.0


def search_depth(tier: int) -> int:
    """Plies searched at ``tier``: 3 from tier 8, 2 from tier 4, else 1."""
    if tier >= DEPTH_3_TIER:
        return 3
    if tier >= DEPTH_2_TIER:
        return 2
    return 1


def mistake_probability(tier: int) -> float:
    """Chance of a random move instead of the searched one; 0 at the top tier."""
    return max(0.0, (MAX_TIER - tier) / MISTAKE_DIVISOR)


def _build_level(tier: int) -> Level:
    return Level(
        tier=tier,
        name=f"{LEVEL_NAME_PREFIX} {tier}",
        description=LEVEL_DESCRIPTIONS[tier],
        depth=search_depth(tier),
        mistake_probability=mistake_probability(tier),
        random_rate=EASIEST_TIER_RANDOM_RATE if tier == MIN_TIER else 0.0,
    )


LEVELS: tuple[Level, ...] = tuple(_build_level(t) for t in range(MIN_TIER, MAX_TIER + 1))


def get_level(tier: int) -> Level:
    """
    Look up the profile for ``tier``.

    Raises:
        InvalidTierError: ``tier`` is not an int in MIN_TIER..MAX_TIER.
    """
    # bool is an int subclass; True would otherwise silently mean tier 1.
    if isinstance(tier, bool) or not isinstance(tier, int) or not MIN_TIER <= tier <= MAX_TIER:
        raise InvalidTierError(f"tier must be an integer in {MIN_TIER}..{MAX_TIER}, got {tier!r}")
    return LEVELS[tier - MIN_TIER]

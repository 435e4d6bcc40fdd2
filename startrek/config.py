"""
Rule sets and game constants for the Star Trek simulation engine.

Two historical rule sets exist:
- v1: static galaxy, cubic navigation energy cost, no starbase attacks
- v2: starbases come under attack, rank-based difficulty, linear nav cost

Both are served by the same engine; a Ruleset picks the behaviour.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from dotenv import load_dotenv


# =============================================================================
# GALAXY / SHIP CONSTANTS
# =============================================================================

GALAXY_SIZE = 8   # quadrants per side
SECTOR_SIZE = 8   # sectors per quadrant side

INITIAL_ENERGY = 3000.0
INITIAL_TORPEDOES = 10
LOW_SHIELDS_WARNING = 200.0
LOW_ENERGY_FRACTION = 0.1  # condition YELLOW below 10% of max energy

MAX_WARP = 8.0
DAMAGED_MAX_WARP = 0.2

# Klingon battle cruiser energy = KLINGON_BASE_ENERGY * (0.5 + rand)
KLINGON_BASE_ENERGY = 200.0

# Per-cell generation thresholds (rand() > threshold)
KLINGON_3_THRESHOLD = 0.98
KLINGON_2_THRESHOLD = 0.95
KLINGON_1_THRESHOLD = 0.80
STARBASE_THRESHOLD = 0.96

MIN_MISSION_DAYS = 25
MISSION_DAYS_SPREAD = 10

# Combat timing and costs
COMBAT_TICK = 0.05          # stardates spent by a phaser or torpedo shot
TORPEDO_ENERGY_COST = 2.0
TORPEDO_MAX_STEPS = 10
PHASER_MIN_HIT_FRACTION = 0.15

# Damage control
RANDOM_FAILURE_CHANCE = 0.1
REPAIR_FLOOR = -0.1

MIN_RANK = 1
MAX_RANK = 12
DEFAULT_RANK = 5


class NavEnergyModel(Enum):
    """Formula used to price a warp maneuver."""
    SECTORS = "sectors"  # num_sectors + 10 (v2)
    CUBIC = "cubic"      # floor(warp**3 * 10 + 10) (v1)


@dataclass(frozen=True)
class Ruleset:
    """
    Feature toggles that select between the historical rule sets.

    Attributes:
        name: Display name of the rule set.
        rank: Captain rank (1-12). Scales starbase attack frequency and
              shortens the rescue window.
        enable_starbase_attacks: Whether starbases can come under attack.
        nav_energy_model: How warp maneuvers are priced.
    """
    name: str = "v2"
    rank: int = DEFAULT_RANK
    enable_starbase_attacks: bool = True
    nav_energy_model: NavEnergyModel = NavEnergyModel.SECTORS

    def __post_init__(self) -> None:
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(
                f"rank must be between {MIN_RANK} and {MAX_RANK}, got {self.rank}"
            )

    @classmethod
    def v1(cls, rank: int = DEFAULT_RANK) -> Ruleset:
        """Original rules: no starbase attacks, cubic energy cost."""
        return cls(
            name="v1",
            rank=rank,
            enable_starbase_attacks=False,
            nav_energy_model=NavEnergyModel.CUBIC,
        )

    @classmethod
    def v2(cls, rank: int = DEFAULT_RANK) -> Ruleset:
        """Super Star Trek II rules: starbase attacks, linear energy cost."""
        return cls(name="v2", rank=rank)

    def navigation_energy(self, warp: float, num_sectors: int) -> float:
        """
        Energy required for a maneuver under this rule set.

        Args:
            warp: Requested warp factor.
            num_sectors: Sectors the maneuver will traverse.

        Returns:
            Energy units the maneuver costs.
        """
        if self.nav_energy_model is NavEnergyModel.CUBIC:
            return float(int(warp ** 3 * 10 + 10))
        return float(num_sectors + 10)


PRESETS = {
    "v1": Ruleset.v1,
    "v2": Ruleset.v2,
}


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_ruleset(env: Optional[dict] = None) -> Ruleset:
    """
    Build a Ruleset from environment variables.

    Reads a .env file first (if present). Recognised variables:
        STARTREK_RULESET: preset name, "v1" or "v2" (default "v2")
        STARTREK_RANK: captain rank 1-12
        STARTREK_STARBASE_ATTACKS: override the preset's attack toggle
        STARTREK_NAV_ENERGY: "sectors" or "cubic"

    Args:
        env: Mapping to read instead of os.environ (for tests).

    Returns:
        The configured Ruleset.
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    preset_name = env.get("STARTREK_RULESET", "v2").strip().lower()
    if preset_name not in PRESETS:
        raise ValueError(
            f"Unknown rule set '{preset_name}'. Choose from: {', '.join(PRESETS)}"
        )

    rank = int(env.get("STARTREK_RANK", DEFAULT_RANK))
    ruleset = PRESETS[preset_name](rank=rank)

    attacks = env.get("STARTREK_STARBASE_ATTACKS")
    energy_model = env.get("STARTREK_NAV_ENERGY")
    if attacks is None and energy_model is None:
        return ruleset

    return Ruleset(
        name=ruleset.name,
        rank=ruleset.rank,
        enable_starbase_attacks=(
            _env_flag(attacks) if attacks is not None else ruleset.enable_starbase_attacks
        ),
        nav_energy_model=(
            NavEnergyModel(energy_model.strip().lower())
            if energy_model is not None else ruleset.nav_energy_model
        ),
    )


def override_ruleset(
    ruleset: Ruleset,
    preset: Optional[str] = None,
    rank: Optional[int] = None,
) -> Ruleset:
    """
    Apply command line overrides on top of a loaded Ruleset.

    Toggles loaded from the environment survive unless a different preset
    is picked, which brings its own toggles.

    Args:
        ruleset: Ruleset from load_ruleset().
        preset: Preset name to switch to.
        rank: Captain rank to play at.

    Returns:
        The resulting Ruleset.
    """
    if preset is not None and preset != ruleset.name:
        if preset not in PRESETS:
            raise ValueError(
                f"Unknown rule set '{preset}'. Choose from: {', '.join(PRESETS)}"
            )
        ruleset = PRESETS[preset](rank=ruleset.rank)
    if rank is not None:
        ruleset = replace(ruleset, rank=rank)
    return ruleset


def load_seed(env: Optional[dict] = None) -> Optional[int]:
    """Read STARTREK_SEED from the environment, or None when unset."""
    if env is None:
        load_dotenv()
        env = dict(os.environ)
    seed = env.get("STARTREK_SEED")
    return int(seed) if seed not in (None, "") else None

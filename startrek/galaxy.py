"""
Galaxy generation and quadrant population.

The galaxy is an 8x8 grid of quadrants. Each quadrant is stored as a
single integer encoding its contents:

    klingons * 100 + starbases * 10 + stars

Only counts are kept at galaxy scale. Concrete sector positions exist
only for the quadrant the ship is currently in, and they are rolled fresh
every time the ship enters a quadrant (positions are not remembered).
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from .config import (
    GALAXY_SIZE,
    SECTOR_SIZE,
    KLINGON_BASE_ENERGY,
    KLINGON_1_THRESHOLD,
    KLINGON_2_THRESHOLD,
    KLINGON_3_THRESHOLD,
    STARBASE_THRESHOLD,
    MIN_MISSION_DAYS,
    MISSION_DAYS_SPREAD,
)


# =============================================================================
# REGION NAMES
# =============================================================================

WEST_REGION_NAMES = [
    "ANTARES", "RIGEL", "PROCYON", "VEGA",
    "CANOPUS", "ALTAIR", "SAGITTARIUS", "POLLUX",
]
EAST_REGION_NAMES = [
    "SIRIUS", "DENEB", "CAPELLA", "BETELGEUSE",
    "ALDEBARAN", "REGULUS", "ARCTURUS", "SPICA",
]
ROMAN_NUMERALS = ["I", "II", "III", "IV"]


def region_name(x: int, y: int, include_roman: bool = True) -> str:
    """
    Name of the galactic region containing quadrant (x, y).

    The western half (columns 1-4) and eastern half (columns 5-8) of each
    row share a star name; the column within the half picks I-IV.

    Args:
        x: Quadrant column (0-7).
        y: Quadrant row (0-7).
        include_roman: Append the I-IV sub-region numeral.

    Returns:
        Region name such as "ANTARES IV".
    """
    names = WEST_REGION_NAMES if x < GALAXY_SIZE // 2 else EAST_REGION_NAMES
    name = names[y] if 0 <= y < len(names) else "UNKNOWN"
    if include_roman:
        name += " " + ROMAN_NUMERALS[x % 4]
    return name


# =============================================================================
# CELL ENCODING
# =============================================================================

def encode_cell(klingons: int, starbases: int, stars: int) -> int:
    """Pack quadrant contents into the K*100 + B*10 + S format."""
    return klingons * 100 + starbases * 10 + stars


def decode_cell(value: int) -> tuple[int, int, int]:
    """Unpack a quadrant cell into (klingons, starbases, stars)."""
    return value // 100, (value % 100) // 10, value % 10


def galaxy_totals(grid: list[list[int]]) -> tuple[int, int, int]:
    """Sum each component over the whole grid."""
    klingons = starbases = stars = 0
    for column in grid:
        for value in column:
            k, b, s = decode_cell(value)
            klingons += k
            starbases += b
            stars += s
    return klingons, starbases, stars


def empty_grid() -> list[list[int]]:
    return [[0] * GALAXY_SIZE for _ in range(GALAXY_SIZE)]


# =============================================================================
# LOCAL ENTITIES
# =============================================================================

@dataclass
class Klingon:
    """A Klingon battle cruiser in the current quadrant."""
    x: int
    y: int
    energy: float


@dataclass(frozen=True)
class Starbase:
    """A Federation starbase in the current quadrant."""
    x: int
    y: int


@dataclass(frozen=True)
class Star:
    """An inert star in the current quadrant."""
    x: int
    y: int


@dataclass
class Quadrant:
    """
    Concrete contents of the quadrant the ship occupies.

    Attributes:
        klingons: Living Klingon cruisers, in placement order.
        starbases: Starbases in this quadrant.
        stars: Stars in this quadrant.
    """
    klingons: list[Klingon] = field(default_factory=list)
    starbases: list[Starbase] = field(default_factory=list)
    stars: list[Star] = field(default_factory=list)

    def klingon_at(self, x: int, y: int) -> Optional[Klingon]:
        return next((k for k in self.klingons if k.x == x and k.y == y), None)

    def starbase_at(self, x: int, y: int) -> Optional[Starbase]:
        return next((b for b in self.starbases if b.x == x and b.y == y), None)

    def star_at(self, x: int, y: int) -> Optional[Star]:
        return next((s for s in self.stars if s.x == x and s.y == y), None)

    def is_occupied(self, x: int, y: int) -> bool:
        """True if a Klingon, starbase or star sits in sector (x, y)."""
        return (
            self.klingon_at(x, y) is not None
            or self.starbase_at(x, y) is not None
            or self.star_at(x, y) is not None
        )

    def starbase_adjacent(self, x: int, y: int) -> bool:
        """True if a starbase lies in any of the 8 sectors around (x, y)."""
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if self.starbase_at(x + dx, y + dy) is not None:
                    return True
        return False

    def positions(self) -> list[tuple[int, int]]:
        """All occupied sectors."""
        return (
            [(k.x, k.y) for k in self.klingons]
            + [(b.x, b.y) for b in self.starbases]
            + [(s.x, s.y) for s in self.stars]
        )


# =============================================================================
# GALAXY GENERATION
# =============================================================================

@dataclass
class GalaxyLayout:
    """
    A freshly generated galaxy and the ship's starting point.

    Attributes:
        grid: 8x8 encoded quadrant grid, indexed grid[x][y].
        total_klingons: Klingons in the whole galaxy.
        total_starbases: Starbases in the whole galaxy.
        stardate_start: Mission start stardate.
        stardate_end: Mission deadline stardate.
        quad_x, quad_y: Ship starting quadrant.
        sect_x, sect_y: Ship starting sector.
    """
    grid: list[list[int]]
    total_klingons: int
    total_starbases: int
    stardate_start: float
    stardate_end: float
    quad_x: int
    quad_y: int
    sect_x: int
    sect_y: int

    @property
    def mission_days(self) -> float:
        return self.stardate_end - self.stardate_start


class GalaxyGenerator:
    """
    Scatters Klingons, starbases and stars over the galaxy grid.

    Per quadrant: roughly 20% chance of one Klingon, 5% of two, 2% of
    three; 4% chance of a starbase; 1-8 stars. At least one starbase is
    always present.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _roll_klingons(self) -> int:
        r = self.rng.random()
        if r > KLINGON_3_THRESHOLD:
            return 3
        if r > KLINGON_2_THRESHOLD:
            return 2
        if r > KLINGON_1_THRESHOLD:
            return 1
        return 0

    def generate(self) -> GalaxyLayout:
        """
        Build a new galaxy, mission window and ship position.

        Returns:
            The generated GalaxyLayout.
        """
        rng = self.rng
        stardate_start = float(int(rng.random() * 20 + 20) * 100)
        duration = MIN_MISSION_DAYS + int(rng.random() * MISSION_DAYS_SPREAD)

        quad_x = int(rng.random() * GALAXY_SIZE)
        quad_y = int(rng.random() * GALAXY_SIZE)
        sect_x = int(rng.random() * SECTOR_SIZE)
        sect_y = int(rng.random() * SECTOR_SIZE)

        grid = empty_grid()
        total_klingons = 0
        total_starbases = 0
        for x in range(GALAXY_SIZE):
            for y in range(GALAXY_SIZE):
                klingons = self._roll_klingons()
                starbases = 1 if rng.random() > STARBASE_THRESHOLD else 0
                stars = int(rng.random() * 8) + 1
                total_klingons += klingons
                total_starbases += starbases
                grid[x][y] = encode_cell(klingons, starbases, stars)

        # Enough time to kill every Klingon at one per day
        if total_klingons > duration:
            duration = total_klingons + 1

        if total_starbases == 0:
            bx = int(rng.random() * GALAXY_SIZE)
            by = int(rng.random() * GALAXY_SIZE)
            grid[bx][by] += 10
            total_starbases = 1

        return GalaxyLayout(
            grid=grid,
            total_klingons=total_klingons,
            total_starbases=total_starbases,
            stardate_start=stardate_start,
            stardate_end=stardate_start + duration,
            quad_x=quad_x,
            quad_y=quad_y,
            sect_x=sect_x,
            sect_y=sect_y,
        )


# =============================================================================
# QUADRANT POPULATION
# =============================================================================

class QuadrantPopulator:
    """Expands a quadrant cell into concretely placed local entities."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _find_empty(self, quadrant: Quadrant, ship_x: int, ship_y: int) -> tuple[int, int]:
        while True:
            x = int(self.rng.random() * SECTOR_SIZE)
            y = int(self.rng.random() * SECTOR_SIZE)
            if (x, y) == (ship_x, ship_y):
                continue
            if not quadrant.is_occupied(x, y):
                return x, y

    def populate(self, cell: int, ship_x: int, ship_y: int) -> Quadrant:
        """
        Place the cell's Klingons, starbases and stars in distinct sectors.

        Args:
            cell: Encoded quadrant contents.
            ship_x: Ship sector column (kept free).
            ship_y: Ship sector row (kept free).

        Returns:
            The populated Quadrant.
        """
        klingons, starbases, stars = decode_cell(cell)
        quadrant = Quadrant()

        for _ in range(klingons):
            x, y = self._find_empty(quadrant, ship_x, ship_y)
            energy = KLINGON_BASE_ENERGY * (0.5 + self.rng.random())
            quadrant.klingons.append(Klingon(x=x, y=y, energy=energy))

        for _ in range(starbases):
            x, y = self._find_empty(quadrant, ship_x, ship_y)
            quadrant.starbases.append(Starbase(x=x, y=y))

        for _ in range(stars):
            x, y = self._find_empty(quadrant, ship_x, ship_y)
            quadrant.stars.append(Star(x=x, y=y))

        return quadrant

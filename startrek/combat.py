"""
Combat mechanics for the Star Trek simulation engine.

This module resolves:
- Phaser fire: energy split evenly across every Klingon in the quadrant,
  attenuated by distance, with a minimum effective hit
- Photon torpedoes: a straight trigonometric flight that stops at the
  first occupied sector
- Klingon return fire against the ship's shields

The combat resolver never prices movement or advances repairs; those
belong to navigation and damage control.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .config import (
    COMBAT_TICK,
    PHASER_MIN_HIT_FRACTION,
    SECTOR_SIZE,
    TORPEDO_ENERGY_COST,
    TORPEDO_MAX_STEPS,
)
from .damage import Device
from .galaxy import Klingon

if TYPE_CHECKING:
    from .engine import StarTrekGame


NO_ENEMY_LINES = (
    "SCIENCE OFFICER SPOCK REPORTS  'SENSORS SHOW NO ENEMY SHIPS",
    "                                IN THIS QUADRANT'",
)


@dataclass(frozen=True)
class SectorCoord:
    """A sector position, as returned for UI path/target animation."""
    x: int
    y: int


def sector_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two sectors."""
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def is_valid_torpedo_course(course: float) -> bool:
    """Torpedoes accept courses in [1, 9)."""
    return not math.isnan(course) and 1 <= course < 9


def torpedo_direction(course: float) -> tuple[float, float]:
    """
    Unit (dx, dy) step for a torpedo course.

    Unlike warp navigation, torpedoes use true polar direction:
    angle = (1 - course) * 45 degrees, with rows growing southward.
    """
    angle = (1 - course) * (math.pi / 4)
    return math.cos(angle), math.sin(angle)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class CombatResolver:
    """
    Resolves weapons fire between the ship and the Klingons in its quadrant.

    All randomness comes from the game's injected random generator.
    """

    def __init__(self, game: StarTrekGame):
        self.game = game

    @property
    def rng(self):
        return self.game.rng

    # -------------------------------------------------------------------------
    # Phasers
    # -------------------------------------------------------------------------

    def phasers_available(self) -> bool:
        """Check the phaser preconditions, logging the reason on failure."""
        game = self.game
        if game.damage.is_damaged(Device.PHASER_CONTROL):
            game.log.print("PHASERS INOPERATIVE")
            return False
        if not game.quadrant.klingons:
            for line in NO_ENEMY_LINES:
                game.log.print(line)
            return False
        return True

    def execute_phasers(self, amount: float) -> list[SectorCoord]:
        """
        Fire phasers, dividing `amount` energy across all local Klingons.

        Per target: damage = floor((amount / count / distance) * (rand + 2)).
        Hits at or below 15% of the target's energy do nothing.

        Args:
            amount: Energy units to fire.

        Returns:
            Sectors of the Klingons targeted (empty when rejected).
        """
        game = self.game
        log = game.log
        if not self.phasers_available():
            return []
        if math.isnan(amount) or amount <= 0:
            return []
        if amount > game.ship.energy:
            log.print("ENERGY AVAILABLE EXCEEDED.")
            return []

        targets = [SectorCoord(k.x, k.y) for k in game.quadrant.klingons]

        game.ship.energy -= amount
        game.clock.advance_time(COMBAT_TICK)
        if game.is_ended:
            return targets

        log.print(f"PHASERS FIRED: {amount:g} UNITS.")
        per_klingon = amount / len(game.quadrant.klingons)

        for klingon in list(reversed(game.quadrant.klingons)):
            distance = sector_distance(game.ship.sect_x, game.ship.sect_y, klingon.x, klingon.y)
            damage = math.floor((per_klingon / distance) * (self.rng.random() + 2))

            if damage <= PHASER_MIN_HIT_FRACTION * klingon.energy:
                log.print(f"SENSORS SHOW NO DAMAGE TO ENEMY AT {klingon.x + 1},{klingon.y + 1}")
                continue

            log.print(f"{damage} UNIT HIT ON KLINGON AT SECTOR {klingon.x + 1},{klingon.y + 1}")
            klingon.energy -= damage
            if klingon.energy <= 0:
                self.destroy_klingon(klingon)
                if game.is_ended:
                    return targets
            else:
                log.print(f"   (SENSORS SHOW {math.floor(klingon.energy)} UNITS REMAINING)")

        self.klingons_move_and_fire()
        return targets

    # -------------------------------------------------------------------------
    # Photon torpedoes
    # -------------------------------------------------------------------------

    def torpedoes_available(self) -> bool:
        """Check the torpedo preconditions, logging the reason on failure."""
        game = self.game
        if game.ship.torpedoes <= 0:
            game.log.print("ALL PHOTON TORPEDOES EXPENDED")
            return False
        if game.damage.is_damaged(Device.PHOTON_TUBES):
            game.log.print("PHOTON TUBES ARE NOT OPERATIONAL")
            return False
        if game.ship.energy < TORPEDO_ENERGY_COST:
            game.log.print("ENGINEERING REPORTS   'INSUFFICIENT ENERGY AVAILABLE")
            game.log.print("                       TO FIRE PHOTON TORPEDOES!'")
            return False
        return True

    def execute_torpedo(self, course: float) -> Optional[list[SectorCoord]]:
        """
        Launch a photon torpedo along `course`.

        The torpedo steps up to 10 sectors, rounding to the nearest sector
        each step, and stops at the first Klingon (destroyed), star
        (absorbed) or starbase (destroyed, court-martial). Leaving the
        quadrant is a miss.

        Args:
            course: Course in [1, 9).

        Returns:
            The sectors traversed, or None when the launch was rejected.
        """
        game = self.game
        log = game.log
        if not self.torpedoes_available():
            return None
        if not is_valid_torpedo_course(course):
            log.print("ENSIGN CHEKOV REPORTS,  'INCORRECT COURSE DATA, SIR!'")
            return None

        game.ship.energy -= TORPEDO_ENERGY_COST
        game.ship.torpedoes -= 1

        game.clock.advance_time(COMBAT_TICK)
        if game.is_ended:
            return None

        dx, dy = torpedo_direction(course)
        log.print("TORPEDO TRACK:")

        x = float(game.ship.sect_x)
        y = float(game.ship.sect_y)
        path: list[SectorCoord] = []

        for _ in range(TORPEDO_MAX_STEPS):
            x += dx
            y += dy
            rx = _round_half_up(x)
            ry = _round_half_up(y)

            if not (0 <= rx < SECTOR_SIZE and 0 <= ry < SECTOR_SIZE):
                log.print("TORPEDO MISSED")
                break

            path.append(SectorCoord(rx, ry))
            log.print(f"               {rx + 1},{ry + 1}")

            klingon = game.quadrant.klingon_at(rx, ry)
            if klingon is not None:
                self.destroy_klingon(klingon)
                break

            if game.quadrant.star_at(rx, ry) is not None:
                log.print(f"STAR AT {rx + 1},{ry + 1} ABSORBED TORPEDO ENERGY.")
                break

            starbase = game.quadrant.starbase_at(rx, ry)
            if starbase is not None:
                log.print("*** STARBASE DESTROYED ***")
                game.quadrant.starbases.remove(starbase)
                game.adjust_galaxy_cell(game.ship.quad_x, game.ship.quad_y, -10)
                game.total_starbases -= 1
                game.relieve_of_command()
                break
        else:
            log.print("TORPEDO MISSED")

        self.klingons_move_and_fire()
        return path

    # -------------------------------------------------------------------------
    # Shared resolution
    # -------------------------------------------------------------------------

    def destroy_klingon(self, klingon: Klingon) -> None:
        """Remove a Klingon from the quadrant and galaxy; win if it was the last."""
        game = self.game
        game.log.print("*** KLINGON DESTROYED ***")
        game.quadrant.klingons.remove(klingon)
        game.total_klingons -= 1
        game.adjust_galaxy_cell(game.ship.quad_x, game.ship.quad_y, -100)
        if game.total_klingons <= 0:
            game.win_game()

    def klingons_move_and_fire(self) -> None:
        """
        Every surviving Klingon in the quadrant fires on the ship.

        hit = floor((energy / distance) * (2 + rand)); the shot drains the
        Klingon's energy by a factor of (3 + rand). Shields below zero
        destroy the ship and stop the volley.
        """
        game = self.game
        if game.is_ended or not game.quadrant.klingons:
            return

        ship = game.ship
        for klingon in game.quadrant.klingons:
            if game.is_ended:
                break
            distance = sector_distance(ship.sect_x, ship.sect_y, klingon.x, klingon.y)
            hit = math.floor((klingon.energy / distance) * (2 + self.rng.random()))
            ship.shields -= hit
            klingon.energy /= 3 + self.rng.random()

            game.log.print(f"{hit} UNIT HIT ON ENTERPRISE FROM SECTOR {klingon.x + 1},{klingon.y + 1}")
            if ship.shields < 0:
                game.log.print("      <SHIELDS DOWN TO 0 UNITS>")
                game.destroy_ship()
                break
            game.log.print(f"      <SHIELDS DOWN TO {math.floor(ship.shields)} UNITS>")

"""
Mission clock and the "starbase under attack" sub-mechanic.

Every time the clock advances:
1. Past the mission deadline the game is lost immediately.
2. An active starbase attack whose deadline passed destroys that
   starbase (losing the last one loses the game); an attack still in
   progress reports the time left.
3. With no attack active, a new one starts with probability 0.01 * rank
   against a random starbase. The rescue window shrinks with rank and
   grows with the ship's distance from the target.

An attack is rescued by entering the target quadrant before its deadline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .config import GALAXY_SIZE
from .galaxy import decode_cell

if TYPE_CHECKING:
    from .engine import StarTrekGame


# Rescue window: 0.09 * distance * (10 - rank) + 1 stardates
RESCUE_TIME_FACTOR = 0.09
RESCUE_TIME_BUFFER = 1.0
ATTACK_CHANCE_PER_RANK = 0.01


@dataclass
class StarbaseAttack:
    """
    A starbase being attacked somewhere in the galaxy.

    Attributes:
        quad_x: Quadrant column of the starbase.
        quad_y: Quadrant row of the starbase.
        deadline: Stardate by which the ship must arrive.
        active: False once rescued or destroyed.
    """
    quad_x: int
    quad_y: int
    deadline: float
    active: bool = True


class MissionClock:
    """
    Tracks the stardate and the mission deadline.

    Attributes:
        stardate: Current stardate.
        stardate_start: Stardate the mission began.
        stardate_end: Mission deadline.
        starbase_attack: The current or most recent starbase attack.
    """

    def __init__(self, game: StarTrekGame):
        self.game = game
        self.stardate: float = 0.0
        self.stardate_start: float = 0.0
        self.stardate_end: float = 0.0
        self.starbase_attack: Optional[StarbaseAttack] = None

    def reset(self, stardate_start: float, stardate_end: float) -> None:
        self.stardate = stardate_start
        self.stardate_start = stardate_start
        self.stardate_end = stardate_end
        self.starbase_attack = None

    @property
    def days_left(self) -> float:
        return self.stardate_end - self.stardate

    @property
    def elapsed(self) -> float:
        return self.stardate - self.stardate_start

    @property
    def active_attack(self) -> Optional[StarbaseAttack]:
        if self.starbase_attack is not None and self.starbase_attack.active:
            return self.starbase_attack
        return None

    def advance_time(self, time: float) -> None:
        """
        Move the clock forward and run the per-turn time effects.

        Args:
            time: Stardates to add.
        """
        game = self.game
        if game.is_ended:
            return
        self.stardate += time
        if self.stardate > self.stardate_end:
            game.lose_mission_time()
            return
        if game.ruleset.enable_starbase_attacks:
            self.check_for_starbase_attack()

    # -------------------------------------------------------------------------
    # Starbase attacks
    # -------------------------------------------------------------------------

    def check_for_starbase_attack(self) -> None:
        """Resolve an ongoing attack, or roll for a new one."""
        attack = self.active_attack
        if attack is not None:
            if self.stardate > attack.deadline:
                self._destroy_attacked_starbase(attack)
            else:
                self.game.log.print(
                    f"{attack.deadline - self.stardate:.1f} STARDATES LEFT TO SAVE STARBASE."
                )
            return
        self._maybe_start_attack()

    def check_rescue(self, quad_x: int, quad_y: int) -> bool:
        """
        Mark the active attack rescued if the ship just entered its quadrant.

        Returns:
            True if a starbase was saved.
        """
        attack = self.active_attack
        if attack is None or (attack.quad_x, attack.quad_y) != (quad_x, quad_y):
            return False
        attack.active = False
        self.game.log.print("YOU ARRIVED IN TIME! STARBASE SAVED!")
        return True

    def _destroy_attacked_starbase(self, attack: StarbaseAttack) -> None:
        game = self.game
        game.log.print("TOO LATE! STARBASE DESTROYED.")
        attack.active = False
        game.remove_starbase(attack.quad_x, attack.quad_y)

        if game.total_starbases == 0:
            game.log.print("THE FEDERATION HAS LOST ALL STARBASES.")
            game.log.print("THE EMPIRE CANNOT SURVIVE.")
            game.lose_all_starbases()

    def _maybe_start_attack(self) -> None:
        game = self.game
        rng = game.rng
        if rng.random() > ATTACK_CHANCE_PER_RANK * game.ruleset.rank:
            return
        if game.total_starbases == 0:
            return

        bases = [
            (x, y)
            for x in range(GALAXY_SIZE)
            for y in range(GALAXY_SIZE)
            if decode_cell(game.galaxy[x][y])[1] > 0
        ]
        if not bases:
            return

        target_x, target_y = bases[int(rng.random() * len(bases))]
        distance = math.hypot(game.ship.quad_x - target_x, game.ship.quad_y - target_y)
        time_to_save = (
            RESCUE_TIME_FACTOR * distance * (10 - game.ruleset.rank) + RESCUE_TIME_BUFFER
        )

        self.starbase_attack = StarbaseAttack(
            quad_x=target_x,
            quad_y=target_y,
            deadline=self.stardate + time_to_save,
        )
        game.log.print(
            f"!!! STARBASE IN QUADRANT {target_x + 1},{target_y + 1} IS UNDER ATTACK!!"
        )
        game.log.print(f"YOU HAVE {time_to_save:.1f} STARDATES TO SAVE IT!")

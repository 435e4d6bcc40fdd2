"""
Game aggregate for the Star Trek simulation engine.

StarTrekGame owns every piece of mutable state (ship, galaxy, local
quadrant, damage, clock, log) and wires the components that mutate it:

    CommandDispatcher -> NavigationEngine / CombatResolver / DamageModel
                      -> MissionClock -> EventLog -> subscribers

Usage:
    game = StarTrekGame(seed=1234)
    game.subscribe(lambda line: print(line.text))
    game.process_input("NAV")
    game.process_input("1")
    game.process_input("0.5")

    game.get_mission_stats()   # pure snapshot for a UI

Execution is synchronous: one call runs all of its cascading effects
before returning.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .clock import MissionClock, StarbaseAttack
from .combat import NO_ENEMY_LINES, CombatResolver, SectorCoord
from .config import (
    GALAXY_SIZE,
    INITIAL_ENERGY,
    INITIAL_TORPEDOES,
    LOW_ENERGY_FRACTION,
    LOW_SHIELDS_WARNING,
    SECTOR_SIZE,
    Ruleset,
)
from .damage import DamageModel, DamageReportItem, Device
from .dispatcher import AwaitingCoordA, AwaitingRepairConfirm, CommandDispatcher
from .events import EventLog, LogLine, LogListener
from .galaxy import (
    GalaxyGenerator,
    Quadrant,
    QuadrantPopulator,
    empty_grid,
    region_name,
)
from .navigation import NavigationEngine


# Starbase repair order: random extra time and cap
REPAIR_ORDER_RANDOM_TIME = 0.5
REPAIR_ORDER_MAX_TIME = 0.9
REPAIR_ORDER_SETUP_TIME = 0.1

LRS_OUT_OF_BOUNDS = -1


# =============================================================================
# STATE TYPES
# =============================================================================

class GameStatus(Enum):
    """Top-level engine state."""
    INIT = auto()
    COMMAND = auto()
    ENDED = auto()


class GameOutcome(Enum):
    """How a finished game ended."""
    VICTORY = "victory"
    SHIP_DESTROYED = "ship_destroyed"
    TIME_EXPIRED = "time_expired"
    STARBASES_LOST = "starbases_lost"
    RELIEVED_OF_COMMAND = "relieved_of_command"
    RESIGNED = "resigned"


class Condition(Enum):
    """Ship alert condition shown on the short range scan."""
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "*RED*"
    DOCKED = "DOCKED"


@dataclass
class ShipState:
    """
    The ship's resources and position.

    Attributes:
        energy: Main energy reserve.
        energy_max: Energy restored when docking.
        shields: Energy committed to the deflector shields.
        torpedoes: Photon torpedoes aboard.
        docked: True while next to a starbase.
        quad_x, quad_y: Quadrant position (0-7).
        sect_x, sect_y: Sector position inside the quadrant (0-7).
    """
    energy: float = INITIAL_ENERGY
    energy_max: float = INITIAL_ENERGY
    shields: float = 0.0
    torpedoes: int = INITIAL_TORPEDOES
    docked: bool = False
    quad_x: int = 0
    quad_y: int = 0
    sect_x: int = 0
    sect_y: int = 0

    @property
    def total_energy(self) -> float:
        return self.energy + self.shields


# =============================================================================
# SNAPSHOTS
# =============================================================================

@dataclass(frozen=True)
class SectorEntity:
    """A local entity position (energy only set for Klingons)."""
    x: int
    y: int
    energy: Optional[float] = None


@dataclass(frozen=True)
class SectorData:
    """Ship position and local entities of the current quadrant."""
    x: int
    y: int
    klingons: tuple[SectorEntity, ...] = field(default_factory=tuple)
    starbases: tuple[SectorEntity, ...] = field(default_factory=tuple)
    stars: tuple[SectorEntity, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MissionStats:
    """Mission progress summary."""
    stardate: float
    stardate_end: float
    days_left: float
    klingons_left: int
    klingons_start: int
    starbases: int
    dock_status: bool
    condition: str


@dataclass(frozen=True)
class StarbaseAttackInfo:
    """Public view of an active starbase attack."""
    quad_x: int
    quad_y: int
    deadline: float


# =============================================================================
# GAME
# =============================================================================

class StarTrekGame:
    """
    The simulation context: one game, one owner, no shared state.

    Attributes:
        ruleset: Active rule set (v1/v2 toggles, rank).
        rng: Injected random generator; the only source of randomness.
        log: Narrative event log.
        status: INIT, COMMAND or ENDED.
        outcome: Why the game ended (None while running).
        ship: Ship resources and position.
        galaxy: Encoded 8x8 quadrant grid, indexed [x][y].
        known_galaxy: What the player has observed (0 = unknown).
        quadrant: Concrete entities of the ship's quadrant.
        total_klingons: Klingons left in the galaxy.
        total_starbases: Starbases left in the galaxy.
        start_klingons: Klingons at mission start.
    """

    def __init__(
        self,
        ruleset: Optional[Ruleset] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        auto_init: bool = True,
    ) -> None:
        """
        Create a game.

        Args:
            ruleset: Rule set to play under (default v2).
            rng: Random generator to use.
            seed: Seed for a new random generator when rng is not given.
            auto_init: Generate a galaxy immediately.
        """
        self.ruleset = ruleset or Ruleset.v2()
        self._rng = rng or random.Random(seed)
        self.log = EventLog()

        self.status = GameStatus.INIT
        self.outcome: Optional[GameOutcome] = None

        self.ship = ShipState()
        self.galaxy: list[list[int]] = empty_grid()
        self.known_galaxy: list[list[int]] = empty_grid()
        self.quadrant = Quadrant()
        self.total_klingons = 0
        self.total_starbases = 0
        self.start_klingons = 0

        self.damage = DamageModel(self.log, self._rng)
        self.clock = MissionClock(self)
        self.navigation = NavigationEngine(self)
        self.combat = CombatResolver(self)
        self.dispatcher = CommandDispatcher(self)

        self._generator = GalaxyGenerator(self._rng)
        self._populator = QuadrantPopulator(self._rng)

        if auto_init:
            self.init()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def init(self) -> None:
        """Start a new game: fresh galaxy, ship, clock and log."""
        self.log.clear()
        self.status = GameStatus.COMMAND
        self.outcome = None
        self.dispatcher.reset()
        self.damage.reset()

        layout = self._generator.generate()
        self.ship = ShipState(
            quad_x=layout.quad_x,
            quad_y=layout.quad_y,
            sect_x=layout.sect_x,
            sect_y=layout.sect_y,
        )
        self.galaxy = layout.grid
        self.known_galaxy = empty_grid()
        self.quadrant = Quadrant()
        self.total_klingons = layout.total_klingons
        self.total_starbases = layout.total_starbases
        self.start_klingons = layout.total_klingons
        self.clock.reset(layout.stardate_start, layout.stardate_end)

        self._print_orders()
        self.enter_quadrant()

    def _print_orders(self) -> None:
        log = self.log
        bases = self.total_starbases
        log.print("--- SUPER STAR TREK II ---" if self.ruleset.enable_starbase_attacks
                  else "--- SUPER STAR TREK ---")
        log.print("YOUR ORDERS ARE AS FOLLOWS:")
        log.print(f"     DESTROY THE {self.total_klingons} KLINGON WARSHIPS WHICH HAVE INVADED")
        log.print("   THE GALAXY BEFORE THEY CAN ATTACK FEDERATION HEADQUARTERS")
        log.print(
            f"   ON STARDATE {self.clock.stardate_end:.1f}   THIS GIVES YOU "
            f"{self.clock.stardate_end - self.clock.stardate_start:.1f} DAYS."
        )
        log.print(
            f"   THERE {'IS' if bases == 1 else 'ARE'} {bases} STARBASE{'' if bases == 1 else 'S'}"
            " IN THE GALAXY FOR RESUPPLYING YOUR SHIP"
        )
        log.print("")

    @property
    def rng(self) -> random.Random:
        return self._rng

    @rng.setter
    def rng(self, rng: random.Random) -> None:
        """Swap the random generator for every component that draws from it."""
        self._rng = rng
        self.damage.rng = rng
        self._generator.rng = rng
        self._populator.rng = rng

    @property
    def is_ended(self) -> bool:
        return self.status is GameStatus.ENDED

    @property
    def stardate(self) -> float:
        return self.clock.stardate

    def _end(self, outcome: GameOutcome) -> None:
        self.status = GameStatus.ENDED
        self.outcome = outcome

    def _print_defeat(self, reason: str) -> None:
        self.log.print("")
        self.log.print(f"IT IS STARDATE {self.clock.stardate:.1f}")
        self.log.print(reason)
        self.log.print(f"THERE WERE {self.total_klingons} KLINGON BATTLE CRUISERS LEFT.")

    def destroy_ship(self) -> None:
        self._print_defeat("THE ENTERPRISE HAS BEEN DESTROYED. THE FEDERATION WILL BE CONQUERED.")
        self._end(GameOutcome.SHIP_DESTROYED)

    def lose_mission_time(self) -> None:
        self._print_defeat("YOUR TIME HAS RUN OUT. THE FEDERATION WILL BE CONQUERED.")
        self._end(GameOutcome.TIME_EXPIRED)

    def lose_all_starbases(self) -> None:
        self._print_defeat("WITHOUT STARBASES THE FEDERATION WILL BE CONQUERED.")
        self._end(GameOutcome.STARBASES_LOST)

    def relieve_of_command(self) -> None:
        self.log.print("THAT DOES IT, CAPTAIN!!  YOU ARE HEREBY RELIEVED OF COMMAND")
        self.log.print("AND SENTENCED TO 99 STARDATES AT HARD LABOR ON CYGNUS 12!!")
        self._end(GameOutcome.RELIEVED_OF_COMMAND)

    def resign(self) -> None:
        self.log.print("COMMAND RESIGNED.")
        self._end(GameOutcome.RESIGNED)

    def win_game(self) -> None:
        self.log.print("")
        self.log.print("CONGRATULATION, CAPTAIN!  THE LAST KLINGON BATTLE CRUISER")
        self.log.print("MENACING THE FEDERATION HAS BEEN DESTROYED.")
        self.log.print(f"YOUR EFFICIENCY RATING IS {self.efficiency_rating()}")
        self._end(GameOutcome.VICTORY)

    def efficiency_rating(self) -> int:
        """1000 * (Klingons at start / stardates elapsed) squared."""
        elapsed = self.clock.elapsed
        if elapsed <= 0:
            return 0
        return math.floor(1000 * (self.start_klingons / elapsed) ** 2)

    # -------------------------------------------------------------------------
    # Galaxy bookkeeping
    # -------------------------------------------------------------------------

    def adjust_galaxy_cell(self, quad_x: int, quad_y: int, delta: int) -> None:
        """
        Change a galaxy cell and keep the player's record of it in step.

        The ship's own quadrant is always fully known; elsewhere the known
        record is only adjusted if the player has seen the cell.
        """
        self.galaxy[quad_x][quad_y] += delta
        if (quad_x, quad_y) == (self.ship.quad_x, self.ship.quad_y):
            self.known_galaxy[quad_x][quad_y] = self.galaxy[quad_x][quad_y]
        elif self.known_galaxy[quad_x][quad_y] != 0:
            self.known_galaxy[quad_x][quad_y] += delta

    def remove_starbase(self, quad_x: int, quad_y: int) -> None:
        """Destroy one starbase in a quadrant (used by starbase attacks)."""
        self.adjust_galaxy_cell(quad_x, quad_y, -10)
        self.total_starbases -= 1
        if (quad_x, quad_y) == (self.ship.quad_x, self.ship.quad_y) and self.quadrant.starbases:
            self.quadrant.starbases.pop()
            self.update_dock_status(suppress_logs=True)

    def enter_quadrant(self, suppress_logs: bool = False) -> None:
        """
        Populate the ship's quadrant and run the arrival checks.

        Local positions are rolled fresh on every entry.
        """
        ship = self.ship
        cell = self.galaxy[ship.quad_x][ship.quad_y]
        self.quadrant = self._populator.populate(cell, ship.sect_x, ship.sect_y)
        self.known_galaxy[ship.quad_x][ship.quad_y] = cell

        self.clock.check_rescue(ship.quad_x, ship.quad_y)

        if not suppress_logs:
            name = region_name(ship.quad_x, ship.quad_y)
            self.log.print("")
            if self.clock.stardate == self.clock.stardate_start:
                self.log.print("YOUR MISSION BEGINS WITH YOUR STARSHIP LOCATED")
                self.log.print(f"IN THE GALACTIC QUADRANT, '{name}'.")
            else:
                self.log.print(f"NOW ENTERING {name} QUADRANT . . .")

            if self.quadrant.klingons:
                self.log.print("")
                self.log.print("COMBAT AREA      CONDITION RED")
                if ship.shields <= LOW_SHIELDS_WARNING:
                    self.log.print("   SHIELDS DANGEROUSLY LOW")

        self.refresh_sensors(suppress_logs=suppress_logs)

    # -------------------------------------------------------------------------
    # Sensors
    # -------------------------------------------------------------------------

    def update_dock_status(self, suppress_logs: bool = False) -> None:
        """Dock (and resupply) when a starbase is in an adjacent sector."""
        ship = self.ship
        if self.quadrant.starbase_adjacent(ship.sect_x, ship.sect_y):
            if not ship.docked:
                if not suppress_logs:
                    self.log.print("SHIELDS DROPPED FOR DOCKING PURPOSES")
                ship.shields = 0.0
                ship.energy = ship.energy_max
                ship.torpedoes = INITIAL_TORPEDOES
            ship.docked = True
        else:
            ship.docked = False

    def refresh_sensors(self, suppress_logs: bool = False) -> None:
        """Docking check followed by a short range scan display."""
        self.update_dock_status(suppress_logs=suppress_logs)
        if not suppress_logs:
            self.print_short_range_scan()

    @property
    def condition(self) -> Condition:
        if self.ship.docked:
            return Condition.DOCKED
        if self.quadrant.klingons:
            return Condition.RED
        if self.ship.energy < self.ship.energy_max * LOW_ENERGY_FRACTION:
            return Condition.YELLOW
        return Condition.GREEN

    def print_short_range_scan(self) -> None:
        log = self.log
        if self.damage.is_damaged(Device.SHORT_RANGE_SENSORS):
            log.print("SHORT RANGE SENSORS ARE OUT")
            return

        ship = self.ship
        status_lines = [
            f"        STARDATE          {self.clock.stardate:.1f}",
            f"        CONDITION         {self.condition.value}",
            f"        QUADRANT          {ship.quad_x + 1},{ship.quad_y + 1}",
            f"        REGION            {region_name(ship.quad_x, ship.quad_y)}",
            f"        SECTOR            {ship.sect_x + 1},{ship.sect_y + 1}",
            f"        PHOTON TORPEDOES  {math.floor(ship.torpedoes)}",
            f"        TOTAL ENERGY      {math.floor(ship.total_energy)}",
            f"        SHIELDS           {math.floor(ship.shields)}",
            f"        KLINGONS REMAINING {self.total_klingons}",
        ]

        log.print("---------------------------------")
        for y in range(SECTOR_SIZE + 1):
            if y < SECTOR_SIZE:
                line = "".join(self._sector_symbol(x, y) for x in range(SECTOR_SIZE))
            else:
                line = " " * (SECTOR_SIZE * 3)
            log.print(line + status_lines[y])
        log.print("---------------------------------")

    def _sector_symbol(self, x: int, y: int) -> str:
        if (x, y) == (self.ship.sect_x, self.ship.sect_y):
            return "<*>"
        if self.quadrant.klingon_at(x, y) is not None:
            return "+K+"
        if self.quadrant.starbase_at(x, y) is not None:
            return ">!<"
        if self.quadrant.star_at(x, y) is not None:
            return " * "
        return "   "

    def short_range_scan(self) -> None:
        """SRS command: refresh docking and show the scan."""
        if self.damage.is_damaged(Device.SHORT_RANGE_SENSORS):
            self.log.print("SHORT RANGE SENSORS ARE OUT")
            return
        self.refresh_sensors()

    def long_range_scan(self) -> None:
        """LRS command: show and record the 3x3 neighbourhood."""
        log = self.log
        if self.damage.is_damaged(Device.LONG_RANGE_SENSORS):
            log.print("LONG RANGE SENSORS ARE INOPERABLE")
            return

        ship = self.ship
        log.print(f"LONG RANGE SCAN FOR QUADRANT {ship.quad_x + 1},{ship.quad_y + 1}")
        log.print("-------------------")
        for y in range(ship.quad_y - 1, ship.quad_y + 2):
            line = ""
            for x in range(ship.quad_x - 1, ship.quad_x + 2):
                if 0 <= x < GALAXY_SIZE and 0 <= y < GALAXY_SIZE:
                    self.known_galaxy[x][y] = self.galaxy[x][y]
                    line += f": {self.galaxy[x][y]:03d} "
                else:
                    line += ": *** "
            log.print(line + ":")
            log.print("-------------------")

    # -------------------------------------------------------------------------
    # Snapshot queries (side-effect free)
    # -------------------------------------------------------------------------

    def get_sector_data(self) -> SectorData:
        return SectorData(
            x=self.ship.sect_x,
            y=self.ship.sect_y,
            klingons=tuple(SectorEntity(k.x, k.y, k.energy) for k in self.quadrant.klingons),
            starbases=tuple(SectorEntity(b.x, b.y) for b in self.quadrant.starbases),
            stars=tuple(SectorEntity(s.x, s.y) for s in self.quadrant.stars),
        )

    def get_damage_report(self) -> list[DamageReportItem]:
        return self.damage.report()

    def get_mission_stats(self) -> MissionStats:
        return MissionStats(
            stardate=self.clock.stardate,
            stardate_end=self.clock.stardate_end,
            days_left=round(self.clock.days_left, 1),
            klingons_left=self.total_klingons,
            klingons_start=self.start_klingons,
            starbases=self.total_starbases,
            dock_status=self.ship.docked,
            condition=self.condition.value,
        )

    def get_lrs_data(self) -> Optional[list[list[int]]]:
        """
        Galaxy cells around the ship as rows (y) of columns (x).

        Returns:
            3x3 grid with -1 outside the galaxy, or None when the long
            range sensors are damaged.
        """
        if self.damage.is_damaged(Device.LONG_RANGE_SENSORS):
            return None
        ship = self.ship
        rows = []
        for y in range(ship.quad_y - 1, ship.quad_y + 2):
            row = []
            for x in range(ship.quad_x - 1, ship.quad_x + 2):
                if 0 <= x < GALAXY_SIZE and 0 <= y < GALAXY_SIZE:
                    row.append(self.galaxy[x][y])
                else:
                    row.append(LRS_OUT_OF_BOUNDS)
            rows.append(row)
        return rows

    def get_galaxy_map(self) -> list[list[int]]:
        """Copy of the known galaxy, indexed [x][y]."""
        return [list(column) for column in self.known_galaxy]

    def get_region_name(self, x: int, y: int, include_roman: bool = True) -> str:
        return region_name(x, y, include_roman)

    def get_active_starbase_attack(self) -> Optional[StarbaseAttackInfo]:
        attack: Optional[StarbaseAttack] = self.clock.active_attack
        if attack is None:
            return None
        return StarbaseAttackInfo(attack.quad_x, attack.quad_y, attack.deadline)

    # -------------------------------------------------------------------------
    # Log interface
    # -------------------------------------------------------------------------

    def get_output(self) -> list[LogLine]:
        return self.log.get_output()

    def get_full_log(self) -> list[LogLine]:
        return self.log.get_full_log()

    def subscribe(self, listener: LogListener) -> None:
        self.log.subscribe(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        self.log.unsubscribe(listener)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def process_input(self, text: str) -> None:
        """Feed one line of player input to the command dispatcher."""
        self.dispatcher.process_input(text)

    def repair_system(self, time: float) -> None:
        if self.is_ended:
            return
        self.damage.repair_system(time)

    def execute_nav(self, course: float, warp: float, suppress_logs: bool = False) -> None:
        if self.is_ended:
            return
        self.navigation.execute_nav(course, warp, suppress_logs)

    def execute_phasers(self, amount: float) -> list[SectorCoord]:
        if self.is_ended:
            return []
        return self.combat.execute_phasers(amount)

    def execute_torpedo(self, course: float) -> Optional[list[SectorCoord]]:
        if self.is_ended:
            return None
        return self.combat.execute_torpedo(course)

    def execute_shields(self, amount: float) -> None:
        """
        Set the shields to `amount`, drawing from or returning to energy.
        """
        if self.is_ended:
            return
        log = self.log
        ship = self.ship
        if self.damage.is_damaged(Device.SHIELD_CONTROL):
            log.print("SHIELD CONTROL INOPERABLE")
            return
        if math.isnan(amount) or amount < 0:
            log.print("<SHIELDS UNCHANGED>")
            return
        if amount > ship.total_energy:
            log.print("SHIELD CONTROL REPORTS  'THIS IS NOT THE FEDERATION TREASURY.'")
            log.print("<SHIELDS UNCHANGED>")
            return

        ship.energy = ship.total_energy - amount
        ship.shields = amount
        log.print("DEFLECTOR CONTROL ROOM REPORT:")
        log.print(f"  'SHIELDS NOW AT {ship.shields:g} UNITS PER YOUR COMMAND.'")

    def damage_control(self) -> None:
        """DAM command: device report, and a repair offer when docked."""
        if self.is_ended:
            return
        if self.damage.is_damaged(Device.DAMAGE_CONTROL):
            self.log.print("DAMAGE CONTROL REPORT NOT AVAILABLE")
        else:
            self.damage.print_report()

        if self.ship.docked and self.damage.damaged_devices():
            self.log.print("")
            self.log.print("TECHNICIANS STANDING BY TO EFFECT REPAIRS;")
            self.log.print(
                f"ESTIMATED TIME: {self.damage.estimated_repair_time():.2f} STARDATES"
            )
            self.dispatcher.prompt("AUTHORIZE REPAIR ORDER (Y/N)?", AwaitingRepairConfirm())

    def execute_repair_order(self) -> None:
        """Starbase technicians repair every device (docked only)."""
        if self.is_ended or not self.ship.docked:
            return
        damaged = len(self.damage.damaged_devices())
        if damaged == 0:
            return

        repair_time = 0.1 * damaged + REPAIR_ORDER_RANDOM_TIME * self.rng.random()
        if repair_time >= 1:
            repair_time = REPAIR_ORDER_MAX_TIME

        self.damage.repair_all()
        self.clock.advance_time(repair_time + REPAIR_ORDER_SETUP_TIME)
        if self.is_ended:
            return
        self.log.print("TECHNICIANS HAVE COMPLETED REPAIRS.")
        self.log.print(f"STARDATE IS NOW {self.clock.stardate:.1f}")

    def execute_rest(self, days: float) -> None:
        """Sit still for `days` stardates: repairs progress, Klingons fire."""
        if self.is_ended or math.isnan(days) or days <= 0:
            return
        self.clock.advance_time(days)
        if self.is_ended:
            return
        self.repair_system(days)
        self.combat.klingons_move_and_fire()
        if self.is_ended:
            return
        self.log.print(f"--- RESTING FOR {days:.1f} STARDATES ---")
        self.refresh_sensors(suppress_logs=True)

    # -------------------------------------------------------------------------
    # Library computer
    # -------------------------------------------------------------------------

    def print_computer_functions(self) -> None:
        log = self.log
        log.print("FUNCTIONS AVAILABLE FROM LIBRARY-COMPUTER:")
        log.print("   0 = CUMULATIVE GALACTIC RECORD")
        log.print("   1 = STATUS REPORT")
        log.print("   2 = PHOTON TORPEDO DATA")
        log.print("   3 = STARBASE NAV DATA")
        log.print("   4 = DIRECTION/DISTANCE CALCULATOR")
        log.print("   5 = GALAXY 'REGION NAME' MAP")

    def execute_computer(self, function: str) -> None:
        """
        Run a library-computer function.

        Args:
            function: "0"-"5". Function 4 prompts for two coordinate pairs.
        """
        if self.is_ended:
            return
        log = self.log
        if self.damage.is_damaged(Device.LIBRARY_COMPUTER):
            log.print("COMPUTER DISABLED")
            return

        function = function.strip()
        handlers = {
            "0": self._computer_galactic_record,
            "1": self._computer_status_report,
            "2": self._computer_torpedo_data,
            "3": self._computer_starbase_data,
            "4": self._computer_calculator,
            "5": self._computer_region_map,
        }
        handler = handlers.get(function)
        if handler is None:
            self.print_computer_functions()
            return
        handler()

    def _computer_galactic_record(self) -> None:
        log = self.log
        log.print("COMPUTER RECORD OF GALAXY")
        log.print("       1     2     3     4     5     6     7     8")
        log.print("     ----- ----- ----- ----- ----- ----- ----- -----")
        for y in range(GALAXY_SIZE):
            line = f"{y + 1}  "
            for x in range(GALAXY_SIZE):
                value = self.known_galaxy[x][y]
                line += f"   {value:03d}" if value != 0 else "   ***"
            log.print(line)

    def _computer_status_report(self) -> None:
        log = self.log
        log.print("   STATUS REPORT:")
        log.print(f"KLINGONS LEFT: {self.total_klingons}")
        log.print(f"MISSION MUST BE COMPLETED IN {self.clock.days_left:.1f} STARDATES")
        log.print(f"THE FEDERATION IS MAINTAINING {self.total_starbases} STARBASES IN THE GALAXY")
        self.damage.print_report()

    def _computer_torpedo_data(self) -> None:
        if not self.quadrant.klingons:
            for line in NO_ENEMY_LINES:
                self.log.print(line)
            return
        self.log.print("FROM ENTERPRISE TO KLINGON BATTLE CRUISER(S)")
        for k in self.quadrant.klingons:
            self.print_direction_distance(self.ship.sect_x, self.ship.sect_y, k.x, k.y)

    def _computer_starbase_data(self) -> None:
        if not self.quadrant.starbases:
            self.log.print("MR. SPOCK REPORTS,  'SENSORS SHOW NO STARBASES IN THIS")
            self.log.print(" QUADRANT.'")
            return
        self.log.print("FROM ENTERPRISE TO STARBASE:")
        for b in self.quadrant.starbases:
            self.print_direction_distance(self.ship.sect_x, self.ship.sect_y, b.x, b.y)

    def _computer_calculator(self) -> None:
        ship = self.ship
        self.log.print("DIRECTION/DISTANCE CALCULATOR:")
        self.log.print(
            f"YOU ARE AT QUADRANT {ship.quad_x + 1},{ship.quad_y + 1} "
            f"SECTOR {ship.sect_x + 1},{ship.sect_y + 1}"
        )
        self.dispatcher.prompt("PLEASE ENTER INITIAL COORDINATES (X,Y)", AwaitingCoordA())

    def _computer_region_map(self) -> None:
        log = self.log
        log.print("                        THE GALAXY")
        log.print("       1     2     3     4     5     6     7     8")
        log.print("     ----- ----- ----- ----- ----- ----- ----- -----")
        for y in range(GALAXY_SIZE):
            line = f"{y + 1}  "
            for x in range(GALAXY_SIZE):
                line += f"   {region_name(x, y, include_roman=False)[:3]:<3}"
            log.print(line)

    def execute_distance_calculator(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
    ) -> None:
        """Direction/distance between two 0-based sector coordinates."""
        if self.is_ended:
            return
        if any(math.isnan(v) for v in (*start, *end)):
            self.log.print("INVALID COORDINATES")
            return
        self.print_direction_distance(start[0], start[1], end[0], end[1])

    def print_direction_distance(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Log the torpedo course and distance from one sector to another."""
        dx = x2 - x1
        dy = y2 - y1
        course = 1 - math.atan2(dy, dx) / (math.pi / 4)
        if course < 1:
            course += 8
        self.log.print(f"DIRECTION = {course:.2f}")
        self.log.print(f"DISTANCE = {math.sqrt(dx * dx + dy * dy):.2f}")

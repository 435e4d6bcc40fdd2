"""
Command dispatcher: turns player input lines into engine operations.

A command token either runs at once (SRS, LRS, DAM, XXX, HELP) or asks a
question and parks a pending prompt. The pending prompt is consumed by
exactly the next input line:

    NAV  -> AwaitingCourse -> AwaitingWarp(course) -> execute_nav
    PHA  -> AwaitingPhaserUnits -> execute_phasers
    TOR  -> AwaitingTorpedoCourse -> execute_torpedo
    SHE  -> AwaitingShieldUnits -> execute_shields
    COM  -> AwaitingComputerFunction -> execute_computer
              (4) -> AwaitingCoordA -> AwaitingCoordB(start)
    DAM  -> AwaitingRepairConfirm (docked with damage only)

Prompts are plain frozen dataclasses so the dispatcher state can be
inspected and set directly in tests.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

from .damage import Device

if TYPE_CHECKING:
    from .engine import StarTrekGame


COMMAND_MENU = (
    "  NAV  (TO SET COURSE)",
    "  SRS  (FOR SHORT RANGE SENSOR SCAN)",
    "  LRS  (FOR LONG RANGE SENSOR SCAN)",
    "  PHA  (TO FIRE PHASERS)",
    "  TOR  (TO FIRE PHOTON TORPEDOES)",
    "  SHE  (TO RAISE OR LOWER SHIELDS)",
    "  DAM  (FOR DAMAGE CONTROL REPORTS)",
    "  COM  (TO CALL ON LIBRARY-COMPUTER)",
    "  XXX  (TO RESIGN YOUR COMMAND)",
)

_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^[+-]?\d+")


def parse_float(text: str) -> float:
    """Leading decimal number of `text`, or NaN if there is none."""
    match = _FLOAT_PREFIX.match(text.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


def parse_int(text: str) -> float:
    """Leading integer of `text` ("12.7" -> 12), or NaN if there is none."""
    match = _INT_PREFIX.match(text.strip())
    if match is None:
        return math.nan
    return float(int(match.group(0)))


def parse_coordinates(text: str) -> tuple[float, float]:
    """Parse a 1-based "X,Y" pair into 0-based values (NaN when unparseable)."""
    parts = text.split(",")
    if len(parts) < 2:
        return math.nan, math.nan
    return parse_float(parts[0]) - 1, parse_float(parts[1]) - 1


# =============================================================================
# PENDING PROMPTS
# =============================================================================

@dataclass(frozen=True)
class AwaitingCourse:
    """NAV asked for a course."""


@dataclass(frozen=True)
class AwaitingWarp:
    """NAV asked for a warp factor for an already entered course."""
    course: float


@dataclass(frozen=True)
class AwaitingPhaserUnits:
    """PHA asked how much energy to fire."""


@dataclass(frozen=True)
class AwaitingTorpedoCourse:
    """TOR asked for a course."""


@dataclass(frozen=True)
class AwaitingShieldUnits:
    """SHE asked for the new shield level."""


@dataclass(frozen=True)
class AwaitingComputerFunction:
    """COM asked for a function number."""


@dataclass(frozen=True)
class AwaitingCoordA:
    """Distance calculator asked for the initial coordinates."""


@dataclass(frozen=True)
class AwaitingCoordB:
    """Distance calculator asked for the final coordinates."""
    start: tuple[float, float]


@dataclass(frozen=True)
class AwaitingRepairConfirm:
    """DAM offered a starbase repair order."""


PendingPrompt = Union[
    AwaitingCourse,
    AwaitingWarp,
    AwaitingPhaserUnits,
    AwaitingTorpedoCourse,
    AwaitingShieldUnits,
    AwaitingComputerFunction,
    AwaitingCoordA,
    AwaitingCoordB,
    AwaitingRepairConfirm,
]


# =============================================================================
# DISPATCHER
# =============================================================================

class CommandDispatcher:
    """
    Turn-based command/prompt state machine.

    Attributes:
        pending: The prompt waiting for the next input line, if any.
    """

    def __init__(self, game: StarTrekGame):
        self.game = game
        self.pending: Optional[PendingPrompt] = None

        self._commands: dict[str, Callable[[], None]] = {
            "NAV": self._cmd_nav,
            "SRS": self.game.short_range_scan,
            "LRS": self.game.long_range_scan,
            "PHA": self._cmd_phasers,
            "TOR": self._cmd_torpedo,
            "SHE": self._cmd_shields,
            "DAM": self.game.damage_control,
            "COM": self._cmd_computer,
            "XXX": self.game.resign,
            "HELP": self.print_commands,
        }
        self._resumers: dict[type, Callable[[PendingPrompt, str], None]] = {
            AwaitingCourse: self._on_course,
            AwaitingWarp: self._on_warp,
            AwaitingPhaserUnits: self._on_phaser_units,
            AwaitingTorpedoCourse: self._on_torpedo_course,
            AwaitingShieldUnits: self._on_shield_units,
            AwaitingComputerFunction: self._on_computer_function,
            AwaitingCoordA: self._on_coord_a,
            AwaitingCoordB: self._on_coord_b,
            AwaitingRepairConfirm: self._on_repair_confirm,
        }

    def reset(self) -> None:
        self.pending = None

    def prompt(self, message: str, pending: PendingPrompt) -> None:
        """Ask a question and wait for the next input line."""
        self.game.log.print(message)
        self.pending = pending

    def print_commands(self) -> None:
        for line in COMMAND_MENU:
            self.game.log.print(line)

    def process_input(self, text: str) -> None:
        """
        Handle one line of player input.

        The line is echoed to the full log, then either answers the
        pending prompt or is looked up as a command token. Does nothing
        once the game has ended.
        """
        game = self.game
        if game.is_ended:
            return

        token = text.strip().upper()
        game.log.echo(token)

        if self.pending is not None:
            pending = self.pending
            self.pending = None
            self._resumers[type(pending)](pending, token)
            return

        handler = self._commands.get(token)
        if handler is None:
            game.log.print("ENTER ONE OF THE FOLLOWING:")
            self.print_commands()
            return
        handler()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def _cmd_nav(self) -> None:
        self.prompt("COURSE (1-9)", AwaitingCourse())

    def _cmd_phasers(self) -> None:
        game = self.game
        if not game.combat.phasers_available():
            return
        game.log.print(f"PHASERS LOCKED ON TARGET;  ENERGY AVAILABLE = {game.ship.energy:g}")
        self.prompt("NUMBER OF UNITS TO FIRE", AwaitingPhaserUnits())

    def _cmd_torpedo(self) -> None:
        if not self.game.combat.torpedoes_available():
            return
        self.prompt("PHOTON TORPEDO COURSE (1-9)", AwaitingTorpedoCourse())

    def _cmd_shields(self) -> None:
        game = self.game
        if game.damage.is_damaged(Device.SHIELD_CONTROL):
            game.log.print("SHIELD CONTROL INOPERABLE")
            return
        game.log.print(f"ENERGY AVAILABLE = {game.ship.total_energy:g}")
        self.prompt("NUMBER OF UNITS TO SHIELDS", AwaitingShieldUnits())

    def _cmd_computer(self) -> None:
        game = self.game
        if game.damage.is_damaged(Device.LIBRARY_COMPUTER):
            game.log.print("COMPUTER DISABLED")
            return
        game.print_computer_functions()
        self.prompt("COMPUTER ACTIVE AND AWAITING COMMAND", AwaitingComputerFunction())

    # -------------------------------------------------------------------------
    # Prompt continuations
    # -------------------------------------------------------------------------

    def _on_course(self, pending: AwaitingCourse, token: str) -> None:
        course = parse_float(token)
        max_warp = self.game.navigation.max_warp()
        self.prompt(f"WARP FACTOR (0-{max_warp:g})", AwaitingWarp(course))

    def _on_warp(self, pending: AwaitingWarp, token: str) -> None:
        self.game.execute_nav(pending.course, parse_float(token))

    def _on_phaser_units(self, pending: AwaitingPhaserUnits, token: str) -> None:
        self.game.execute_phasers(parse_int(token))

    def _on_torpedo_course(self, pending: AwaitingTorpedoCourse, token: str) -> None:
        self.game.execute_torpedo(parse_float(token))

    def _on_shield_units(self, pending: AwaitingShieldUnits, token: str) -> None:
        self.game.execute_shields(parse_int(token))

    def _on_computer_function(self, pending: AwaitingComputerFunction, token: str) -> None:
        self.game.execute_computer(token)

    def _on_coord_a(self, pending: AwaitingCoordA, token: str) -> None:
        self.prompt("PLEASE ENTER FINAL COORDINATES (X,Y)", AwaitingCoordB(parse_coordinates(token)))

    def _on_coord_b(self, pending: AwaitingCoordB, token: str) -> None:
        self.game.execute_distance_calculator(pending.start, parse_coordinates(token))

    def _on_repair_confirm(self, pending: AwaitingRepairConfirm, token: str) -> None:
        if token == "Y":
            self.game.execute_repair_order()

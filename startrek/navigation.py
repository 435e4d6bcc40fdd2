"""
Warp navigation for the Star Trek simulation engine.

Courses run 1-9 in 45 degree steps, counter-clockwise from East:

        4  3  2
         \\ | /
       5 -- -- 1
         / | \\
        6  7  8

Course 9 wraps to 1. Fractional courses interpolate linearly between the
two neighbouring compass vectors. The interpolation is not trigonometric:
a diagonal course moves one sector on *both* axes per step, so diagonals
cover ~1.4x the distance of cardinal courses.

Sector rows grow downward (South), so North is dy = -1.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .config import (
    DAMAGED_MAX_WARP,
    GALAXY_SIZE,
    MAX_WARP,
    SECTOR_SIZE,
)
from .damage import Device

if TYPE_CHECKING:
    from .engine import StarTrekGame


# =============================================================================
# COMPASS
# =============================================================================

# (dy, dx) per course slot; slot 0 unused, slot 9 repeats East for interpolation
COMPASS: list[tuple[int, int]] = [
    (0, 0),
    (0, 1),    # 1: East
    (-1, 1),   # 2: North-East
    (-1, 0),   # 3: North
    (-1, -1),  # 4: North-West
    (0, -1),   # 5: West
    (1, -1),   # 6: South-West
    (1, 0),    # 7: South
    (1, 1),    # 8: South-East
    (0, 1),    # 9: East (wrap)
]

# Largest global coordinate the ship can be clamped to at the perimeter
PERIMETER_LIMIT = GALAXY_SIZE * SECTOR_SIZE - 0.1


def is_valid_course(course: float) -> bool:
    """Navigation accepts courses in [1, 9]; 9 is the same heading as 1."""
    return not math.isnan(course) and 1 <= course <= 9


def course_vector(course: float) -> tuple[float, float]:
    """
    Per-step (dx, dy) movement for a navigation course.

    Args:
        course: Course in [1, 9].

    Returns:
        Tuple of (dx, dy) sectors moved per step.
    """
    if course == 9:
        course = 1
    ic = int(course)
    frac = course - ic
    dy0, dx0 = COMPASS[ic]
    dy1, dx1 = COMPASS[ic + 1]
    dy = dy0 + (dy1 - dy0) * frac
    dx = dx0 + (dx1 - dx0) * frac
    return dx, dy


def sectors_for_warp(warp: float) -> int:
    """Number of sector steps a maneuver takes: floor(warp * 8 + 0.5)."""
    return int(math.floor(warp * SECTOR_SIZE + 0.5))


def time_for_warp(warp: float) -> float:
    """Stardates a maneuver takes: tenths of a day below warp 1, else 1."""
    if warp < 1:
        return 0.1 * math.floor(10 * warp)
    return 1.0


def plot_course(
    course: float,
    num_sectors: int,
    start_x: float,
    start_y: float,
) -> list[tuple[float, float]]:
    """
    Global positions visited by an unobstructed maneuver.

    Args:
        course: Course in [1, 9].
        num_sectors: Steps to take.
        start_x: Global starting column (quadrant * 8 + sector).
        start_y: Global starting row.

    Returns:
        One (x, y) global position per step, excluding the start.
    """
    dx, dy = course_vector(course)
    x, y = start_x, start_y
    path = []
    for _ in range(num_sectors):
        x += dx
        y += dy
        path.append((x, y))
    return path


# =============================================================================
# COURSE / WARP HELPERS
# =============================================================================

def calculate_course(dx: float, dy: float) -> float:
    """
    Course that heads along a sector offset, using the compass interpolation.

    The result is exact for the linear interpolation used by navigation,
    so the ship lands on the target when the path is clear.

    Args:
        dx: Sector offset East (positive) / West (negative).
        dy: Sector offset South (positive) / North (negative).

    Returns:
        Course in [1, 9).
    """
    if dx == 0 and dy == 0:
        return 1.0
    if abs(dx) >= abs(dy):
        if dx > 0:
            return 1 - dy / dx if dy <= 0 else 9 - dy / dx
        return 5 - dy / dx
    if dy < 0:
        return 3 + dx / dy
    return 7 + dx / dy


def calculate_warp(dx: float, dy: float) -> float:
    """Warp factor covering a sector offset (Chebyshev distance / 8)."""
    return max(abs(dx), abs(dy)) / SECTOR_SIZE


# =============================================================================
# NAVIGATION ENGINE
# =============================================================================

class NavigationEngine:
    """
    Resolves NAV commands against the game state.

    Handles course/warp validation, energy cost, the turn's side effects
    (return fire, repairs, clock), sector stepping with collision checks
    inside the current quadrant, and galactic perimeter clamping.
    """

    def __init__(self, game: StarTrekGame):
        self.game = game

    def max_warp(self) -> float:
        if self.game.damage.is_damaged(Device.WARP_ENGINES):
            return DAMAGED_MAX_WARP
        return MAX_WARP

    def execute_nav(self, course: float, warp: float, suppress_logs: bool = False) -> None:
        """
        Move the ship along a course at a warp factor.

        Args:
            course: Course in [1, 9] (9 wraps to 1).
            warp: Warp factor, 0 to the current maximum.
            suppress_logs: Skip narrative text (automated navigation).
                           State transitions are unaffected.
        """
        game = self.game

        def say(text: str) -> None:
            if not suppress_logs:
                game.log.print(text)

        if not is_valid_course(course):
            say("   LT. SULU REPORTS, 'INCORRECT COURSE DATA, SIR!'")
            return
        if course == 9:
            course = 1
        if math.isnan(warp) or warp < 0:
            return

        if warp > self.max_warp():
            if game.damage.is_damaged(Device.WARP_ENGINES):
                say("WARP ENGINES ARE DAMAGED. MAXIUM SPEED = WARP 0.2")
            else:
                say(f"   CHIEF ENGINEER SCOTT REPORTS 'THE ENGINES WON'T TAKE WARP {warp:g}!'")
            return
        if warp == 0:
            return

        num_sectors = sectors_for_warp(warp)
        energy_required = game.ruleset.navigation_energy(warp, num_sectors)
        if game.ship.energy < energy_required:
            say("ENGINEERING REPORTS   'INSUFFICIENT ENERGY AVAILABLE")
            say(f"                       FOR MANEUVERING AT WARP {warp:g}!'")
            return

        game.ship.energy -= energy_required
        game.combat.klingons_move_and_fire()
        game.repair_system(warp)
        game.clock.advance_time(time_for_warp(warp))
        if game.is_ended:
            return

        self._move(course, num_sectors, suppress_logs)

    def _move(self, course: float, num_sectors: int, suppress_logs: bool) -> None:
        game = self.game
        ship = game.ship
        quadrant = game.quadrant

        dx, dy = course_vector(course)
        global_x = float(ship.quad_x * SECTOR_SIZE + ship.sect_x)
        global_y = float(ship.quad_y * SECTOR_SIZE + ship.sect_y)
        last_sx, last_sy = ship.sect_x, ship.sect_y

        for _ in range(num_sectors):
            global_x += dx
            global_y += dy
            qx = math.floor(global_x / SECTOR_SIZE)
            qy = math.floor(global_y / SECTOR_SIZE)
            if qx != ship.quad_x or qy != ship.quad_y:
                continue

            sx = math.floor(global_x % SECTOR_SIZE)
            sy = math.floor(global_y % SECTOR_SIZE)
            if (sx, sy) == (last_sx, last_sy):
                continue
            if quadrant.is_occupied(sx, sy):
                if not suppress_logs:
                    game.log.print(
                        f"WARP ENGINES SHUT DOWN AT SECTOR {sx + 1},{sy + 1} DUE TO BAD NAVIGATION"
                    )
                global_x -= dx
                global_y -= dy
                break
            last_sx, last_sy = sx, sy

        final_qx = math.floor(global_x / SECTOR_SIZE)
        final_qy = math.floor(global_y / SECTOR_SIZE)

        if not (0 <= final_qx < GALAXY_SIZE and 0 <= final_qy < GALAXY_SIZE):
            if not suppress_logs:
                game.log.print("LT. UHURA REPORTS MESSAGE FROM STARFLEET COMMAND:")
                game.log.print("  'PERMISSION TO ATTEMPT CROSSING OF GALACTIC PERIMETER")
                game.log.print("  IS HEREBY *DENIED*.  SHUT DOWN YOUR ENGINES.'")
            global_x = max(0.0, min(PERIMETER_LIMIT, global_x))
            global_y = max(0.0, min(PERIMETER_LIMIT, global_y))
            final_qx = math.floor(global_x / SECTOR_SIZE)
            final_qy = math.floor(global_y / SECTOR_SIZE)

        final_sx = math.floor(global_x % SECTOR_SIZE)
        final_sy = math.floor(global_y % SECTOR_SIZE)
        changed = (final_qx, final_qy) != (ship.quad_x, ship.quad_y)

        # A perimeter clamp can land on an occupied sector of the current
        # quadrant; fall back to the last clear sector on the path.
        if not changed and quadrant.is_occupied(final_sx, final_sy):
            final_sx, final_sy = last_sx, last_sy

        ship.quad_x, ship.quad_y = final_qx, final_qy
        ship.sect_x, ship.sect_y = final_sx, final_sy
        if changed:
            game.enter_quadrant(suppress_logs=suppress_logs)
        else:
            game.refresh_sensors(suppress_logs=suppress_logs)

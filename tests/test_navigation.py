"""
Tests for warp navigation.

This module tests:
- Compass interpolation and course/warp helpers
- Energy pricing, rejection paths and the turn's side effects
- Sector stepping, collisions, quadrant changes and the galactic perimeter

Run with: python -m pytest tests/test_navigation.py -v
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_array_almost_equal

from startrek.config import Ruleset
from startrek.damage import Device
from startrek.navigation import (
    calculate_course,
    calculate_warp,
    course_vector,
    is_valid_course,
    plot_course,
    sectors_for_warp,
    time_for_warp,
)


def position(game):
    ship = game.ship
    return ship.quad_x, ship.quad_y, ship.sect_x, ship.sect_y


# =============================================================================
# HELPERS
# =============================================================================

class TestCourseVector:
    """Tests for the linear compass interpolation."""

    @pytest.mark.parametrize("course,expected", [
        (1, (1, 0)),
        (2, (1, -1)),
        (3, (0, -1)),
        (4, (-1, -1)),
        (5, (-1, 0)),
        (6, (-1, 1)),
        (7, (0, 1)),
        (8, (1, 1)),
        (9, (1, 0)),
    ])
    def test_cardinal_and_diagonal(self, course, expected):
        assert_array_almost_equal(np.array(course_vector(course)), np.array(expected))

    def test_fractional_course_interpolates(self):
        assert_array_almost_equal(np.array(course_vector(1.5)), np.array([1.0, -0.5]))
        assert_array_almost_equal(np.array(course_vector(8.5)), np.array([1.0, 0.5]))

    def test_diagonal_is_not_unit_length(self):
        """Diagonal steps move one sector on both axes."""
        assert np.linalg.norm(course_vector(2)) == pytest.approx(math.sqrt(2))

    @pytest.mark.parametrize("course,valid", [
        (0.99, False), (1, True), (5.5, True), (9, True), (9.01, False), (math.nan, False),
    ])
    def test_is_valid_course(self, course, valid):
        assert is_valid_course(course) is valid


class TestWarpHelpers:
    """Tests for sector counts and elapsed time."""

    @pytest.mark.parametrize("warp,sectors", [(1, 8), (0.5, 4), (0.2, 2), (0.06, 0), (8, 64)])
    def test_sectors_for_warp(self, warp, sectors):
        assert sectors_for_warp(warp) == sectors

    @pytest.mark.parametrize("warp,time", [(0.5, 0.5), (0.25, 0.2), (0.99, 0.9), (1, 1), (4, 1)])
    def test_time_for_warp(self, warp, time):
        assert time_for_warp(warp) == pytest.approx(time)

    def test_plot_course(self):
        path = plot_course(2, 3, 10.0, 10.0)
        assert_array_almost_equal(np.array(path), np.array([[11, 9], [12, 8], [13, 7]]))


class TestCalculateCourse:
    """Tests for turning a sector offset into course and warp."""

    @pytest.mark.parametrize("dx,dy", [
        (4, 0), (0, -4), (-4, 0), (0, 4),
        (4, -4), (4, 4), (-4, 4), (-4, -4),
        (4, -2), (4, 2), (-4, 2), (-4, -2),
        (1, -4), (-1, -4), (1, 4), (-1, 4),
    ])
    def test_course_reaches_offset(self, dx, dy):
        """Stepping the computed course for the Chebyshev length lands on target."""
        course = calculate_course(dx, dy)
        steps = max(abs(dx), abs(dy))
        assert 1 <= course < 9
        assert_array_almost_equal(
            np.array(course_vector(course)) * steps,
            np.array([dx, dy]),
        )

    def test_zero_offset(self):
        assert calculate_course(0, 0) == 1.0

    def test_calculate_warp(self):
        assert calculate_warp(4, -2) == 0.5
        assert calculate_warp(-8, 3) == 1.0


# =============================================================================
# NAVIGATION ENGINE
# =============================================================================

class TestExecuteNav:
    """Tests for NavigationEngine.execute_nav()."""

    def test_move_east_within_quadrant(self, game):
        """Warp 0.5 East from (3,3) ends at sector (7,3) in the same quadrant."""
        game.execute_nav(1, 0.5)

        assert position(game) == (0, 0, 7, 3)
        assert game.ship.energy == 3000 - 14
        assert game.clock.stardate == pytest.approx(2000.5)
        assert not any("BAD NAVIGATION" in t for t in game.log.texts())

    def test_warp_one_crosses_into_next_quadrant(self, game):
        """Eight sectors East from sector 3 lands in the next quadrant."""
        game.execute_nav(1, 1)

        assert position(game) == (1, 0, 3, 3)
        assert game.ship.energy == 3000 - 18
        assert "NOW ENTERING ANTARES II QUADRANT . . ." in game.log.texts()
        assert game.known_galaxy[1][0] == game.galaxy[1][0]

    def test_course_nine_matches_course_one(self, make_game):
        east = make_game()
        wrapped = make_game()

        east.execute_nav(1, 0.75)
        wrapped.execute_nav(9, 0.75)

        assert position(east) == position(wrapped)
        assert east.ship.energy == wrapped.ship.energy
        assert east.log.texts() == wrapped.log.texts()

    def test_diagonal_move(self, game):
        game.execute_nav(2, 0.25)
        assert position(game) == (0, 0, 5, 1)

    def test_fractional_course(self, game):
        game.execute_nav(1.5, 0.5)
        assert position(game) == (0, 0, 7, 1)

    def test_insufficient_energy_is_noop(self, game):
        game.ship.energy = 13
        game.execute_nav(1, 0.5)

        assert position(game) == (0, 0, 3, 3)
        assert game.ship.energy == 13
        assert game.clock.stardate == 2000.0
        assert "ENGINEERING REPORTS   'INSUFFICIENT ENERGY AVAILABLE" in game.log.texts()

    def test_damaged_engines_reject_warp_one(self, game):
        game.damage.set_damage(Device.WARP_ENGINES, -1.0)
        game.execute_nav(1, 1)

        assert game.log.texts() == ["WARP ENGINES ARE DAMAGED. MAXIUM SPEED = WARP 0.2"]
        assert game.ship.energy == 3000
        assert position(game) == (0, 0, 3, 3)

    def test_damaged_engines_allow_warp_point_two(self, game):
        game.damage.set_damage(Device.WARP_ENGINES, -1.0)
        game.execute_nav(1, 0.2)
        assert position(game) == (0, 0, 5, 3)

    def test_warp_above_eight_rejected(self, game):
        game.execute_nav(1, 9)
        assert game.log.texts() == ["   CHIEF ENGINEER SCOTT REPORTS 'THE ENGINES WON'T TAKE WARP 9!'"]
        assert game.ship.energy == 3000

    @pytest.mark.parametrize("course", [0, 9.5, -1, math.nan])
    def test_invalid_course_rejected(self, game, course):
        game.execute_nav(course, 1)
        assert game.log.texts() == ["   LT. SULU REPORTS, 'INCORRECT COURSE DATA, SIR!'"]
        assert game.ship.energy == 3000

    @pytest.mark.parametrize("warp", [0, -1, math.nan])
    def test_zero_or_invalid_warp_is_noop(self, game, warp):
        game.execute_nav(1, warp)
        assert game.ship.energy == 3000
        assert game.clock.stardate == 2000.0

    def test_collision_stops_one_short(self, game, place_star):
        place_star(6, 3)
        game.execute_nav(1, 0.5)

        assert position(game) == (0, 0, 5, 3)
        assert "WARP ENGINES SHUT DOWN AT SECTOR 7,4 DUE TO BAD NAVIGATION" in game.log.texts()

    def test_perimeter_clamp(self, game):
        game.execute_nav(5, 1)

        assert position(game) == (0, 0, 0, 3)
        assert "  IS HEREBY *DENIED*.  SHUT DOWN YOUR ENGINES.'" in game.log.texts()

    def test_perimeter_clamp_far_corner(self, make_game):
        game = make_game(quad=(7, 7), sect=(6, 6))
        game.execute_nav(8, 2)
        assert position(game) == (7, 7, 7, 7)

    def test_suppress_logs_keeps_state_transitions(self, make_game):
        loud = make_game()
        quiet = make_game()

        loud.execute_nav(1, 1)
        quiet.execute_nav(1, 1, suppress_logs=True)

        assert position(loud) == position(quiet)
        assert loud.ship.energy == quiet.ship.energy
        assert loud.clock.stardate == quiet.clock.stardate
        assert quiet.log.texts() == []

    def test_klingons_fire_before_moving(self, game, place_klingon):
        place_klingon(3, 7, energy=100.0)
        game.ship.shields = 500
        game.execute_nav(1, 0.5)

        # hit = floor(100 / 4 * 2.5) from the starting sector
        assert game.ship.shields == 500 - 62
        assert "62 UNIT HIT ON ENTERPRISE FROM SECTOR 4,8" in game.log.texts()

    def test_cubic_energy_under_v1(self, make_game):
        game = make_game(ruleset=Ruleset.v1())
        game.execute_nav(1, 0.5)
        assert game.ship.energy == 3000 - 11

    def test_time_running_out_stops_movement(self, game):
        game.clock.stardate = 2029.8
        game.execute_nav(1, 1)

        assert game.is_ended
        assert position(game) == (0, 0, 3, 3)

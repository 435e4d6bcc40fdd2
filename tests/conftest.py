"""
Shared fixtures for the Star Trek engine tests.

Most engine tests start from a cleared galaxy: the ship alone at quadrant
(0, 0) sector (3, 3), every random draw returning 0.5 unless a test
scripts otherwise. With 0.5 no random system failure (< 0.1) and no
starbase attack (< 0.01 * rank) ever triggers.
"""

import random

import pytest

from startrek.config import Ruleset
from startrek.engine import ShipState, StarTrekGame
from startrek.galaxy import Klingon, Quadrant, Star, Starbase, empty_grid


class FakeRandom(random.Random):
    """random.Random that replays scripted values, then a fixed default."""

    def __init__(self, values=(), default=0.5):
        super().__init__(0)
        self.values = list(values)
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default

    def script(self, *values):
        """Queue further values to be returned before the default."""
        self.values.extend(values)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random number generator for deterministic tests."""
    return random.Random(42)


@pytest.fixture
def fake_rng():
    """Scripted random generator (default 0.5)."""
    return FakeRandom()


def clear_galaxy(game, quad=(0, 0), sect=(3, 3)):
    """Empty the galaxy and put the ship alone at the given position."""
    game.galaxy = empty_grid()
    game.known_galaxy = empty_grid()
    game.quadrant = Quadrant()
    game.total_klingons = 0
    game.total_starbases = 0
    game.start_klingons = 0
    game.ship = ShipState(quad_x=quad[0], quad_y=quad[1], sect_x=sect[0], sect_y=sect[1])
    game.damage.reset()
    game.clock.reset(2000.0, 2030.0)
    game.dispatcher.reset()
    game.log.clear()
    return game


@pytest.fixture
def make_game():
    """Factory: a running game on a cleared galaxy with its own FakeRandom."""
    def _make(ruleset=None, rng=None, quad=(0, 0), sect=(3, 3)):
        g = StarTrekGame(ruleset=ruleset or Ruleset.v2(), seed=1)
        g.rng = rng if rng is not None else FakeRandom()
        return clear_galaxy(g, quad=quad, sect=sect)
    return _make


@pytest.fixture
def game(make_game, fake_rng):
    """A running v2 game on a cleared galaxy, driven by `fake_rng`."""
    return make_game(rng=fake_rng)


@pytest.fixture
def place_klingon(game):
    """Factory: put a Klingon in the ship's quadrant."""
    def _place(x, y, energy=200.0):
        klingon = Klingon(x=x, y=y, energy=energy)
        game.quadrant.klingons.append(klingon)
        game.galaxy[game.ship.quad_x][game.ship.quad_y] += 100
        game.known_galaxy[game.ship.quad_x][game.ship.quad_y] += 100
        game.total_klingons += 1
        game.start_klingons += 1
        return klingon
    return _place


@pytest.fixture
def place_starbase(game):
    """Factory: put a starbase in the ship's quadrant."""
    def _place(x, y):
        starbase = Starbase(x=x, y=y)
        game.quadrant.starbases.append(starbase)
        game.galaxy[game.ship.quad_x][game.ship.quad_y] += 10
        game.known_galaxy[game.ship.quad_x][game.ship.quad_y] += 10
        game.total_starbases += 1
        return starbase
    return _place


@pytest.fixture
def place_star(game):
    """Factory: put a star in the ship's quadrant."""
    def _place(x, y):
        star = Star(x=x, y=y)
        game.quadrant.stars.append(star)
        game.galaxy[game.ship.quad_x][game.ship.quad_y] += 1
        game.known_galaxy[game.ship.quad_x][game.ship.quad_y] += 1
        return star
    return _place

"""
Tests for the command/prompt state machine.

Run with: python -m pytest tests/test_dispatcher.py -v
"""

import math

import pytest

from startrek.damage import Device
from startrek.dispatcher import (
    COMMAND_MENU,
    AwaitingComputerFunction,
    AwaitingCoordA,
    AwaitingCoordB,
    AwaitingCourse,
    AwaitingPhaserUnits,
    AwaitingRepairConfirm,
    AwaitingShieldUnits,
    AwaitingTorpedoCourse,
    AwaitingWarp,
    parse_coordinates,
    parse_float,
    parse_int,
)
from startrek.engine import GameOutcome


def feed(game, *lines):
    for line in lines:
        game.process_input(line)


class TestParsing:
    """Tests for lenient numeric parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("3", 3.0), ("1.5", 1.5), (" 0.25 ", 0.25), (".5", 0.5), ("-2", -2.0), ("4ABC", 4.0),
    ])
    def test_parse_float(self, text, expected):
        assert parse_float(text) == expected

    @pytest.mark.parametrize("text", ["", "ABC", "-", "."])
    def test_parse_float_failure_is_nan(self, text):
        assert math.isnan(parse_float(text))

    def test_parse_int_truncates(self):
        assert parse_int("12.7") == 12
        assert math.isnan(parse_int("X"))

    def test_parse_coordinates(self):
        assert parse_coordinates("1,8") == (0, 7)
        assert parse_coordinates(" 4 , 2") == (3, 1)
        assert all(math.isnan(v) for v in parse_coordinates("45"))


class TestCommandTokens:
    """Tests for top-level command handling."""

    def test_input_is_echoed_to_full_log_only(self, game):
        game.process_input("  help ")

        assert game.log.get_full_log()[0].text == "> HELP"
        assert [l.text for l in game.get_output()] == list(COMMAND_MENU)

    def test_unknown_command_prints_menu(self, game):
        game.process_input("WARP")
        assert game.log.texts()[1:] == ["ENTER ONE OF THE FOLLOWING:", *COMMAND_MENU]

    def test_lowercase_accepted(self, game):
        game.process_input("nav")
        assert game.dispatcher.pending == AwaitingCourse()

    def test_resign(self, game):
        game.process_input("XXX")

        assert game.is_ended
        assert game.outcome is GameOutcome.RESIGNED
        assert game.log.texts()[-1] == "COMMAND RESIGNED."

    def test_input_ignored_after_end(self, game):
        game.process_input("XXX")
        before = game.log.texts()

        game.process_input("NAV")

        assert game.log.texts() == before
        assert game.dispatcher.pending is None

    def test_srs_command(self, game):
        game.process_input("SRS")
        assert "---------------------------------" in game.log.texts()

    def test_lrs_command(self, game):
        game.process_input("LRS")
        assert "LONG RANGE SCAN FOR QUADRANT 1,1" in game.log.texts()


class TestPromptSequences:
    """Tests for multi-step prompts."""

    def test_nav_prompts_course_then_warp(self, game):
        game.process_input("NAV")
        assert game.dispatcher.pending == AwaitingCourse()
        assert game.log.texts()[-1] == "COURSE (1-9)"

        game.process_input("1")
        assert game.dispatcher.pending == AwaitingWarp(1.0)
        assert game.log.texts()[-1] == "WARP FACTOR (0-8)"

        game.process_input("0.5")
        assert game.dispatcher.pending is None
        assert (game.ship.sect_x, game.ship.sect_y) == (7, 3)

    def test_warp_prompt_shows_damaged_limit(self, game):
        game.damage.set_damage(Device.WARP_ENGINES, -1.0)
        feed(game, "NAV", "1")
        assert game.log.texts()[-1] == "WARP FACTOR (0-0.2)"

    def test_prompt_and_direct_call_match(self, make_game):
        """Prompted and programmatic commands give the same state and narrative."""
        prompted = make_game()
        direct = make_game()

        feed(prompted, "NAV", "2", "0.25")
        direct.execute_nav(2, 0.25)

        assert (prompted.ship.sect_x, prompted.ship.sect_y) == (direct.ship.sect_x, direct.ship.sect_y)
        assert prompted.ship.energy == direct.ship.energy
        narrative = [l.text for l in prompted.get_full_log() if not l.text.startswith(">")]
        prompts = ["COURSE (1-9)", "WARP FACTOR (0-8)"]
        assert [t for t in narrative if t not in prompts] == direct.log.texts()

    def test_bad_course_text_is_rejected(self, game):
        feed(game, "NAV", "EAST", "1")
        assert "   LT. SULU REPORTS, 'INCORRECT COURSE DATA, SIR!'" in game.log.texts()
        assert game.ship.energy == 3000

    def test_phasers(self, game, place_klingon):
        place_klingon(3, 7, energy=250.0)
        game.ship.shields = 500

        game.process_input("PHA")
        assert game.dispatcher.pending == AwaitingPhaserUnits()
        assert "PHASERS LOCKED ON TARGET;  ENERGY AVAILABLE = 3000" in game.log.texts()

        game.process_input("100")
        assert game.ship.energy == 2900

    def test_phasers_without_enemies_do_not_prompt(self, game):
        game.process_input("PHA")
        assert game.dispatcher.pending is None

    def test_torpedo(self, game):
        game.process_input("TOR")
        assert game.dispatcher.pending == AwaitingTorpedoCourse()
        assert game.log.texts()[-1] == "PHOTON TORPEDO COURSE (1-9)"

        game.process_input("1")
        assert game.ship.torpedoes == 9

    def test_shields(self, game):
        game.process_input("SHE")
        assert game.dispatcher.pending == AwaitingShieldUnits()
        assert "ENERGY AVAILABLE = 3000" in game.log.texts()

        game.process_input("1000")
        assert game.ship.shields == 1000
        assert game.ship.energy == 2000

    def test_shields_inoperable(self, game):
        game.damage.set_damage(Device.SHIELD_CONTROL, -1.0)
        game.process_input("SHE")
        assert game.dispatcher.pending is None
        assert game.log.texts()[-1] == "SHIELD CONTROL INOPERABLE"

    def test_computer_disabled(self, game):
        game.damage.set_damage(Device.LIBRARY_COMPUTER, -1.0)
        game.process_input("COM")
        assert game.dispatcher.pending is None
        assert game.log.texts()[-1] == "COMPUTER DISABLED"

    def test_distance_calculator_sequence(self, game):
        feed(game, "COM")
        assert game.dispatcher.pending == AwaitingComputerFunction()
        assert game.log.texts()[-1] == "COMPUTER ACTIVE AND AWAITING COMMAND"

        feed(game, "4")
        assert game.dispatcher.pending == AwaitingCoordA()
        assert game.log.texts()[-1] == "PLEASE ENTER INITIAL COORDINATES (X,Y)"

        feed(game, "1,1")
        assert game.dispatcher.pending == AwaitingCoordB((0.0, 0.0))
        assert game.log.texts()[-1] == "PLEASE ENTER FINAL COORDINATES (X,Y)"

        feed(game, "4,1")
        assert game.dispatcher.pending is None
        assert game.log.texts()[-2:] == ["DIRECTION = 1.00", "DISTANCE = 3.00"]

    def test_distance_calculator_invalid(self, game):
        feed(game, "COM", "4", "1,1", "NOWHERE")
        assert game.log.texts()[-1] == "INVALID COORDINATES"

    def test_repair_confirm(self, game, place_starbase):
        place_starbase(4, 4)
        game.refresh_sensors(suppress_logs=True)
        game.damage.set_damage(Device.PHOTON_TUBES, -3.0)

        game.process_input("DAM")
        assert game.dispatcher.pending == AwaitingRepairConfirm()

        game.process_input("Y")
        assert game.damage.damaged_devices() == []

    def test_repair_declined(self, game, place_starbase):
        place_starbase(4, 4)
        game.refresh_sensors(suppress_logs=True)
        game.damage.set_damage(Device.PHOTON_TUBES, -3.0)

        feed(game, "DAM", "N")

        assert game.damage.is_damaged(Device.PHOTON_TUBES)
        assert game.clock.stardate == 2000.0

    def test_pending_prompt_consumes_command_word(self, game):
        """A command token typed at a prompt is read as the answer."""
        feed(game, "NAV", "SRS")
        pending = game.dispatcher.pending
        assert isinstance(pending, AwaitingWarp)
        assert math.isnan(pending.course)

    @pytest.mark.parametrize("answer", ["YO", "YES", "Y N"])
    def test_repair_needs_exact_yes(self, game, place_starbase, answer):
        place_starbase(4, 4)
        game.refresh_sensors(suppress_logs=True)
        game.damage.set_damage(Device.PHOTON_TUBES, -3.0)

        feed(game, "DAM", answer)

        assert game.dispatcher.pending is None
        assert game.damage.is_damaged(Device.PHOTON_TUBES)
        assert game.clock.stardate == 2000.0

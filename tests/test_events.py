"""
Tests for the narrative event log.

Run with: python -m pytest tests/test_events.py -v
"""

from startrek.events import ECHO_COLOR, EventLog, LogLine


class TestEventLog:
    """Tests for appending and draining log lines."""

    def test_print_appends_to_pending_and_full(self):
        log = EventLog()
        log.print("HELLO")
        log.print("WORLD", color="red")

        assert log.get_full_log() == [LogLine("HELLO"), LogLine("WORLD", "red")]
        assert log.get_output() == [LogLine("HELLO"), LogLine("WORLD", "red")]

    def test_get_output_drains(self):
        """The pending buffer empties on read; the full log does not."""
        log = EventLog()
        log.print("ONE")
        log.get_output()
        log.print("TWO")

        assert [l.text for l in log.get_output()] == ["TWO"]
        assert log.texts() == ["ONE", "TWO"]

    def test_echo_only_in_full_log(self):
        log = EventLog()
        log.echo("NAV")

        assert log.get_output() == []
        assert log.get_full_log() == [LogLine("> NAV", ECHO_COLOR)]

    def test_clear(self):
        log = EventLog()
        log.print("A")
        log.clear()
        assert log.get_output() == []
        assert log.get_full_log() == []

    def test_full_log_is_a_copy(self):
        log = EventLog()
        log.print("A")
        log.get_full_log().append(LogLine("B"))
        assert log.texts() == ["A"]


class TestSubscribers:
    """Tests for subscriber notification."""

    def test_notified_in_append_order(self):
        log = EventLog()
        seen = []
        log.subscribe(lambda line: seen.append(line.text))

        log.print("FIRST")
        log.echo("CMD")
        log.print("SECOND")

        assert seen == ["FIRST", "> CMD", "SECOND"]

    def test_unsubscribe(self):
        log = EventLog()
        seen = []

        def listener(line):
            seen.append(line.text)

        log.subscribe(listener)
        log.print("A")
        log.unsubscribe(listener)
        log.print("B")

        assert seen == ["A"]

    def test_unsubscribe_unknown_is_noop(self):
        log = EventLog()
        log.unsubscribe(lambda line: None)
        log.print("A")
        assert log.texts() == ["A"]

    def test_failing_listener_does_not_break_others(self, capsys):
        """A raising subscriber is reported and the next one still runs."""
        log = EventLog()
        seen = []

        def broken(line):
            raise RuntimeError("boom")

        log.subscribe(broken)
        log.subscribe(lambda line: seen.append(line.text))
        log.print("A")

        assert seen == ["A"]
        assert log.texts() == ["A"]
        assert "[ENGINE] Log listener error: boom" in capsys.readouterr().out

"""Unit tests for the stdin event script's line parser."""

from scripts.run_events import parse_line


class TestParseLine:
    def test_json_payload(self):
        assert parse_line('foo {"x": 1}\n') == ("foo", {"x": 1})

    def test_plain_string_payload(self):
        assert parse_line("foo hello world") == ("foo", "hello world")

    def test_no_payload(self):
        assert parse_line("tick\n") == ("tick", None)

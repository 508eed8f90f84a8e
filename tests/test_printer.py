"""Tests for the shared indentation contract."""
import enum
import io

from tlscore.utils.printer import Printer, format_scalar, to_string


class Color(enum.Enum):
    RED = 1


class Pair:
    def __init__(self, first, second):
        self.first = first
        self.second = second

    def print(self, stream, level=0, spaces_per_level=4):
        printer = Printer(stream, level, spaces_per_level)
        printer.start()
        printer.print_attribute("first", self.first)
        printer.print_attribute("second", self.second)
        printer.end()
        return stream


def render(value, level, spaces_per_level):
    stream = io.StringIO()
    value.print(stream, level, spaces_per_level)
    return stream.getvalue()


class TestPrinter:
    def test_single_line_nested(self):
        assert to_string(Pair(1, Pair("a", Color.RED))) == "[ first = 1 second = [ first = a second = RED ] ]"

    def test_single_line_ignores_level(self):
        assert render(Pair(1, 2), 3, -1) == "[ first = 1 second = 2 ]"

    def test_multi_line_nested(self):
        assert render(Pair(1, Pair(2, 3)), 0, 2) == (
            "[\n"
            "  first = 1\n"
            "  second = [\n"
            "    first = 2\n"
            "    second = 3\n"
            "  ]\n"
            "]\n"
        )

    def test_zero_spaces_per_level(self):
        assert render(Pair(1, 2), 5, 0) == "[\nfirst = 1\nsecond = 2\n]\n"

    def test_negative_level_keeps_nested_indentation(self):
        assert render(Pair(1, 2), -2, 1) == "[\n   first = 1\n   second = 2\n  ]\n"

    def test_closed_stream_writes_nothing(self):
        stream = io.StringIO()
        stream.close()
        Pair(1, 2).print(stream, 0, 4)
        assert stream.closed


class TestFormatScalar:
    def test_values(self):
        assert format_scalar(Color.RED) == "RED"
        assert format_scalar(b"\x00\xff") == "00FF"
        assert format_scalar(None) == "NULL"
        assert format_scalar(12) == "12"

"""
Indentable, block-structured rendering shared by the value types.

    level >= 0            indent the first line by level * spaces_per_level
    level < 0             do not indent the first line, nested lines still indent
    spaces_per_level >= 0 multi-line output ending with exactly one newline
    spaces_per_level < 0  single-line output, no trailing newline

A stream that is already closed is treated as failed and nothing is written.
"""
import enum
import io
from typing import Any, TextIO


def stream_failed(stream: TextIO) -> bool:
    return stream is None or bool(getattr(stream, "closed", False))


def _indent(level: int, spaces_per_level: int) -> str:
    if spaces_per_level < 0:
        return ""
    return " " * (abs(level) * spaces_per_level)


def format_scalar(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex().upper()
    if value is None:
        return "NULL"
    return str(value)


def print_scalar(stream: TextIO, text: str, level: int = 0, spaces_per_level: int = 4) -> TextIO:
    """Write a single value honouring the indentation contract."""
    if stream_failed(stream):
        return stream

    if level >= 0:
        stream.write(_indent(level, spaces_per_level))
    stream.write(text)
    if spaces_per_level >= 0:
        stream.write("\n")
    return stream


def print_value(stream: TextIO, value: Any, level: int = 0, spaces_per_level: int = 4) -> TextIO:
    printer = getattr(value, "print", None)
    if callable(printer):
        return printer(stream, level, spaces_per_level)
    return print_scalar(stream, format_scalar(value), level, spaces_per_level)


class Printer:
    """
    Render an object as a bracketed list of named attributes.

        printer = Printer(stream, level, spaces_per_level)
        printer.start()
        printer.print_attribute("type", self.type)
        printer.end()
    """

    def __init__(self, stream: TextIO, level: int = 0, spaces_per_level: int = 4):
        self._stream = stream
        self._level = abs(level)
        self._suppress_initial_indent = level < 0
        self._spaces_per_level = spaces_per_level
        self._failed = stream_failed(stream)

    @property
    def multiline(self) -> bool:
        return self._spaces_per_level >= 0

    def start(self) -> None:
        if self._failed:
            return

        if not self.multiline:
            self._stream.write("[")
            return

        if not self._suppress_initial_indent:
            self._stream.write(_indent(self._level, self._spaces_per_level))
        self._stream.write("[\n")

    def print_attribute(self, name: str, value: Any) -> None:
        if self._failed:
            return

        if self.multiline:
            self._stream.write(_indent(self._level + 1, self._spaces_per_level))
        else:
            self._stream.write(" ")

        self._stream.write(f"{name} = ")
        # Negative level: the value continues the current line
        print_value(self._stream, value, -(self._level + 1), self._spaces_per_level)

    def end(self) -> None:
        if self._failed:
            return

        if not self.multiline:
            self._stream.write(" ]")
            return

        self._stream.write(_indent(self._level, self._spaces_per_level))
        self._stream.write("]\n")


def to_string(value: Any, level: int = 0, spaces_per_level: int = -1) -> str:
    """Render `value` into a string; single-line by default, as used by __str__."""
    buffer = io.StringIO()
    print_value(buffer, value, level, spaces_per_level)
    return buffer.getvalue()

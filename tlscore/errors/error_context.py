# tlscore/errors/error_context.py
from __future__ import annotations

from typing import Any, TextIO

from pydantic import BaseModel, ConfigDict

from tlscore.errors.error import Error
from tlscore.utils.printer import Printer, to_string


class ErrorContext(BaseModel):
    """Describe the context of an error: the error itself and a free-form description."""

    model_config = ConfigDict(frozen=True)

    error: Error = Error()
    error_description: str = ""

    def compare(self, other: "ErrorContext") -> int:
        result = self.error.compare(other.error)
        if result != 0:
            return result
        a, b = self.error_description, other.error_description
        return (a > b) - (a < b)

    def equals(self, other: "ErrorContext") -> bool:
        return self.compare(other) == 0

    def less(self, other: "ErrorContext") -> bool:
        return self.compare(other) < 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return not self.equals(other)

    def __lt__(self, other: "ErrorContext") -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return self.less(other)

    def __le__(self, other: "ErrorContext") -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return not other.less(self)

    def __gt__(self, other: "ErrorContext") -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return other.less(self)

    def __ge__(self, other: "ErrorContext") -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return not self.less(other)

    def __hash__(self) -> int:
        return hash((self.error, self.error_description))

    def hash_append(self, algorithm: Any) -> None:
        self.error.hash_append(algorithm)
        description = self.error_description.encode("utf-8")
        algorithm.update(len(description).to_bytes(8, "big"))
        algorithm.update(description)

    def print(self, stream: TextIO, level: int = 0, spaces_per_level: int = 4) -> TextIO:
        printer = Printer(stream, level, spaces_per_level)
        printer.start()
        printer.print_attribute("error", self.error)
        printer.print_attribute("error_description", self.error_description)
        printer.end()
        return stream

    def __str__(self) -> str:
        return to_string(self)

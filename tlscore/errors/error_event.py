# tlscore/errors/error_event.py
from __future__ import annotations

import enum
from typing import Any, TextIO, Union

from pydantic import BaseModel, ConfigDict

from tlscore.errors.error import Error, ErrorCode
from tlscore.errors.error_context import ErrorContext
from tlscore.schemas.responses import ErrorReport
from tlscore.utils.logger import log_debug
from tlscore.utils.printer import Printer, to_string


class ErrorEventType(enum.IntEnum):
    """Where an error was detected."""

    TRANSPORT = 0
    ENCRYPTION = 1


Fault = Union[Error, ErrorCode, BaseException, int]


def _classify(fault: Fault) -> Error:
    if isinstance(fault, Error):
        return fault
    if isinstance(fault, ErrorCode):
        return Error.from_code(fault)
    if isinstance(fault, BaseException):
        return Error.from_exception(fault)
    if isinstance(fault, int) and not isinstance(fault, bool):
        return Error.from_errno(fault)
    raise TypeError(f"cannot classify fault of type {type(fault).__name__}")


class ErrorEvent(BaseModel):
    """
    Describe an error detected by a socket or its session.

    Events compare lexicographically: `type` first, `context` only breaks
    ties, so they can key both ordered and hashed containers.
    """

    model_config = ConfigDict(frozen=True)

    type: ErrorEventType = ErrorEventType.TRANSPORT
    context: ErrorContext = ErrorContext()

    @classmethod
    def from_fault(
        cls,
        fault: Fault,
        description: str = "",
        *,
        event_type: ErrorEventType = ErrorEventType.TRANSPORT,
    ) -> "ErrorEvent":
        """
        Build an event from a lower-level fault: an errno value, an OSError
        (or other exception), an ErrorCode or an already classified Error.
        """
        error = _classify(fault)
        event = cls(
            type=event_type,
            context=ErrorContext(error=error, error_description=description),
        )
        log_debug(f"classified {fault!r} as {error.code.name}", "ErrorEvent.from_fault", service="error")
        return event

    def compare(self, other: "ErrorEvent") -> int:
        if self.type != other.type:
            return -1 if self.type < other.type else 1
        return self.context.compare(other.context)

    def equals(self, other: "ErrorEvent") -> bool:
        return self.type == other.type and self.context.equals(other.context)

    def less(self, other: "ErrorEvent") -> bool:
        return self.compare(other) < 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return not self.equals(other)

    def __lt__(self, other: "ErrorEvent") -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return self.less(other)

    def __le__(self, other: "ErrorEvent") -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return not other.less(self)

    def __gt__(self, other: "ErrorEvent") -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return other.less(self)

    def __ge__(self, other: "ErrorEvent") -> bool:
        if not isinstance(other, ErrorEvent):
            return NotImplemented
        return not self.less(other)

    def __hash__(self) -> int:
        return hash((int(self.type), self.context))

    def hash_append(self, algorithm: Any) -> None:
        algorithm.update(int(self.type).to_bytes(4, "big", signed=True))
        self.context.hash_append(algorithm)

    def print(self, stream: TextIO, level: int = 0, spaces_per_level: int = 4) -> TextIO:
        printer = Printer(stream, level, spaces_per_level)
        printer.start()
        printer.print_attribute("type", self.type)
        printer.print_attribute("context", self.context)
        printer.end()
        return stream

    def __str__(self) -> str:
        return to_string(self)

    def to_report(self) -> ErrorReport:
        return ErrorReport(
            type=self.type.name,
            error=self.context.error.text(),
            details=self.context.error_description or None,
        )

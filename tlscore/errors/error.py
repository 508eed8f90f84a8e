# tlscore/errors/error.py
from __future__ import annotations

import enum
import errno
import os
from typing import Any, TextIO

from pydantic import BaseModel, ConfigDict

from tlscore.utils.printer import print_scalar


class ErrorCode(enum.IntEnum):
    """Portable classification of a transport fault."""

    OK = 0
    UNKNOWN = 1
    WOULD_BLOCK = 2
    INTERRUPTED = 3
    PENDING = 4
    CANCELLED = 5
    INVALID = 6
    EOF = 7
    LIMIT = 8
    ADDRESS_IN_USE = 9
    CONNECTION_TIMEOUT = 10
    CONNECTION_REFUSED = 11
    CONNECTION_RESET = 12
    CONNECTION_DEAD = 13
    UNREACHABLE = 14
    NOT_AUTHORIZED = 15
    NOT_IMPLEMENTED = 16
    NOT_OPEN = 17
    NOT_SOCKET = 18


# ---- errno -> code (names missing on the running platform are skipped) ----

_ERRNO_GROUPS = (
    (("EWOULDBLOCK", "EAGAIN"), ErrorCode.WOULD_BLOCK),
    (("EINTR",), ErrorCode.INTERRUPTED),
    (("EINPROGRESS", "EALREADY"), ErrorCode.PENDING),
    (("ECANCELED",), ErrorCode.CANCELLED),
    (("EINVAL", "EFAULT", "EAFNOSUPPORT", "EPROTONOSUPPORT"), ErrorCode.INVALID),
    (("EMFILE", "ENFILE", "ENOBUFS", "ENOMEM", "EMSGSIZE"), ErrorCode.LIMIT),
    (("EADDRINUSE", "EADDRNOTAVAIL"), ErrorCode.ADDRESS_IN_USE),
    (("ETIMEDOUT",), ErrorCode.CONNECTION_TIMEOUT),
    (("ECONNREFUSED",), ErrorCode.CONNECTION_REFUSED),
    (("ECONNRESET",), ErrorCode.CONNECTION_RESET),
    (("EPIPE", "ECONNABORTED", "ENETRESET", "ESHUTDOWN"), ErrorCode.CONNECTION_DEAD),
    (("ENETUNREACH", "EHOSTUNREACH", "ENETDOWN", "EHOSTDOWN"), ErrorCode.UNREACHABLE),
    (("EACCES", "EPERM"), ErrorCode.NOT_AUTHORIZED),
    (("ENOSYS", "EOPNOTSUPP", "ENOTSUP"), ErrorCode.NOT_IMPLEMENTED),
    (("ENOTCONN", "EBADF"), ErrorCode.NOT_OPEN),
    (("ENOTSOCK",), ErrorCode.NOT_SOCKET),
)

ERRNO_CODES: dict[int, ErrorCode] = {}
for _names, _code in _ERRNO_GROUPS:
    for _name in _names:
        _value = getattr(errno, _name, None)
        if _value is not None:
            ERRNO_CODES.setdefault(_value, _code)

# OSError subclasses raised without an errno (e.g. socket.timeout)
_EXCEPTION_CODES: tuple[tuple[type, ErrorCode], ...] = (
    (BlockingIOError, ErrorCode.WOULD_BLOCK),
    (InterruptedError, ErrorCode.INTERRUPTED),
    (TimeoutError, ErrorCode.CONNECTION_TIMEOUT),
    (ConnectionRefusedError, ErrorCode.CONNECTION_REFUSED),
    (ConnectionResetError, ErrorCode.CONNECTION_RESET),
    (BrokenPipeError, ErrorCode.CONNECTION_DEAD),
    (ConnectionAbortedError, ErrorCode.CONNECTION_DEAD),
    (PermissionError, ErrorCode.NOT_AUTHORIZED),
    (NotImplementedError, ErrorCode.NOT_IMPLEMENTED),
    (EOFError, ErrorCode.EOF),
    (ValueError, ErrorCode.INVALID),
    (TypeError, ErrorCode.INVALID),
    (MemoryError, ErrorCode.LIMIT),
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Error(BaseModel):
    """
    Outcome of an operation: a classification code plus the system error
    number it was derived from (0 when there is none).
    """

    model_config = ConfigDict(frozen=True)

    code: ErrorCode = ErrorCode.OK
    number: int = 0

    # -------- factories --------

    @classmethod
    def from_code(cls, code: ErrorCode) -> "Error":
        return cls(code=ErrorCode(code))

    @classmethod
    def from_errno(cls, number: int) -> "Error":
        if number == 0:
            return cls()
        return cls(code=ERRNO_CODES.get(number, ErrorCode.UNKNOWN), number=number)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Error":
        number = getattr(exc, "errno", None)
        if isinstance(exc, OSError) and isinstance(number, int) and number != 0:
            return cls.from_errno(number)

        for exc_type, code in _EXCEPTION_CODES:
            if isinstance(exc, exc_type):
                return cls(code=code)

        return cls(code=ErrorCode.UNKNOWN)

    # -------- value semantics --------

    def __bool__(self) -> bool:
        return self.code != ErrorCode.OK

    @property
    def ok(self) -> bool:
        return self.code == ErrorCode.OK

    def compare(self, other: "Error") -> int:
        if self.code != other.code:
            return _sign(int(self.code) - int(other.code))
        return _sign(self.number - other.number)

    def equals(self, other: "Error") -> bool:
        return self.compare(other) == 0

    def less(self, other: "Error") -> bool:
        return self.compare(other) < 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return not self.equals(other)

    def __lt__(self, other: "Error") -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return self.less(other)

    def __le__(self, other: "Error") -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return not other.less(self)

    def __gt__(self, other: "Error") -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return other.less(self)

    def __ge__(self, other: "Error") -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return not self.less(other)

    def __hash__(self) -> int:
        return hash((int(self.code), self.number))

    def hash_append(self, algorithm: Any) -> None:
        algorithm.update(int(self.code).to_bytes(4, "big", signed=True))
        # Length-prefixed so any int, not just the C range, is encoded
        number = self.number.to_bytes(self.number.bit_length() // 8 + 1, "big", signed=True)
        algorithm.update(len(number).to_bytes(8, "big"))
        algorithm.update(number)

    # -------- rendering --------

    def text(self) -> str:
        if self.number == 0:
            return self.code.name
        try:
            description = os.strerror(self.number)
        except (OverflowError, ValueError):
            return f"{self.code.name} ({self.number})"
        return f"{self.code.name} ({self.number}: {description})"

    def print(self, stream: TextIO, level: int = 0, spaces_per_level: int = 4) -> TextIO:
        return print_scalar(stream, self.text(), level, spaces_per_level)

    def __str__(self) -> str:
        return self.text()

    def __repr__(self) -> str:
        return f"Error(code={self.code.name}, number={self.number})"

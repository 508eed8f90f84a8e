from typing import Any, Callable, Optional, TextIO, Union

from cryptography.hazmat.primitives import constant_time

from tlscore.core.config import get_settings
from tlscore.errors.error import Error
from tlscore.utils.logger import log_debug
from tlscore.utils.printer import Printer, to_string

BytesLike = Union[bytes, bytearray, memoryview]


class SecretBuffer:
    """
    Best-effort in-memory secret container for symmetric key material.
    Uses a private mutable bytearray to allow explicit zeroization; content
    is never shared with the caller's buffers.

    Not thread safe.
    """

    __slots__ = ("_buf",)

    def __init__(self, original: Optional[Union["SecretBuffer", BytesLike]] = None):
        self._buf = bytearray()
        if original is not None:
            self.append(original)

    def __copy__(self) -> "SecretBuffer":
        return SecretBuffer(self)

    def __deepcopy__(self, memo) -> "SecretBuffer":
        return SecretBuffer(self)

    def assign(self, other: "SecretBuffer") -> "SecretBuffer":
        if other is not self:
            snapshot = bytes(other._buf)
            self.reset()
            self._buf.extend(snapshot)
        return self

    # -------- modifiers --------

    def reset(self) -> None:
        # Zero the storage before truncating
        for i in range(len(self._buf)):
            self._buf[i] = 0
        self._buf.clear()

    wipe = reset

    def append(self, data: Union[int, BytesLike], size: Optional[int] = None) -> None:
        """
        Append a single signed or unsigned byte value, or the first `size`
        bytes of a bytes-like region (all of it when `size` is omitted).
        """
        if isinstance(data, bool):
            raise TypeError("cannot append a bool to a secret")

        if isinstance(data, int):
            if size is not None:
                raise TypeError("size is only accepted with a bytes-like region")
            if not -128 <= data <= 255:
                raise ValueError(f"byte value out of range: {data}")
            data = bytes((data & 0xFF,))

        if isinstance(data, SecretBuffer):
            data = data._buf

        # Snapshot first: the region may be this buffer itself
        try:
            chunk = bytes(data)
        except TypeError:
            raise TypeError(f"cannot append object of type {type(data).__name__} to a secret") from None

        if size is None:
            size = len(chunk)
        elif size < 0 or size > len(chunk):
            raise ValueError(f"size {size} exceeds the {len(chunk)} bytes available")

        self._buf.extend(chunk[:size])

    # -------- accessors --------

    def copy(self, destination: Union[bytearray, memoryview], capacity: Optional[int] = None) -> int:
        """
        Copy the secret to `destination` and return the number of bytes
        copied. The copy is truncated when `capacity` is less than the size
        of the secret; compare the result against size() to detect it.
        """
        with memoryview(destination) as view, view.cast("B") as target:
            if target.readonly:
                raise TypeError("destination is not writable")

            if capacity is None:
                capacity = len(target)
            elif capacity < 0 or capacity > len(target):
                raise ValueError(f"capacity {capacity} exceeds destination of {len(target)} bytes")

            count = min(len(self._buf), capacity)
            target[:count] = self._buf[:count]

        if count < len(self._buf):
            log_debug(f"truncated {len(self._buf)} byte secret to {count} bytes", "SecretBuffer.copy", service="secret")
        return count

    def data(self) -> bytes:
        """
        Return an immutable copy of the secret. The copy is independent of
        this buffer: reset() zeroes only the buffer's own storage and cannot
        wipe copies already handed out. Prefer copy() into a caller-owned
        bytearray when the material must be wiped after use.
        """
        return bytes(self._buf)

    def size(self) -> int:
        return len(self._buf)

    def empty(self) -> bool:
        return not self._buf

    def __len__(self) -> int:
        return len(self._buf)

    def __bool__(self) -> bool:
        return bool(self._buf)

    # -------- comparison --------

    def compare(self, other: "SecretBuffer") -> int:
        """Three-way lexicographic comparison; the shorter sequence wins ties."""
        lhs, rhs = self._buf, other._buf
        if len(lhs) == len(rhs) and constant_time.bytes_eq(bytes(lhs), bytes(rhs)):
            return 0
        return -1 if lhs < rhs else 1

    def equals(self, other: "SecretBuffer") -> bool:
        return self.compare(other) == 0

    def less(self, other: "SecretBuffer") -> bool:
        return self.compare(other) < 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return not self.equals(other)

    def __lt__(self, other: "SecretBuffer") -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return self.less(other)

    def __le__(self, other: "SecretBuffer") -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return not other.less(self)

    def __gt__(self, other: "SecretBuffer") -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return other.less(self)

    def __ge__(self, other: "SecretBuffer") -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return not self.less(other)

    # Hash follows content: do not mutate a secret while it keys a container
    def __hash__(self) -> int:
        return hash(bytes(self._buf))

    def hash_append(self, algorithm: Any) -> None:
        algorithm.update(bytes(self._buf))

    # -------- rendering --------

    def print(self, stream: TextIO, level: int = 0, spaces_per_level: int = 4) -> TextIO:
        printer = Printer(stream, level, spaces_per_level)
        printer.start()
        printer.print_attribute("size", len(self._buf))
        if get_settings().SECRET_PRINT_MODE == "hex":
            printer.print_attribute("data", bytes(self._buf))
        else:
            printer.print_attribute("data", "<redacted>")
        printer.end()
        return stream

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return f"SecretBuffer(size={len(self._buf)})"


# Load into the supplied secret and return the outcome (Error() on success)
SecretCallback = Callable[[SecretBuffer], Error]

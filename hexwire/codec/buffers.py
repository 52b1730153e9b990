"""Buffer helpers shared by the codec operations.

Text buffers are plain ``bytearray`` objects with a declared capacity.
Every writer puts a NUL terminator after its output and never touches
``buf[capacity:]``.
"""
from typing import Optional, Union

from hexwire.utils.constants import NUL

BytesLike = Union[bytes, bytearray, memoryview]
TextLike = Union[str, bytes, bytearray, memoryview]

_PRINTABLE = frozenset(range(0x20, 0x7f))
_WHITESPACE = frozenset(b" \t\n\v\f\r")

_HEX_VALUES = {c: int(chr(c), 16) for c in b"0123456789abcdefABCDEF"}


def isprint(b: int) -> bool:
    """C-locale isprint(): 0x20 (space) through 0x7e."""
    return b in _PRINTABLE


def isspace(b: int) -> bool:
    """C-locale isspace(): space, \\t, \\n, \\v, \\f, \\r."""
    return b in _WHITESPACE


def hex_value(c: int) -> Optional[int]:
    """Value of a single hex digit character, or None if it isn't one."""
    return _HEX_VALUES.get(c)


def check_capacity(buf, capacity: Optional[int]) -> int:
    """Validate a declared destination capacity against the real buffer.

    ``None`` means "the whole buffer".
    """
    size = len(buf)
    if capacity is None:
        return size
    if capacity < 0:
        raise ValueError(f"capacity must not be negative (got {capacity})")
    if capacity > size:
        raise ValueError(f"declared capacity {capacity} exceeds buffer size {size}")
    return capacity


def check_length(src, length: Optional[int]) -> int:
    """Validate a declared source length against the real buffer."""
    size = len(src)
    if length is None:
        return size
    if length < 0:
        raise ValueError(f"length must not be negative (got {length})")
    if length > size:
        raise ValueError(f"declared length {length} exceeds buffer size {size}")
    return length


def as_bytes(text: TextLike) -> BytesLike:
    """Accept str or bytes-like input; str must be Latin-1 representable."""
    if isinstance(text, str):
        return text.encode("latin-1")
    return text


def text_length(src: BytesLike, limit: int) -> int:
    """Length of a terminated text buffer, scanning at most ``limit`` bytes."""
    limit = min(limit, len(src))
    for i in range(limit):
        if src[i] == NUL:
            return i
    return limit


def cstring(buf: BytesLike) -> str:
    """Read a terminated text buffer back as a str."""
    end = text_length(buf, len(buf))
    return bytes(buf[:end]).decode("latin-1")

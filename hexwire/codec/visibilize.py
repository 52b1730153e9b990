"""Best-effort printable rendering of arbitrary bytes, for debug output."""
from typing import Optional

from hexwire.utils.constants import NUL, VIS_EXPANSION
from .buffers import BytesLike, check_capacity, check_length, cstring, isprint


def visibilize(dst: bytearray, dstlen: Optional[int], src: Optional[BytesLike],
               srclen: Optional[int]) -> bytearray:
    """Copy printable bytes as-is and render the rest as ``\\xHH``.

    Stops as soon as a worst-case write (4 characters) would leave no room
    for the terminator. Backslashes are not escaped, so the output can't
    be decoded back unambiguously.
    """
    dstlen = check_capacity(dst, dstlen)
    if dstlen == 0:
        return dst
    if src is None:
        dst[0] = NUL
        return dst

    srclen = check_length(src, srclen)
    nxt = 0
    for i in range(srclen):
        if nxt + VIS_EXPANSION > dstlen - 1:
            break
        b = src[i]
        if isprint(b):
            dst[nxt] = b
            nxt += 1
        else:
            dst[nxt:nxt + 4] = b"\\x%02x" % b
            nxt += 4
    dst[nxt] = NUL
    return dst


def vis(data: Optional[BytesLike], capacity: Optional[int] = None) -> str:
    """Visibilize ``data`` into a fresh buffer and return the text.

    Without ``capacity`` the buffer is large enough for the whole input.
    """
    if not data:
        return ""
    if capacity is None:
        capacity = len(data) * VIS_EXPANSION + 1
    buf = bytearray(capacity)
    return cstring(visibilize(buf, capacity, data, len(data)))

"""Packet dumps: text packets as-is, anything else as hex."""
from typing import Optional, Union

from hexwire.utils.constants import MAX_PACKET_LENGTH
from .buffers import BytesLike, check_length, cstring, isprint, isspace
from .hexcodec import hex_encode


def is_printable(src: BytesLike, srclen: Optional[int] = None) -> bool:
    """True when every byte is printable or whitespace (empty counts)."""
    srclen = check_length(src, srclen)
    for i in range(srclen):
        b = src[i]
        if not isprint(b) and not isspace(b):
            return False
    return True


def packet_dump(dst: bytearray, dstlen: Optional[int], src: Optional[BytesLike],
                srclen: Optional[int]) -> Union[memoryview, bytearray]:
    """Pick a loggable rendering of a packet.

    If ``src`` is all printable/whitespace a read-only view over the
    caller's own buffer is returned, no copy is made. Otherwise the packet
    is hex encoded into ``dst`` and ``dst`` is returned.
    """
    if src is None:
        return memoryview(b"")
    srclen = check_length(src, srclen)
    if is_printable(src, srclen):
        return memoryview(src)[:srclen].toreadonly()
    return hex_encode(dst, dstlen, src, srclen)


def dump(data: Optional[BytesLike], capacity: Optional[int] = None) -> str:
    """packet_dump into a fresh buffer, returned as str."""
    if data is None:
        return ""
    if capacity is None:
        capacity = min(len(data), MAX_PACKET_LENGTH) * 2 + 1
    buf = bytearray(capacity)
    out = packet_dump(buf, capacity, data, len(data))
    if out is buf:
        return cstring(buf)
    return bytes(out).decode("ascii")

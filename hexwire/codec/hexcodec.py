"""Binary <-> hex ASCII conversion.

Encoding always emits lowercase digit pairs with no separators. Decoding
accepts either case and stops at the first NUL of the source text.
"""
from typing import Optional

from hexwire.utils.constants import MAX_PACKET_LENGTH, HEX_SCAN_LIMIT, HEX_DIGITS, NUL
from hexwire.utils.exceptions import InvalidLength, InvalidDigit
from .buffers import (
    BytesLike, TextLike,
    check_capacity, check_length, cstring, hex_value, text_length,
)


def hex_encode(dst: bytearray, dstlen: Optional[int], src: Optional[BytesLike],
               srclen: Optional[int], limit: int = MAX_PACKET_LENGTH) -> bytearray:
    """Write ``src[:srclen]`` into ``dst`` as lowercase hex text.

    At most ``limit`` source bytes are converted. A pair is only written
    when it and the terminator fit inside ``dstlen``; anything beyond is
    dropped without error.

    Returns:
        ``dst``, so calls can be chained.
    """
    dstlen = check_capacity(dst, dstlen)
    if dstlen == 0:
        return dst
    if src is None or srclen == 0:
        dst[0] = NUL
        return dst

    count = min(limit, check_length(src, srclen))
    j = 0
    for i in range(count):
        if j + 3 > dstlen:
            break
        b = src[i]
        dst[j] = HEX_DIGITS[(b & 0xf0) >> 4]
        dst[j + 1] = HEX_DIGITS[b & 0x0f]
        j += 2
    dst[j] = NUL
    return dst


def _hex_text(src: TextLike) -> BytesLike:
    # One byte per character; anything outside Latin-1 becomes "?" and fails the digit check
    if isinstance(src, str):
        return src.encode("latin-1", errors="replace")
    return src


def _unpack(text: BytesLike, length: int, dst, dstlen: int, chars: Optional[str] = None) -> int:
    pairs = length // 2
    if pairs < 1 or pairs > dstlen:
        raise InvalidLength(
            f"{length} hex characters decode to {pairs} bytes, capacity is {dstlen}",
            pairs=pairs, capacity=dstlen,
        )

    for i in range(pairs):
        hi = hex_value(text[i * 2])
        lo = hex_value(text[i * 2 + 1])
        if hi is None or lo is None:
            pos = i * 2 if hi is None else i * 2 + 1
            char = chars[pos] if chars is not None else chr(text[pos])
            raise InvalidDigit(f"invalid hex digit {char!r} at offset {pos}", position=pos, char=char)
        dst[i] = (hi << 4) | lo

    dst[pairs:dstlen] = bytes(dstlen - pairs)
    return pairs


def hex_decode(src: TextLike, dst, dstlen: Optional[int] = None) -> int:
    """Decode hex text into ``dst``.

    ``src`` ends at its first NUL or after HEX_SCAN_LIMIT characters. An
    odd trailing digit is ignored. On success the rest of ``dst`` up to
    ``dstlen`` is zeroed.

    Returns:
        Number of bytes decoded.

    Raises:
        InvalidLength: no complete pair, or more pairs than ``dstlen``.
        InvalidDigit: a non-hex character was found. Bytes decoded before
            it are left in ``dst``.
    """
    dstlen = check_capacity(dst, dstlen)
    text = _hex_text(src)
    chars = src if isinstance(src, str) else None
    return _unpack(text, text_length(text, HEX_SCAN_LIMIT), dst, dstlen, chars)


def hex_decode_inplace(buf, buflen: Optional[int] = None) -> int:
    """Decode the hex text held in ``buf`` over itself.

    Pair ``i`` is read from offsets ``2i`` and ``2i + 1`` before byte ``i``
    is written, so the source is never clobbered ahead of the reader.
    """
    buflen = check_capacity(buf, buflen)
    return _unpack(buf, text_length(buf, min(buflen, HEX_SCAN_LIMIT)), buf, buflen)


def hexlify(data: Optional[BytesLike], limit: int = MAX_PACKET_LENGTH) -> str:
    """Hex-encode ``data`` into a right-sized buffer and return it as str."""
    if not data:
        return ""
    buf = bytearray(min(len(data), limit) * 2 + 1)
    return cstring(hex_encode(buf, len(buf), data, len(data), limit=limit))


def unhexlify(text: TextLike) -> bytes:
    raw = _hex_text(text)
    buf = bytearray(max(text_length(raw, HEX_SCAN_LIMIT) // 2, 1))
    count = hex_decode(text, buf, len(buf))
    return bytes(buf[:count])

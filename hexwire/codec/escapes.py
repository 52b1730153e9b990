"""C-style backslash escape interpreter.

Recognized escapes::

    \\b  backspace          \\n  newline            \\v  vertical tab
    \\e  ESC (0x1b)         \\r  carriage return    \\\\  backslash
    \\f  form feed          \\t  tab                \\xHH  byte 0xHH

Every escape collapses to exactly one output byte, so the cooked form is
never longer than the raw text.
"""
from hexwire.utils.constants import NUL
from hexwire.utils.exceptions import BadHexHighNibble, BadHexLowNibble, UnknownEscape
from .buffers import TextLike, as_bytes, hex_value, text_length

BACKSLASH = 0x5c

_SIMPLE_ESCAPES = {
    ord("b"): 0x08,
    ord("e"): 0x1b,
    ord("f"): 0x0c,
    ord("n"): 0x0a,
    ord("r"): 0x0d,
    ord("t"): 0x09,
    ord("v"): 0x0b,
    BACKSLASH: BACKSLASH,
}


def _at(text, pos: int, end: int) -> int:
    # Reading past the end behaves like hitting the terminator
    return text[pos] if pos < end else NUL


def _describe(c: int) -> str:
    return "end of input" if c == NUL else repr(chr(c))


def decode_escapes(cooked, raw: TextLike) -> int:
    """Interpret the escapes in ``raw`` and write the result into ``cooked``.

    ``raw`` ends at its first NUL. ``cooked`` must hold at least as many
    bytes as that text.

    Returns:
        Number of bytes written to ``cooked``.

    Raises:
        BadHexHighNibble: first digit after ``\\x`` is not hex.
        BadHexLowNibble: second digit after ``\\x`` is not hex.
        UnknownEscape: backslash followed by anything else, including
            the end of input.
    """
    text = as_bytes(raw)
    end = text_length(text, len(text))
    if len(cooked) < end:
        raise ValueError(f"cooked buffer holds {len(cooked)} bytes, raw text is {end}")

    out = 0
    i = 0
    while i < end:
        c = text[i]
        if c != BACKSLASH:
            cooked[out] = c
            out += 1
            i += 1
            continue

        letter = _at(text, i + 1, end)
        if letter in _SIMPLE_ESCAPES:
            cooked[out] = _SIMPLE_ESCAPES[letter]
            i += 2
        elif letter == ord("x"):
            c = _at(text, i + 2, end)
            hi = hex_value(c)
            if hi is None:
                raise BadHexHighNibble(
                    f"bad first hex digit {_describe(c)} in \\x escape at offset {i}",
                    position=i + 2, char=chr(c),
                )
            c = _at(text, i + 3, end)
            lo = hex_value(c)
            if lo is None:
                raise BadHexLowNibble(
                    f"bad second hex digit {_describe(c)} in \\x escape at offset {i}",
                    position=i + 3, char=chr(c),
                )
            cooked[out] = (hi << 4) | lo
            i += 4
        else:
            raise UnknownEscape(
                f"unknown escape \\{chr(letter) if letter else ''} at offset {i}",
                position=i + 1, char=chr(letter),
            )
        out += 1

    return out


def unescape(raw: TextLike) -> bytes:
    """Decode an escape string straight to bytes."""
    text = as_bytes(raw)
    cooked = bytearray(len(text))
    count = decode_escapes(cooked, text)
    return bytes(cooked[:count])

"""Codec Layer - byte buffer <-> text transcoding."""

from .buffers import isprint, isspace, cstring
from .hexcodec import hex_encode, hex_decode, hex_decode_inplace, hexlify, unhexlify
from .escapes import decode_escapes, unescape
from .visibilize import visibilize, vis
from .dump import packet_dump, is_printable, dump

__all__ = [
    # Buffer operations
    "packet_dump",
    "hex_encode",
    "hex_decode",
    "hex_decode_inplace",
    "decode_escapes",
    "visibilize",
    # Convenience wrappers
    "hexlify",
    "unhexlify",
    "unescape",
    "vis",
    "dump",
    # Predicates and helpers
    "isprint",
    "isspace",
    "is_printable",
    "cstring",
]

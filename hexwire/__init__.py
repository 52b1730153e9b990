__version__ = "0.1.0"

from .codec import (
    packet_dump, hex_encode, hex_decode, hex_decode_inplace,
    decode_escapes, visibilize,
    hexlify, unhexlify, unescape, vis, dump,
)
from .utils.exceptions import (
    HexwireException, CodecError,
    InvalidLength, InvalidDigit,
    BadHexHighNibble, BadHexLowNibble, UnknownEscape,
)

__all__ = [
    '__version__',
    'packet_dump', 'hex_encode', 'hex_decode', 'hex_decode_inplace',
    'decode_escapes', 'visibilize',
    'hexlify', 'unhexlify', 'unescape', 'vis', 'dump',
    'HexwireException', 'CodecError',
    'InvalidLength', 'InvalidDigit',
    'BadHexHighNibble', 'BadHexLowNibble', 'UnknownEscape',
]

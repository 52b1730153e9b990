from .constants import (
    MAX_PACKET_LENGTH, HEX_SCAN_LIMIT, HEX_DIGITS,
    DEFAULT_BAUDRATE, DEFAULT_TIMEOUT, DEFAULT_DUMP_BUFFER,
    CONFIG_FILE_NAME, ENV_PREFIX, CONSOLE_WIDTH,
)
from .exceptions import (
    HexwireException,
    CodecError, HexDecodeError, InvalidLength, InvalidDigit,
    EscapeError, BadHexHighNibble, BadHexLowNibble, UnknownEscape,
    TransportError, SerialError,
    CLIError, ValidationError, ConfigError,
)

__all__ = [
    'MAX_PACKET_LENGTH', 'HEX_SCAN_LIMIT', 'HEX_DIGITS',
    'DEFAULT_BAUDRATE', 'DEFAULT_TIMEOUT', 'DEFAULT_DUMP_BUFFER',
    'CONFIG_FILE_NAME', 'ENV_PREFIX', 'CONSOLE_WIDTH',
    'HexwireException',
    'CodecError', 'HexDecodeError', 'InvalidLength', 'InvalidDigit',
    'EscapeError', 'BadHexHighNibble', 'BadHexLowNibble', 'UnknownEscape',
    'TransportError', 'SerialError',
    'CLIError', 'ValidationError', 'ConfigError',
]

# Largest packet the hex encoder will convert in one call
MAX_PACKET_LENGTH = 9216

# Upper bound on how far hex_decode scans for a terminator; a fully
# encoded MAX_PACKET_LENGTH packet plus its terminator fits
HEX_SCAN_LIMIT = 2 * MAX_PACKET_LENGTH + 1

HEX_DIGITS = b"0123456789abcdef"
NUL = 0

# Serial defaults
DEFAULT_BAUDRATE = 115200
DEFAULT_TIMEOUT = 1.0
SERIAL_PREFIX = "serial:"

# Enough for a fully hex-encoded MAX_PACKET_LENGTH packet plus terminator
DEFAULT_DUMP_BUFFER = MAX_PACKET_LENGTH * 2 + 1

# Worst case visibilize output: every byte becomes \xHH
VIS_EXPANSION = 4

CONFIG_FILE_NAME = ".hexwire"
ENV_PREFIX = "HEXWIRE_"

CONSOLE_WIDTH = 100

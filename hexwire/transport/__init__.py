from .base import Transport
from .serial import SerialTransport, list_serial_ports
from hexwire.utils.constants import DEFAULT_BAUDRATE, DEFAULT_TIMEOUT, SERIAL_PREFIX


def create_transport(connection_string: str, baudrate: int = DEFAULT_BAUDRATE,
                     timeout: float = DEFAULT_TIMEOUT) -> Transport:
    """Create a serial transport for the given connection string.

    Args:
        connection_string: Serial port name (e.g., 'COM3', '/dev/ttyUSB0', 'serial:COM3')
        baudrate: Serial baud rate (default: 115200)
        timeout: Read timeout in seconds (default: 1.0)

    Returns:
        SerialTransport instance
    """
    port = connection_string
    if connection_string.startswith(SERIAL_PREFIX):
        port = connection_string[len(SERIAL_PREFIX):]

    return SerialTransport(port=port, baudrate=baudrate, timeout=timeout)


__all__ = [
    'Transport',
    'SerialTransport',
    'create_transport',
    'list_serial_ports',
]

from typing import List, Tuple

from .base import Transport
from hexwire.utils.constants import DEFAULT_BAUDRATE, DEFAULT_TIMEOUT
from hexwire.utils.exceptions import TransportError, SerialError

try:
    import serial
    from serial.tools.list_ports import comports as list_ports_comports
except ImportError:
    raise ImportError("pyserial is required. Install with: pip install pyserial")


_DISCONNECT_HINTS = ("clearcommerror", "not exist", "cannot find", "access is denied",
                     "errno 6", "device not configured", "no such device")


def _is_disconnect(e: Exception) -> bool:
    error_msg = str(e).lower()
    return any(hint in error_msg for hint in _DISCONNECT_HINTS)


def _wrap(e: Exception, action: str) -> TransportError:
    if _is_disconnect(e):
        return SerialError("Serial port disconnected (device removed or cable unplugged)")
    return SerialError(f"Serial {action} error: {e}")


class SerialTransport(Transport):

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUDRATE, timeout: float = DEFAULT_TIMEOUT):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial = None

        try:
            self._serial = serial.Serial(
                port=port,
                baudrate=baudrate,
                timeout=timeout,
                write_timeout=timeout,
                inter_byte_timeout=0.1
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open serial port {port}: {e}") from e

    def write(self, data: bytes) -> int:
        try:
            written = self._serial.write(data)
            self._serial.flush()
            return written
        except serial.SerialException as e:
            raise _wrap(e, "write") from e

    def read(self, size: int = 1) -> bytes:
        try:
            return self._serial.read(size)
        except serial.SerialException as e:
            raise _wrap(e, "read") from e

    def read_available(self, max_size: int = None) -> bytes:
        try:
            waiting = self._serial.in_waiting
            if max_size is not None:
                waiting = min(waiting, max_size)
            if waiting > 0:
                return self._serial.read(waiting)
            return b""
        except (serial.SerialException, OSError) as e:
            raise _wrap(e, "read_available") from e

    def close(self) -> None:
        if self._serial:
            try:
                if self._serial.is_open:
                    try:
                        self._serial.cancel_read()
                    except Exception:
                        pass
                    self._serial.close()
            except (serial.SerialException, OSError):
                pass
            finally:
                self._serial = None

    def reset_input_buffer(self) -> None:
        if self._serial:
            self._serial.reset_input_buffer()

    @property
    def is_open(self) -> bool:
        return self._serial.is_open if self._serial else False


def list_serial_ports() -> List[Tuple[str, str, str]]:
    """Return (device, description, hwid) for every serial port the OS reports."""
    ports = []
    for info in sorted(list_ports_comports(), key=lambda p: p.device):
        ports.append((info.device, info.description or "", info.hwid or ""))
    return ports

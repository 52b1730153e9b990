from abc import ABC, abstractmethod


class Transport(ABC):
    """Byte pipe to a device. Implementations raise TransportError on failure."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        pass

    @abstractmethod
    def read(self, size: int = 1) -> bytes:
        pass

    @abstractmethod
    def read_available(self, max_size: int = None) -> bytes:
        pass

    def read_packet(self, max_size: int) -> bytes:
        """Block for up to one timeout and return whatever arrived, capped at max_size."""
        first = self.read(1)
        if not first:
            return b""
        return first + self.read_available(max_size - 1)

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def reset_input_buffer(self) -> None:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

class HexwireException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class CodecError(HexwireException):
    # Negative status returned by status-code APIs for the same failure
    code = -1


class HexDecodeError(CodecError):
    pass


class InvalidLength(HexDecodeError):
    code = -2

    def __init__(self, message: str, pairs: int = 0, capacity: int = 0):
        super().__init__(message)
        self.pairs = pairs
        self.capacity = capacity


class InvalidDigit(HexDecodeError):
    code = -1

    def __init__(self, message: str, position: int = 0, char: str = ""):
        super().__init__(message)
        self.position = position
        self.char = char


class EscapeError(CodecError):
    def __init__(self, message: str, position: int = 0, char: str = ""):
        super().__init__(message)
        self.position = position
        self.char = char


class BadHexHighNibble(EscapeError):
    code = -1


class BadHexLowNibble(EscapeError):
    code = -2


class UnknownEscape(EscapeError):
    code = -3


class TransportError(HexwireException):
    pass


class SerialError(TransportError):
    pass


class CLIError(HexwireException):
    pass


class ValidationError(CLIError):
    pass


class ConfigError(CLIError):
    pass

from . import codec
from . import device
from . import utility

from ..helpers import OutputHelper, CONSOLE_WIDTH

__all__ = [
    'OutputHelper',
    'CONSOLE_WIDTH',
]

from .config import (
    RuntimeState, STATE, GLOBAL_OPTIONS, ConfigManager,
)
from .app import app, main

__all__ = [
    'RuntimeState', 'STATE', 'GLOBAL_OPTIONS', 'ConfigManager',
    'app', 'main'
]

"""
Configuration management for hexwire CLI.

Handles:
- .hexwire INI file reading/writing
- Environment variable overrides (HEXWIRE_*)
- Setting resolution (global option -> environment -> .hexwire -> defaults)
"""

import os
from dataclasses import dataclass, fields
from typing import Optional, Dict, Any

from hexwire.utils.constants import (
    CONFIG_FILE_NAME, ENV_PREFIX,
    DEFAULT_BAUDRATE, DEFAULT_TIMEOUT, DEFAULT_DUMP_BUFFER, MAX_PACKET_LENGTH,
)
from hexwire.utils.exceptions import ConfigError


# ============================================================================
# Runtime State
# ============================================================================

@dataclass
class RuntimeState:
    """Effective settings for the current invocation."""
    port: Optional[str] = None
    baudrate: int = DEFAULT_BAUDRATE
    timeout: float = DEFAULT_TIMEOUT
    max_packet_length: int = MAX_PACKET_LENGTH
    buffer_size: int = DEFAULT_DUMP_BUFFER
    config_path: Optional[str] = None

    def update(self, other: "RuntimeState"):
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))


# Singleton instance
STATE = RuntimeState()


# ============================================================================
# Global Options (set by CLI callback)
# ============================================================================

class GlobalOptions:
    """Global CLI options storage."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._port = None
            cls._instance._baudrate = None
        return cls._instance

    @property
    def port(self) -> Optional[str]:
        return self._port

    @property
    def baudrate(self) -> Optional[int]:
        return self._baudrate

    def set(self, port: str = None, baudrate: int = None):
        """Set global options."""
        self._port = port
        self._baudrate = baudrate

    def get(self) -> Dict[str, Any]:
        """Get all global options as dict."""
        return {
            'port': self._port,
            'baudrate': self._baudrate
        }

    def clear(self):
        """Clear all global options."""
        self._port = None
        self._baudrate = None


# Singleton instance
GLOBAL_OPTIONS = GlobalOptions()


# ============================================================================
# Config File Management
# ============================================================================

# KEY -> (section, RuntimeState field, converter)
_KEYS = {
    'PORT': ('SERIAL', 'port', str),
    'BAUDRATE': ('SERIAL', 'baudrate', int),
    'TIMEOUT': ('SERIAL', 'timeout', float),
    'MAX_PACKET_LENGTH': ('CODEC', 'max_packet_length', int),
    'BUFFER_SIZE': ('CODEC', 'buffer_size', int),
}

_SECTIONS = ('SERIAL', 'CODEC')


def _convert(key: str, value: str):
    """Convert a raw setting to its typed value, validating the range."""
    _section, _field, conv = _KEYS[key]
    try:
        result = conv(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be {conv.__name__}, got {value!r}") from e

    if conv is int and result < 1:
        raise ConfigError(f"{key} must be at least 1, got {result}")
    if conv is float and result <= 0:
        raise ConfigError(f"{key} must be greater than 0, got {result}")
    if conv is str and not result.strip():
        raise ConfigError(f"{key} must not be empty")
    return result


class ConfigManager:
    """
    Manages .hexwire configuration file (INI format).

    File format:
        [SERIAL]
        PORT=/dev/ttyUSB0
        BAUDRATE=9600
        TIMEOUT=0.5

        [CODEC]
        MAX_PACKET_LENGTH=9216
        BUFFER_SIZE=4096
    """

    @staticmethod
    def find_config_file(start: str = None) -> Optional[str]:
        """Find .hexwire by searching up from ``start`` (default: cwd)."""
        current = os.path.realpath(start or os.getcwd())

        visited = set()
        while current not in visited:
            visited.add(current)
            path = os.path.join(current, CONFIG_FILE_NAME)
            if os.path.isfile(path):
                return path
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return None

    @staticmethod
    def read(path: str) -> dict:
        """
        Read INI-style .hexwire file.

        Returns:
            dict with structure:
            {
                'SERIAL': {'PORT': '/dev/ttyUSB0', ...},
                'CODEC': {'BUFFER_SIZE': '4096', ...}
            }
            Values are the raw strings; unknown keys and sections are dropped.
        """
        result = {section: {} for section in _SECTIONS}

        if not path or not os.path.exists(path):
            return result

        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        current_section = None

        for line in content.splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#') or line.startswith(';'):
                continue

            if line.startswith('[') and line.endswith(']'):
                current_section = line[1:-1].strip().upper()
                continue

            if '=' in line and current_section in result:
                key, value = line.split('=', 1)
                key = key.strip().upper()
                if key in _KEYS and _KEYS[key][0] == current_section:
                    result[current_section][key] = value.strip()

        return result

    @staticmethod
    def write(path: str, data: dict):
        """Write INI-style .hexwire file from a read()-shaped dict."""
        lines = []

        for section in _SECTIONS:
            values = data.get(section) or {}
            if not values:
                continue
            lines.append(f'[{section}]')
            for key, value in values.items():
                lines.append(f'{key}={value}')
            lines.append('')

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

    @staticmethod
    def set_value(key: str, value: str, path: str = None) -> str:
        """Validate and store one setting. Returns the file written."""
        key = key.strip().upper()
        if key not in _KEYS:
            raise ConfigError(f"Unknown setting {key!r} (expected one of: {', '.join(_KEYS)})")
        _convert(key, value)

        if path is None:
            path = ConfigManager.find_config_file() or os.path.join(os.getcwd(), CONFIG_FILE_NAME)

        data = ConfigManager.read(path)
        data[_KEYS[key][0]][key] = value.strip()
        ConfigManager.write(path, data)
        return path

    @staticmethod
    def resolve(port: str = None, baudrate: int = None, path: str = None,
                environ: dict = None) -> RuntimeState:
        """
        Build the effective settings. Priority:
        1. Global options (--port, --baud)
        2. HEXWIRE_* environment variables
        3. .hexwire file
        4. Built-in defaults
        """
        if environ is None:
            environ = os.environ
        if path is None:
            path = ConfigManager.find_config_file()

        state = RuntimeState(config_path=path)

        file_data = ConfigManager.read(path)
        for key, (section, attr, _conv) in _KEYS.items():
            raw = file_data[section].get(key)
            if raw is not None:
                setattr(state, attr, _convert(key, raw))

        for key, (_section, attr, _conv) in _KEYS.items():
            raw = environ.get(ENV_PREFIX + key)
            if raw:
                setattr(state, attr, _convert(key, raw))

        if port:
            state.port = port
        if baudrate is not None:
            state.baudrate = _convert('BAUDRATE', str(baudrate))

        return state


def _set_global_options(port: str = None, baudrate: int = None):
    GLOBAL_OPTIONS.set(port, baudrate)


def _load_state() -> RuntimeState:
    """Resolve settings from global options and store them in STATE."""
    opts = GLOBAL_OPTIONS.get()
    STATE.update(ConfigManager.resolve(port=opts['port'], baudrate=opts['baudrate']))
    return STATE

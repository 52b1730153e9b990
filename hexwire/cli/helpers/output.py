"""Output formatting and display utilities."""
import time

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from hexwire.utils.exceptions import (
    HexwireException, CodecError, InvalidDigit, EscapeError, TransportError, ConfigError,
)
from . import get_panel_box, CONSOLE_WIDTH


def format_size(size_bytes: int) -> str:
    """Format bytes to human readable string."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f}MB"


def packet_line(direction: str, size: int, text: str, ts: float = None) -> str:
    """Plain log line for one packet: ``HH:MM:SS  IN     12  <text>``."""
    if ts is None:
        ts = time.time()
    stamp = time.strftime("%H:%M:%S", time.localtime(ts))
    return f"{stamp}  {direction:<3} {size:>5}  {text}"


class OutputHelper:
    """Output formatting and display utilities."""

    _console = Console(width=CONSOLE_WIDTH)
    _err_console = Console(width=CONSOLE_WIDTH, stderr=True)

    @staticmethod
    def print_panel(content: str, title: str = "", border_style: str = "blue"):
        """Print content in a rich panel box."""
        OutputHelper._console.print(Panel(content, title=title, title_align="left", border_style=border_style,
                                          box=get_panel_box(), expand=True, width=CONSOLE_WIDTH))

    @staticmethod
    def print_error(message: str, title: str = "Error"):
        """Print an error panel to stderr."""
        OutputHelper._err_console.print(Panel(message, title=title, title_align="left", border_style="red",
                                              box=get_panel_box(), expand=True, width=CONSOLE_WIDTH))

    @staticmethod
    def print_text(text: str, style: str = None):
        """Print data verbatim: no markup, no highlighting, no wrapping."""
        OutputHelper._console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)

    @staticmethod
    def print_packet(direction: str, size: int, text: str):
        color = "bright_green" if direction == "IN" else "bright_cyan"
        line = packet_line(direction, size, escape(text.rstrip("\r\n")))
        OutputHelper._console.print(f"[{color}]{line}[/{color}]", highlight=False, soft_wrap=True)

    @staticmethod
    def handle_error(error: Exception, context: str = "Error") -> bool:
        """
        Handle hexwire errors with user-friendly messages.

        Args:
            error: The exception to handle
            context: Context string for the error (e.g., "Hex Decode")

        Returns:
            True if error was handled, False if it should be re-raised
        """
        if not isinstance(error, HexwireException):
            return False

        message = escape(error.message)

        if isinstance(error, InvalidDigit):
            message += (
                "\n\n[dim]Hex text may only contain [bold]0-9[/bold], [bold]a-f[/bold] "
                "and [bold]A-F[/bold].[/dim]"
            )
        elif isinstance(error, EscapeError):
            message += (
                "\n\n[dim]Supported escapes: \\b \\e \\f \\n \\r \\t \\v \\\\ \\xHH[/dim]"
            )
        elif isinstance(error, TransportError):
            message += (
                "\n\nPlease check:\n"
                "  • Device is powered on and connected\n"
                "  • Port is not in use by another program\n\n"
                "[dim]Run 'hexwire ports' to list available serial ports.[/dim]"
            )
        elif isinstance(error, ConfigError):
            message += "\n\n[dim]Run 'hexwire config' to see the effective settings.[/dim]"

        if isinstance(error, CodecError):
            message += f"\n[dim]status code {error.code}[/dim]"

        OutputHelper.print_error(message, title=context)
        return True

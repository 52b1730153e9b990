import sys
from typing import Optional

import typer

from hexwire import __version__
from .helpers.output import OutputHelper
from .config import _set_global_options


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    help="Binary/text transcoding toolkit for device packets."
)


def _print_main_help():
    lines = []
    lines.append("[bold]Binary/text transcoding toolkit for device packets[/bold]")
    lines.append("[dim]Hex-encode, decode, unescape and dump bytes; talk to serial devices[/dim]")
    lines.append("")
    lines.append("[bold cyan]Usage:[/bold cyan]")
    lines.append("  hexwire [yellow][OPTIONS][/yellow] [green]COMMAND[/green] [[dim]ARGS[/dim]]...")
    lines.append("")
    lines.append("[bold cyan]Global Options:[/bold cyan]")
    lines.append("  [yellow]-p, --port[/yellow] [cyan]PORT[/cyan]       Serial port [dim](COM3, /dev/ttyUSB0)[/dim]")
    lines.append("  [yellow]-b, --baud[/yellow] [cyan]RATE[/cyan]       Baud rate [dim](default 115200)[/dim]")
    lines.append("  [yellow]-v, --version[/yellow]         Show version and exit")

    command_groups = [
        ("Transcoding", [
            ("encode", "Convert bytes to lowercase hex text"),
            ("decode", "Convert hex text back to bytes"),
            ("escape", "Interpret C-style backslash escapes"),
            ("vis", "Render bytes printable, \\xHH for the rest"),
            ("dump", "Show a packet as text if printable, else as hex"),
        ]),
        ("Device", [
            ("ports", "List serial ports"),
            ("monitor", "Read packets from a serial device and dump them"),
            ("send", "Send an escape-coded or hex payload to a serial device"),
        ]),
        ("Settings", [
            ("config", "Show or change settings stored in .hexwire"),
        ]),
    ]

    for group_name, commands in command_groups:
        lines.append("")
        lines.append(f"[bold cyan]{group_name}:[/bold cyan]")
        for cmd, desc in commands:
            lines.append(f"  [green]{cmd:<12}[/green] {desc}")

    lines.append("")
    lines.append("[dim]Use 'hexwire COMMAND --help' for detailed help on each command.[/dim]")

    OutputHelper.print_panel(
        "\n".join(lines),
        title="hexwire",
        border_style="bright_blue"
    )


def _version_callback(value: bool):
    if value:
        OutputHelper.print_panel(
            f"[bright_blue]hexwire[/bright_blue] version [bright_green]{__version__}[/bright_green]",
            title="Version",
            border_style="green"
        )
        raise typer.Exit()


# =============================================================================
# App Callback
# =============================================================================

@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    global_port: Optional[str] = typer.Option(
        None,
        "--port", "-p",
        help="Serial port to use (e.g., COM3)",
        is_eager=True
    ),
    global_baud: Optional[int] = typer.Option(
        None,
        "--baud", "-b",
        help="Serial baud rate",
        is_eager=True
    ),
    version: bool = typer.Option(
        False,
        "--version", "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit."
    ),
):
    """
    Binary/text transcoding toolkit for device packets.
    """
    _set_global_options(global_port, global_baud)

    ctx.ensure_object(dict)
    ctx.obj['global_port'] = global_port
    ctx.obj['global_baud'] = global_baud

    if ctx.invoked_subcommand is None:
        _print_main_help()
        raise typer.Exit()


# =============================================================================
# Import all commands to register them with the app
# =============================================================================
from .commands import codec, device, utility

# These imports are for side-effect (command registration)
_command_modules = (codec, device, utility)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()

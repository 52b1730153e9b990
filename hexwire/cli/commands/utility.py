from typing import List

import typer
from rich.console import Console
from rich.table import Table

from hexwire import __version__
from hexwire.utils.constants import CONFIG_FILE_NAME
from hexwire.utils.exceptions import HexwireException, ValidationError
from ..helpers import OutputHelper, CONSOLE_WIDTH, format_size
from ..config import ConfigManager, _load_state
from ..app import app
from .codec import _fail, _print_help


@app.command(name="version", hidden=True)
def version_cmd(
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    """
    Show hexwire version information.

    Alias: hexwire -v
    """
    if show_help:
        _print_help("""\
Show hexwire version information.

[bold cyan]Usage:[/bold cyan]
  hexwire version
  hexwire -v                [dim]# Short alias[/dim]""")

    OutputHelper.print_panel(
        f"[bright_blue]hexwire[/bright_blue] version [bright_green]{__version__}[/bright_green]",
        title="Version",
        border_style="green"
    )


@app.command(name="config", rich_help_panel="Settings")
def config_cmd(
    args: List[str] = typer.Argument(None, help="Subcommand: set KEY VALUE"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help(f"""\
Show or change settings stored in [yellow]{CONFIG_FILE_NAME}[/yellow].

The nearest {CONFIG_FILE_NAME} is found by walking up from the current directory.
[yellow]config set[/yellow] creates one in the current directory if none exists.

[bold cyan]Usage:[/bold cyan]
  hexwire config
  hexwire config set [yellow]KEY[/yellow] [yellow]VALUE[/yellow]

[bold cyan]Keys:[/bold cyan]
  PORT, BAUDRATE, TIMEOUT             [dim]# [SERIAL][/dim]
  MAX_PACKET_LENGTH, BUFFER_SIZE      [dim]# [CODEC][/dim]

[bold cyan]Priority:[/bold cyan]
  --port/--baud  >  HEXWIRE_<KEY> environment  >  {CONFIG_FILE_NAME}  >  defaults

[bold cyan]Examples:[/bold cyan]
  hexwire config set PORT /dev/ttyUSB0
  hexwire config set BAUDRATE 9600""")

    try:
        if args:
            if args[0].lower() != "set" or len(args) != 3:
                raise ValidationError("Usage: hexwire config set KEY VALUE")
            path = ConfigManager.set_value(args[1], args[2])
            OutputHelper.print_panel(
                f"[yellow]{args[1].upper()}[/yellow] = [bright_green]{args[2]}[/bright_green]\n"
                f"[dim]Saved to {path}[/dim]",
                title="Config",
                border_style="green"
            )
            return

        state = _load_state()
    except (HexwireException, OSError) as e:
        _fail(e, "Config")

    table = Table(box=None, width=CONSOLE_WIDTH, show_edge=False, show_header=False)
    table.add_column("KEY", style="yellow", no_wrap=True)
    table.add_column("VALUE", style="bright_green")
    table.add_row("PORT", state.port or "[dim](not set)[/dim]")
    table.add_row("BAUDRATE", str(state.baudrate))
    table.add_row("TIMEOUT", f"{state.timeout:g}s")
    table.add_row("MAX_PACKET_LENGTH", f"{state.max_packet_length} ({format_size(state.max_packet_length)})")
    table.add_row("BUFFER_SIZE", f"{state.buffer_size} ({format_size(state.buffer_size)})")
    table.add_row("FILE", state.config_path or "[dim](none)[/dim]")
    Console(width=CONSOLE_WIDTH).print(table)

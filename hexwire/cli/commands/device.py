from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from hexwire.codec import dump, vis, unescape, unhexlify
from hexwire.transport import create_transport, list_serial_ports, Transport
from hexwire.utils.exceptions import HexwireException, ValidationError
from ..helpers import OutputHelper, CONSOLE_WIDTH
from ..helpers.output import packet_line
from ..config import RuntimeState, _load_state
from ..app import app
from .codec import _fail, _print_help


def _open_transport(state: RuntimeState) -> Transport:
    if not state.port:
        raise ValidationError(
            "No serial port configured. Use 'hexwire --port PORT ...' "
            "or 'hexwire config set PORT /dev/ttyUSB0'."
        )
    return create_transport(state.port, baudrate=state.baudrate, timeout=state.timeout)


def _render(packet: bytes, state: RuntimeState, use_vis: bool = False) -> str:
    if use_vis:
        return vis(packet, capacity=state.buffer_size)
    return dump(packet, capacity=state.buffer_size)


@app.command(rich_help_panel="Device")
def ports(
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
List serial ports reported by the operating system.

[bold cyan]Usage:[/bold cyan]
  hexwire ports""")

    found = list_serial_ports()
    if not found:
        OutputHelper.print_panel("No serial ports found.", title="Ports", border_style="yellow")
        return

    table = Table(box=None, width=CONSOLE_WIDTH, show_edge=False)
    table.add_column("PORT", style="bright_green", no_wrap=True)
    table.add_column("DESCRIPTION")
    table.add_column("HWID", style="dim")
    for device, description, hwid in found:
        table.add_row(device, description, hwid)
    Console(width=CONSOLE_WIDTH).print(table)


@app.command(rich_help_panel="Device")
def monitor(
    count: Optional[int] = typer.Option(None, "--count", "-c", min=1, help="Stop after N packets"),
    use_vis: bool = typer.Option(False, "--vis", help="Visibilize packets instead of text-or-hex dumps"),
    log: Optional[str] = typer.Option(None, "--log", help="Also append plain packet lines to FILE"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Read packets from a serial device and dump them.

Printable packets are shown as text, anything else as lowercase hex.
Output is capped by [yellow]BUFFER_SIZE[/yellow]; packets are read up to
[yellow]MAX_PACKET_LENGTH[/yellow] bytes at a time.

[bold cyan]Usage:[/bold cyan]
  hexwire [yellow]PORT[/yellow] monitor [--count N] [--vis] [--log FILE]

[bold cyan]Examples:[/bold cyan]
  hexwire -p /dev/ttyUSB0 monitor
  hexwire -p COM3 -b 9600 monitor --count 10 --log gps.log""")

    try:
        state = _load_state()
        transport = _open_transport(state)
    except HexwireException as e:
        _fail(e, "Monitor")

    OutputHelper.print_panel(
        f"Monitoring [bright_green]{state.port}[/bright_green] at {state.baudrate} baud. "
        "[dim]Press Ctrl+C to stop.[/dim]",
        title="Monitor",
        border_style="dim"
    )

    log_fh = None
    received = 0
    try:
        if log:
            log_fh = open(log, "a", encoding="utf-8")
        with transport:
            transport.reset_input_buffer()
            while count is None or received < count:
                packet = transport.read_packet(state.max_packet_length)
                if not packet:
                    continue
                received += 1
                text = _render(packet, state, use_vis)
                OutputHelper.print_packet("IN", len(packet), text)
                if log_fh:
                    log_fh.write(packet_line("IN", len(packet), text.rstrip("\r\n")) + "\n")
                    log_fh.flush()
    except KeyboardInterrupt:
        pass
    except OSError as e:
        _fail(ValidationError(f"Cannot write log {log}: {e.strerror or e}"), "Monitor")
    except HexwireException as e:
        _fail(e, "Monitor")
    finally:
        if log_fh:
            log_fh.close()


@app.command(rich_help_panel="Device")
def send(
    payload: str = typer.Argument(..., help="Bytes to send as an escape string (or hex with --hex)"),
    hex_in: bool = typer.Option(False, "--hex", "-x", help="PAYLOAD is hex text"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Send an escape-coded or hex payload to a serial device.

[bold cyan]Usage:[/bold cyan]
  hexwire [yellow]PORT[/yellow] send [yellow]PAYLOAD[/yellow] [--hex]

[bold cyan]Examples:[/bold cyan]
  hexwire -p /dev/ttyUSB0 send '$PMTK220,1000*1F\\r\\n'
  hexwire -p /dev/ttyUSB0 send --hex b56206080600e803010001000139""")

    try:
        state = _load_state()
        data = unhexlify(payload) if hex_in else unescape(payload)
        if not data:
            raise ValidationError("Payload is empty.")
        with _open_transport(state) as transport:
            written = transport.write(data)
    except (HexwireException, ValueError) as e:
        _fail(e, "Send")

    OutputHelper.print_packet("OUT", written, dump(data, capacity=state.buffer_size))

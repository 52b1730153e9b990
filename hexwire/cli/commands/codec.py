from typing import Optional

import click
import typer

from hexwire.codec import (
    hex_encode, hex_decode, decode_escapes, visibilize, packet_dump,
    cstring, unescape, hexlify, vis,
)
from hexwire.utils.constants import VIS_EXPANSION
from hexwire.utils.exceptions import HexwireException, ValidationError
from ..helpers import OutputHelper
from ..config import _load_state
from ..app import app


def _fail(e: Exception, context: str):
    if not OutputHelper.handle_error(e, context):
        OutputHelper.print_error(str(e), title=context)
    raise typer.Exit(1)


def _read_input(data: Optional[str], file: Optional[str]) -> bytes:
    """Input bytes from --file (raw) or from the DATA argument (escape-coded)."""
    if file is not None:
        if file == "-":
            return click.get_binary_stream("stdin").read()
        try:
            with open(file, "rb") as f:
                return f.read()
        except OSError as e:
            raise ValidationError(f"Cannot read {file}: {e.strerror or e}") from e
    if data is not None:
        return unescape(data)
    raise ValidationError("No input given. Pass DATA or --file FILE ('-' for stdin).")


def _print_help(text: str):
    OutputHelper.print_panel(text, border_style="dim")
    raise typer.Exit()


@app.command(rich_help_panel="Transcoding")
def encode(
    data: Optional[str] = typer.Argument(None, help="Input bytes as an escape string"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read input bytes from FILE ('-' for stdin)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=0, help="Maximum number of bytes to encode"),
    capacity: Optional[int] = typer.Option(None, "--capacity", "-n", min=1, help="Output buffer size, terminator included"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Convert bytes to lowercase hex text.

[bold cyan]Usage:[/bold cyan]
  hexwire encode [yellow]DATA[/yellow]
  hexwire encode --file [yellow]FILE[/yellow]

[bold cyan]Options:[/bold cyan]
  [yellow]--limit N[/yellow]      Encode at most N bytes [dim](default MAX_PACKET_LENGTH)[/dim]
  [yellow]--capacity N[/yellow]   Output buffer size; output is cut short to fit

[bold cyan]Examples:[/bold cyan]
  hexwire encode "AB\\x00"        [dim]# 414200[/dim]
  hexwire encode -f packet.bin""")

    try:
        state = _load_state()
        raw = _read_input(data, file)
        if limit is None:
            limit = state.max_packet_length
        if capacity is None:
            capacity = min(len(raw), limit) * 2 + 1
        buf = bytearray(capacity)
        hex_encode(buf, capacity, raw, len(raw), limit=limit)
    except (HexwireException, ValueError) as e:
        _fail(e, "Hex Encode")
    OutputHelper.print_text(cstring(buf))


@app.command(rich_help_panel="Transcoding")
def decode(
    hex_text: str = typer.Argument(..., metavar="HEX", help="Hex digit pairs, either case"),
    capacity: Optional[int] = typer.Option(None, "--capacity", "-n", min=1, help="Destination buffer size in bytes"),
    raw: bool = typer.Option(False, "--raw", help="Write the decoded bytes to stdout unchanged"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Convert hex text back to bytes.

The result is shown visibilized ([yellow]\\xHH[/yellow] for unprintable bytes) unless
[yellow]--raw[/yellow] is given. An odd trailing digit is ignored.

[bold cyan]Usage:[/bold cyan]
  hexwire decode [yellow]HEX[/yellow] [--capacity N] [--raw]

[bold cyan]Examples:[/bold cyan]
  hexwire decode 48656c6c6f        [dim]# Hello[/dim]
  hexwire decode b562 --raw > cmd.bin""")

    try:
        if capacity is None:
            capacity = max(len(hex_text) // 2, 1)
        buf = bytearray(capacity)
        count = hex_decode(hex_text, buf, capacity)
    except (HexwireException, ValueError) as e:
        _fail(e, "Hex Decode")

    data = bytes(buf[:count])
    if raw:
        stdout = click.get_binary_stream("stdout")
        stdout.write(data)
        stdout.flush()
    else:
        OutputHelper.print_text(vis(data))


@app.command(name="escape", rich_help_panel="Transcoding")
def escape_cmd(
    text: str = typer.Argument(..., help="Text with backslash escapes"),
    hex_out: bool = typer.Option(False, "--hex", "-x", help="Show the result as hex instead of visibilized"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Interpret C-style backslash escapes.

[bold cyan]Escapes:[/bold cyan]
  \\b \\e \\f \\n \\r \\t \\v \\\\ and \\xHH

[bold cyan]Usage:[/bold cyan]
  hexwire escape [yellow]TEXT[/yellow] [--hex]

[bold cyan]Examples:[/bold cyan]
  hexwire escape 'a\\tb\\x41' --hex   [dim]# 61096241[/dim]""")

    try:
        cooked = bytearray(len(text))
        count = decode_escapes(cooked, text)
    except (HexwireException, ValueError) as e:
        _fail(e, "Escape Decode")

    data = bytes(cooked[:count])
    OutputHelper.print_text(hexlify(data) if hex_out else vis(data))


@app.command(name="vis", rich_help_panel="Transcoding")
def vis_cmd(
    data: Optional[str] = typer.Argument(None, help="Input bytes as an escape string"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read input bytes from FILE ('-' for stdin)"),
    capacity: Optional[int] = typer.Option(None, "--capacity", "-n", min=1, help="Output buffer size, terminator included"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Render bytes printable; every other byte becomes [yellow]\\xHH[/yellow].

[bold cyan]Usage:[/bold cyan]
  hexwire vis [yellow]DATA[/yellow]
  hexwire vis --file [yellow]FILE[/yellow] [--capacity N]

[bold cyan]Examples:[/bold cyan]
  hexwire vis 'ok\\r\\n'          [dim]# ok\\x0d\\x0a[/dim]""")

    try:
        raw = _read_input(data, file)
        if capacity is None:
            capacity = len(raw) * VIS_EXPANSION + 1
        buf = bytearray(capacity)
        visibilize(buf, capacity, raw, len(raw))
    except (HexwireException, ValueError) as e:
        _fail(e, "Visibilize")
    OutputHelper.print_text(cstring(buf))


@app.command(rich_help_panel="Transcoding")
def dump(
    data: Optional[str] = typer.Argument(None, help="Input bytes as an escape string"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read input bytes from FILE ('-' for stdin)"),
    capacity: Optional[int] = typer.Option(None, "--capacity", "-n", min=1, help="Hex buffer size, terminator included"),
    show_help: bool = typer.Option(False, "--help", "-h", is_eager=True, hidden=True)
):
    if show_help:
        _print_help("""\
Show a packet as text if it is printable, otherwise as hex.

[bold cyan]Usage:[/bold cyan]
  hexwire dump [yellow]DATA[/yellow]
  hexwire dump --file [yellow]FILE[/yellow] [--capacity N]

[bold cyan]Examples:[/bold cyan]
  hexwire dump '$GPGGA,1*00'       [dim]# printed as-is[/dim]
  hexwire dump '\\xb5\\x62\\x01'     [dim]# b56201[/dim]""")

    try:
        state = _load_state()
        raw = _read_input(data, file)
        if capacity is None:
            capacity = state.buffer_size
        buf = bytearray(capacity)
        out = packet_dump(buf, capacity, raw, len(raw))
    except (HexwireException, ValueError) as e:
        _fail(e, "Packet Dump")

    if out is buf:
        OutputHelper.print_text(cstring(buf))
    else:
        OutputHelper.print_text(bytes(out).decode("ascii"))

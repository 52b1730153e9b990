import os
import unittest
from unittest import mock

from typer.testing import CliRunner

from hexwire import __version__
from hexwire.cli import app
from hexwire.utils.constants import CONFIG_FILE_NAME


_CLEAN_ENV = {
    "HEXWIRE_PORT": None,
    "HEXWIRE_BAUDRATE": None,
    "HEXWIRE_TIMEOUT": None,
    "HEXWIRE_MAX_PACKET_LENGTH": None,
    "HEXWIRE_BUFFER_SIZE": None,
}


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        fs = self.runner.isolated_filesystem()
        fs.__enter__()
        self.addCleanup(fs.__exit__, None, None, None)

    def invoke(self, *args, **kwargs):
        kwargs.setdefault("env", _CLEAN_ENV)
        return self.runner.invoke(app, list(args), **kwargs)


class TestTranscodingCommands(CliTestCase):
    def test_encode(self):
        result = self.invoke("encode", "AB\\x00")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "414200")

    def test_encode_capacity_truncates(self):
        result = self.invoke("encode", "--capacity", "5", "ABCD")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "4142")

    def test_encode_from_stdin(self):
        result = self.invoke("encode", "--file", "-", input=b"\x00\xff")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "00ff")

    def test_encode_from_file(self):
        with open("packet.bin", "wb") as f:
            f.write(b"\xb5\x62")
        result = self.invoke("encode", "-f", "packet.bin")
        self.assertEqual(result.output.strip(), "b562")

    def test_encode_missing_file(self):
        result = self.invoke("encode", "-f", "nope.bin")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Cannot read nope.bin", result.output)

    def test_encode_without_input(self):
        result = self.invoke("encode")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No input given", result.output)

    def test_decode(self):
        result = self.invoke("decode", "48656c6c6f")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "Hello")

    def test_decode_visibilizes_binary(self):
        result = self.invoke("decode", "00ff41")
        self.assertEqual(result.output.strip(), "\\x00\\xffA")

    def test_decode_raw(self):
        result = self.invoke("decode", "--raw", "b56200")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout_bytes, b"\xb5\x62\x00")

    def test_decode_invalid_digit(self):
        result = self.invoke("decode", "12g4")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("invalid hex digit", result.output)
        self.assertIn("status code -1", result.output)

    def test_decode_capacity_too_small(self):
        result = self.invoke("decode", "--capacity", "2", "010203")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("status code -2", result.output)

    def test_escape_hex(self):
        result = self.invoke("escape", "--hex", "a\\tb\\x41")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "61096241")

    def test_escape_unknown(self):
        result = self.invoke("escape", "a\\q")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Supported escapes", result.output)

    def test_vis(self):
        result = self.invoke("vis", "\\x00A\\xff")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "\\x00A\\xff")

    def test_dump_text(self):
        result = self.invoke("dump", "$GPGGA,1*00")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "$GPGGA,1*00")

    def test_dump_binary(self):
        result = self.invoke("dump", "\\xb5\\x62\\x01")
        self.assertEqual(result.output.strip(), "b56201")

    def test_help_panel(self):
        result = self.invoke("encode", "--help")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Convert bytes to lowercase hex text", result.output)


class TestAppCommands(CliTestCase):
    def test_version(self):
        result = self.invoke("--version")
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_main_help_without_command(self):
        result = self.invoke()
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Transcoding", result.output)

    def test_config_set_and_show(self):
        result = self.invoke("config", "set", "PORT", "COM5")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(os.path.isfile(CONFIG_FILE_NAME))

        result = self.invoke("config")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("COM5", result.output)
        self.assertIn("115200", result.output)

    def test_config_set_rejects_bad_value(self):
        result = self.invoke("config", "set", "BAUDRATE", "fast")
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(os.path.exists(CONFIG_FILE_NAME))

    def test_config_bad_usage(self):
        result = self.invoke("config", "get", "PORT")
        self.assertEqual(result.exit_code, 1)


class TestDeviceCommands(CliTestCase):
    def _transport(self):
        transport = mock.MagicMock()
        transport.__enter__.return_value = transport
        return transport

    def test_send_without_port(self):
        result = self.invoke("send", "hello")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No serial port configured", result.output)

    def test_send(self):
        transport = self._transport()
        transport.write.return_value = 4
        with mock.patch("hexwire.cli.commands.device.create_transport",
                        return_value=transport) as create:
            result = self.invoke("--port", "COM3", "--baud", "9600", "send", "\\x01\\x02AB")
        self.assertEqual(result.exit_code, 0, result.output)
        create.assert_called_once()
        self.assertEqual(create.call_args.args[0], "COM3")
        self.assertEqual(create.call_args.kwargs["baudrate"], 9600)
        transport.write.assert_called_once_with(b"\x01\x02AB")
        self.assertIn("OUT", result.output)
        self.assertIn("01024142", result.output)

    def test_send_hex(self):
        transport = self._transport()
        transport.write.return_value = 2
        with mock.patch("hexwire.cli.commands.device.create_transport", return_value=transport):
            result = self.invoke("-p", "COM3", "send", "--hex", "b562")
        self.assertEqual(result.exit_code, 0, result.output)
        transport.write.assert_called_once_with(b"\xb5\x62")

    def test_monitor(self):
        transport = self._transport()
        transport.read_packet.side_effect = [b"", b"$GPGGA\r\n", b"\xb5\x62"]
        with mock.patch("hexwire.cli.commands.device.create_transport", return_value=transport):
            result = self.invoke("-p", "COM3", "monitor", "--count", "2", "--log", "rx.log")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("$GPGGA", result.output)
        self.assertIn("b562", result.output)
        self.assertEqual(transport.read_packet.call_count, 3)

        with open("rx.log", encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith("$GPGGA"))
        self.assertTrue(lines[1].endswith("b562"))

    def test_ports(self):
        found = [("/dev/ttyUSB0", "CP2102 USB to UART", "USB VID:PID=10C4:EA60")]
        with mock.patch("hexwire.cli.commands.device.list_serial_ports", return_value=found):
            result = self.invoke("ports")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("/dev/ttyUSB0", result.output)

    def test_no_ports(self):
        with mock.patch("hexwire.cli.commands.device.list_serial_ports", return_value=[]):
            result = self.invoke("ports")
        self.assertIn("No serial ports found", result.output)


if __name__ == "__main__":
    unittest.main()

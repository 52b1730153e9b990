import unittest

from hexwire.codec import hex_encode, hex_decode, hex_decode_inplace, hexlify, unhexlify, cstring
from hexwire.utils.constants import MAX_PACKET_LENGTH
from hexwire.utils.exceptions import InvalidLength, InvalidDigit, HexDecodeError


class TestHexEncode(unittest.TestCase):
    def test_lowercase_pairs_and_terminator(self):
        buf = bytearray(16)
        out = hex_encode(buf, len(buf), b"\x01\xab\xff", 3)
        self.assertIs(out, buf)
        self.assertEqual(bytes(buf[:7]), b"01abff\x00")

    def test_empty_source_writes_empty_string(self):
        buf = bytearray(b"\xee" * 4)
        hex_encode(buf, 4, b"", 0)
        self.assertEqual(buf[0], 0)
        self.assertEqual(cstring(buf), "")

    def test_absent_source_writes_empty_string(self):
        buf = bytearray(b"\xee" * 4)
        hex_encode(buf, 4, None, 10)
        self.assertEqual(bytes(buf), b"\x00\xee\xee\xee")

    def test_stops_when_pair_and_terminator_would_not_fit(self):
        buf = bytearray(b"\xee" * 10)
        hex_encode(buf, 5, b"\x01\x02\x03\x04", 4)
        self.assertEqual(bytes(buf[:5]), b"0102\x00")
        self.assertEqual(bytes(buf[5:]), b"\xee" * 5)

    def test_exact_fit_uses_whole_capacity(self):
        buf = bytearray(7)
        hex_encode(buf, 7, b"\x01\x02\x03\x04", 4)
        self.assertEqual(cstring(buf), "010203")
        self.assertEqual(buf[6], 0)

    def test_tiny_capacity(self):
        buf = bytearray(b"\xee\xee")
        hex_encode(buf, 2, b"\x01", 1)
        self.assertEqual(bytes(buf), b"\x00\xee")

        buf = bytearray(b"\xee")
        hex_encode(buf, 0, b"\x01", 1)
        self.assertEqual(bytes(buf), b"\xee")

    def test_source_length_governs(self):
        buf = bytearray(16)
        hex_encode(buf, 16, b"\x10\x20\x30", 2)
        self.assertEqual(cstring(buf), "1020")

    def test_limit_caps_input(self):
        buf = bytearray(64)
        hex_encode(buf, 64, b"abcdef", 6, limit=2)
        self.assertEqual(cstring(buf), "6162")

    def test_max_packet_length_truncation(self):
        src = bytes(MAX_PACKET_LENGTH + 10)
        buf = bytearray(len(src) * 2 + 1)
        hex_encode(buf, len(buf), src, len(src))
        self.assertEqual(len(cstring(buf)), 2 * MAX_PACKET_LENGTH)

    def test_never_writes_past_capacity(self):
        src = b"\x00\x01\xab\xff\x10"
        for capacity in range(0, 16):
            buf = bytearray(b"\xee" * 16)
            hex_encode(buf, capacity, src, len(src))
            self.assertEqual(bytes(buf[capacity:]), b"\xee" * (16 - capacity))
            if capacity:
                text = cstring(buf[:capacity])
                self.assertEqual(len(text), min(len(src), (capacity - 1) // 2) * 2)
                self.assertTrue("0001abff10".startswith(text))

    def test_declared_capacity_larger_than_buffer_is_rejected(self):
        with self.assertRaises(ValueError):
            hex_encode(bytearray(4), 8, b"\x01", 1)

    def test_declared_length_larger_than_source_is_rejected(self):
        with self.assertRaises(ValueError):
            hex_encode(bytearray(16), 16, b"\x01", 2)


class TestHexDecode(unittest.TestCase):
    def test_mixed_case_and_zero_fill(self):
        dst = bytearray(b"\xee" * 4)
        count = hex_decode("01aB", dst, 4)
        self.assertEqual(count, 2)
        self.assertEqual(bytes(dst), b"\x01\xab\x00\x00")

    def test_zero_fill_stops_at_capacity(self):
        dst = bytearray(b"\xee" * 6)
        hex_decode("ff", dst, 3)
        self.assertEqual(bytes(dst), b"\xff\x00\x00\xee\xee\xee")

    def test_non_hex_digit(self):
        dst = bytearray(4)
        with self.assertRaises(InvalidDigit) as cm:
            hex_decode("12g4", dst, 4)
        self.assertEqual(cm.exception.position, 2)
        self.assertEqual(cm.exception.char, "g")
        self.assertEqual(cm.exception.code, -1)
        # Bytes before the bad pair are left behind
        self.assertEqual(dst[0], 0x12)

    def test_low_digit_position(self):
        with self.assertRaises(InvalidDigit) as cm:
            hex_decode("1z", bytearray(1), 1)
        self.assertEqual(cm.exception.position, 1)

    def test_too_many_pairs_for_capacity(self):
        with self.assertRaises(InvalidLength) as cm:
            hex_decode("abcdef", bytearray(4), 2)
        self.assertEqual(cm.exception.pairs, 3)
        self.assertEqual(cm.exception.capacity, 2)
        self.assertEqual(cm.exception.code, -2)

    def test_empty_and_single_digit(self):
        for text in ("", "a"):
            with self.assertRaises(InvalidLength):
                hex_decode(text, bytearray(4), 4)

    def test_both_errors_share_base_class(self):
        with self.assertRaises(HexDecodeError):
            hex_decode("", bytearray(1), 1)
        with self.assertRaises(HexDecodeError):
            hex_decode("xx", bytearray(1), 1)

    def test_odd_trailing_digit_ignored(self):
        dst = bytearray(1)
        self.assertEqual(hex_decode("abc", dst, 1), 1)
        self.assertEqual(dst[0], 0xab)

    def test_stops_at_terminator(self):
        dst = bytearray(4)
        self.assertEqual(hex_decode(b"ab\x00cd", dst, 4), 1)
        self.assertEqual(bytes(dst), b"\xab\x00\x00\x00")

    def test_default_capacity_is_whole_buffer(self):
        dst = bytearray(3)
        self.assertEqual(hex_decode("0102", dst), 2)
        self.assertEqual(bytes(dst), b"\x01\x02\x00")

    def test_non_latin1_character_is_invalid_digit(self):
        dst = bytearray(4)
        with self.assertRaises(InvalidDigit) as cm:
            hex_decode("12€4", dst, 4)
        self.assertEqual(cm.exception.position, 2)
        self.assertEqual(cm.exception.char, "€")
        self.assertEqual(dst[0], 0x12)

    def test_non_latin1_character_in_unhexlify(self):
        with self.assertRaises(InvalidDigit) as cm:
            unhexlify("ab€0")
        self.assertEqual(cm.exception.char, "€")


class TestHexDecodeInPlace(unittest.TestCase):
    def test_decodes_over_its_own_text(self):
        buf = bytearray(b"48656c6c6f\x00\x00")
        count = hex_decode_inplace(buf)
        self.assertEqual(count, 5)
        self.assertEqual(bytes(buf), b"Hello" + bytes(7))

    def test_declared_length_bounds_scan_and_fill(self):
        buf = bytearray(b"4142ffff")
        count = hex_decode_inplace(buf, 4)
        self.assertEqual(count, 2)
        self.assertEqual(bytes(buf), b"AB\x00\x00ffff")

    def test_bad_digit(self):
        with self.assertRaises(InvalidDigit):
            hex_decode_inplace(bytearray(b"41zz"))


class TestHexHelpers(unittest.TestCase):
    def test_round_trip(self):
        samples = [b"\x00", bytes(range(256)), b"GPS\r\n", b"\xb5\x62\x06\x08"]
        for data in samples:
            self.assertEqual(unhexlify(hexlify(data)), data)

    def test_round_trip_at_max_packet_length(self):
        data = bytes(i % 251 for i in range(MAX_PACKET_LENGTH))
        text = bytearray(2 * MAX_PACKET_LENGTH + 1)
        hex_encode(text, len(text), data, len(data))

        dst = bytearray(MAX_PACKET_LENGTH)
        self.assertEqual(hex_decode(text, dst, len(dst)), MAX_PACKET_LENGTH)
        self.assertEqual(bytes(dst), data)

        self.assertEqual(hex_decode(cstring(text), bytearray(MAX_PACKET_LENGTH)), MAX_PACKET_LENGTH)

    def test_round_trip_beyond_4096_bytes(self):
        data = b"\x01" * 5000
        self.assertEqual(unhexlify(hexlify(data)), data)

    def test_hexlify_empty(self):
        self.assertEqual(hexlify(b""), "")
        self.assertEqual(hexlify(None), "")

    def test_hexlify_limit(self):
        self.assertEqual(hexlify(b"\x01\x02\x03", limit=1), "01")

    def test_unhexlify_errors(self):
        with self.assertRaises(InvalidDigit):
            unhexlify("zz")
        with self.assertRaises(InvalidLength):
            unhexlify("")


if __name__ == "__main__":
    unittest.main()

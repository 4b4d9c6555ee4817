import sys
import unittest

from models.encoding import TextEncoding, decode_bytes, encode_text, legacy_codec, sniff_encoding


class TestSniffEncoding(unittest.TestCase):
    def test_byte_order_marks(self):
        self.assertIs(sniff_encoding(b"\xef\xbb\xbfabc"), TextEncoding.UTF8_BOM)
        self.assertIs(sniff_encoding(b"\xff\xfea\x00"), TextEncoding.UTF16_LE)
        self.assertIs(sniff_encoding(b"\xfe\xff\x00a"), TextEncoding.UTF16_BE)

    def test_short_or_unmarked_input_is_legacy(self):
        self.assertIs(sniff_encoding(b""), TextEncoding.LEGACY)
        self.assertIs(sniff_encoding(b"\xff"), TextEncoding.LEGACY)
        self.assertIs(sniff_encoding(b"\xef\xbb"), TextEncoding.LEGACY)
        self.assertIs(sniff_encoding(b"file.txt comment"), TextEncoding.LEGACY)


class TestDecodeEncode(unittest.TestCase):
    def test_decode_strips_mark(self):
        self.assertEqual(decode_bytes(b"\xef\xbb\xbf" + "é".encode("utf-8"), TextEncoding.UTF8_BOM), "é")
        self.assertEqual(decode_bytes(b"\xfe\xff\x00a", TextEncoding.UTF16_BE), "a")

    def test_decode_invalid_bytes_is_lenient(self):
        self.assertEqual(decode_bytes(b"\xef\xbb\xbfa\xff", TextEncoding.UTF8_BOM), "a\ufffd")

    def test_encode_writes_mark(self):
        self.assertEqual(encode_text("a", TextEncoding.UTF16_LE), b"\xff\xfea\x00")
        self.assertEqual(encode_text("a", TextEncoding.UTF8_BOM), b"\xef\xbb\xbfa")

    def test_legacy_uses_fallback_codec(self):
        self.assertEqual(decode_bytes(b"\xcf", TextEncoding.LEGACY, "cp1251"), "П")
        self.assertEqual(encode_text("П", TextEncoding.LEGACY, "cp1251"), b"\xcf")

    def test_legacy_unencodable_characters_are_replaced(self):
        self.assertEqual(encode_text("a☃", TextEncoding.LEGACY, "cp1252"), b"a?")

    @unittest.skipIf(sys.platform == "win32", "ANSI code page on Windows")
    def test_legacy_codec_round_trips_any_byte(self):
        self.assertEqual(legacy_codec(), "latin-1")
        data = bytes(range(256))
        self.assertEqual(encode_text(decode_bytes(data, TextEncoding.LEGACY), TextEncoding.LEGACY), data)


if __name__ == "__main__":
    unittest.main()

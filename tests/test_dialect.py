import unittest

from models.description import CommentFormat, Entry
from models.dialect import classify_line, resolve_format


TC = CommentFormat.TOTAL_COMMANDER
DC = CommentFormat.DOUBLE_COMMANDER


class TestClassifyLine(unittest.TestCase):
    def test_eot_marker_means_total_commander(self):
        match = classify_line("test.txt Hello\u0004\u00c2")
        self.assertIs(match.format, TC)
        self.assertTrue(match.explicit)
        self.assertEqual(match.entry, Entry("test.txt", "Hello"))

    def test_marker_is_stripped_before_decoding(self):
        match = classify_line("file.txt First line\\nSecond line\u0004\u00c2")
        self.assertEqual(match.entry.comment, "First line\nSecond line")

    def test_no_break_space_means_double_commander(self):
        match = classify_line("folder My folder\u00a0with two lines")
        self.assertIs(match.format, DC)
        self.assertTrue(match.explicit)
        self.assertEqual(match.entry.comment, "My folder\nwith two lines")

    def test_no_break_space_with_backslash_n_stays_total_commander(self):
        match = classify_line("f a\u00a0b\\nc")
        self.assertIs(match.format, TC)
        self.assertFalse(match.explicit)
        self.assertEqual(match.entry.comment, "a\u00a0b\nc")

    def test_plain_line_is_not_explicit(self):
        match = classify_line("file.txt Just a comment")
        self.assertIs(match.format, TC)
        self.assertFalse(match.explicit)

    def test_line_with_empty_name_has_no_entry(self):
        self.assertIsNone(classify_line(" orphan text").entry)


class TestResolveFormat(unittest.TestCase):
    def test_defaults_to_total_commander(self):
        self.assertIs(resolve_format([]), TC)
        self.assertIs(resolve_format([classify_line("a b"), classify_line("c d")]), TC)

    def test_last_explicit_line_wins(self):
        dc = classify_line("a x\u00a0y")
        tc = classify_line("b x\\ny\u0004\u00c2")
        plain = classify_line("c z")
        self.assertIs(resolve_format([dc, plain]), DC)
        self.assertIs(resolve_format([dc, tc, plain]), TC)
        self.assertIs(resolve_format([tc, dc]), DC)


if __name__ == "__main__":
    unittest.main()

"""
Tokenizer behavioral tests.

Scope
- Flag detection (prefix stripped, bare separator excluded).
- Value and overflow detection around each flag token.
- Verbatim trailing segment after the first bare separator.
- Orphan tokens before the first flag.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from vmargs import Token, tokenize, is_flag


class TestIsFlag(TestCase):

    def testFlagShapes(self):
        self.assertTrue(is_flag("--api-sock"))
        self.assertTrue(is_flag("---odd"))
        self.assertFalse(is_flag("--"))
        self.assertFalse(is_flag("-v"))
        self.assertFalse(is_flag("value"))
        self.assertFalse(is_flag(""))


class TestTokenize(TestCase):

    def testEmptyInvocation(self):
        tokens = tokenize([])
        self.assertEqual(tokens.flags, ())
        self.assertEqual(tokens.names, frozenset())
        self.assertEqual(tokens.trailing, ())
        self.assertEqual(tokens.orphans, ())

    def testFlagWithValue(self):
        tokens = tokenize(["--api-sock", "/tmp/x.sock", "--no-api"])
        self.assertEqual(tokens.flags, (
            Token("api-sock", 1, "/tmp/x.sock", None),
            Token("no-api", 3, None, None),
        ))
        self.assertEqual(tokens.names, frozenset({"api-sock", "no-api"}))

    def testOverflowIsRecorded(self):
        tokens = tokenize(["--id", "a", "b"])
        self.assertEqual(tokens.flags, (Token("id", 1, "a", "b"),))

    def testOverflowStopsAtFlag(self):
        tokens = tokenize(["--id", "a", "--no-api"])
        self.assertIsNone(tokens.flags[0].overflow)

    def testFlagShapedValueIsRecorded(self):
        tokens = tokenize(["--api-sock", "--id", "x"])
        self.assertEqual(tokens.flags[0], Token("api-sock", 1, "--id", "x"))
        self.assertEqual(tokens.flags[1], Token("id", 2, "x", None))

    def testTrailingSegmentIsVerbatim(self):
        tokens = tokenize(["--api-sock", "/tmp/x.sock", "--", "extra1", "extra2"])
        self.assertEqual(tokens.trailing, ("extra1", "extra2"))
        self.assertEqual(tokens.flags, (Token("api-sock", 1, "/tmp/x.sock", None),))

    def testTrailingSegmentKeepsFlagShapedTokens(self):
        tokens = tokenize(["--id", "vm", "--", "--help", "--", "x"])
        self.assertEqual(tokens.trailing, ("--help", "--", "x"))
        self.assertEqual(tokens.names, frozenset({"id"}))

    def testValueNeverCrossesSeparator(self):
        tokens = tokenize(["--id", "--", "vm"])
        self.assertEqual(tokens.flags, (Token("id", 1, None, None),))
        self.assertEqual(tokens.trailing, ("vm",))

    def testBareSeparatorAlone(self):
        tokens = tokenize(["--"])
        self.assertEqual(tokens.flags, ())
        self.assertEqual(tokens.trailing, ())

    def testOrphansBeforeFirstFlag(self):
        tokens = tokenize(["stray", "--id", "vm"])
        self.assertEqual(tokens.orphans, ("stray",))
        self.assertEqual(tokens.flags, (Token("id", 2, "vm", None),))

    def testRejectsString(self):
        with self.assertRaises(TypeError):
            tokenize("--id vm")

    def testRejectsNonStringItems(self):
        with self.assertRaises(TypeError):
            tokenize(["--id", 1])


if __name__ == '__main__':
    unittest.main()

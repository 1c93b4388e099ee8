"""Tests for line normalization.

Tests cover:
- Marker removal
- Leading, trailing and internal whitespace deletion
- Default punctuation (quotes, semicolons, commas)
- Custom punctuation sets
"""

from __future__ import annotations

import unittest

from diffcount.services.normalizer import LineNormalizer, normalize


class TestNormalize(unittest.TestCase):

    def test_strips_marker_and_whitespace(self):
        self.assertEqual(normalize("+    value = compute( a )  "), "value=compute(a)")

    def test_tabs_and_internal_whitespace_are_deleted(self):
        self.assertEqual(normalize("-\tif (x  &&\ty) {"), "if(x&&y){")

    def test_reindented_lines_normalize_identically(self):
        self.assertEqual(normalize("-  return x;"), normalize("+        return x"))

    def test_quote_style_is_irrelevant(self):
        self.assertEqual(normalize("+import a from 'a';"), normalize('-import a from "a"'))

    def test_trailing_commas_are_irrelevant(self):
        self.assertEqual(normalize("+  foo,"), normalize("-  foo"))

    def test_other_punctuation_is_kept(self):
        self.assertEqual(normalize("+a.b(c)[d]{e}:`f`"), "a.b(c)[d]{e}:`f`")

    def test_blank_line_normalizes_to_empty_string(self):
        self.assertEqual(normalize("+"), "")
        self.assertEqual(normalize("-   "), "")


class TestLineNormalizer(unittest.TestCase):

    def test_empty_punctuation_keeps_everything(self):
        normalizer = LineNormalizer(punctuation="")
        self.assertEqual(normalizer.normalize("+ 'a', \"b\";"), "'a',\"b\";")

    def test_custom_punctuation(self):
        normalizer = LineNormalizer(punctuation=";`")
        self.assertEqual(normalizer.normalize("+`a`, 'b';"), "a,'b'")

    def test_normalizers_with_same_punctuation_are_equal(self):
        self.assertEqual(LineNormalizer(";"), LineNormalizer(";"))


if __name__ == "__main__":
    unittest.main()

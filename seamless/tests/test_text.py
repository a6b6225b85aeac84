"""Tests for text cleaning rules."""

from unittest import TestCase

from seamless.generators.utils.text import clean_attribute, clean_for_json


class CleanAttributeTest(TestCase):
    """Tests for clean_attribute."""

    def test_placeholders_become_empty(self):
        """Test placeholder words are blanked case-insensitively."""
        for value in ["", "N/A", "none", "NONE", "null", "Unknown", "Không Có", "  không có  "]:
            with self.subTest(value=value):
                self.assertEqual(clean_attribute(value), "")

    def test_none_becomes_empty(self):
        self.assertEqual(clean_attribute(None), "")

    def test_newlines_collapse_to_spaces(self):
        """Test internal newlines are replaced with spaces."""
        self.assertEqual(clean_attribute("red\nscarf"), "red scarf")
        self.assertEqual(clean_attribute("red\r\nscarf"), "red scarf")

    def test_edge_punctuation_stripped(self):
        """Test leading and trailing punctuation is removed."""
        self.assertEqual(clean_attribute(", old lighthouse."), "old lighthouse")
        self.assertEqual(clean_attribute("...waves crash,,"), "waves crash")

    def test_inner_punctuation_kept(self):
        self.assertEqual(clean_attribute("Mr. Tan, the fisherman"), "Mr. Tan, the fisherman")

    def test_placeholder_with_trailing_punctuation(self):
        """Test placeholders hidden behind punctuation are still blanked."""
        self.assertEqual(clean_attribute("none."), "")


class CleanForJsonTest(TestCase):
    """Tests for clean_for_json."""

    def test_placeholders_kept(self):
        """Test placeholder words are never blanked."""
        for value in ["N/A", "none", "Không Có", "null"]:
            with self.subTest(value=value):
                self.assertEqual(clean_for_json(value), value)

    def test_whitespace_runs_collapse(self):
        self.assertEqual(clean_for_json("  calm \n\n  sea\t breeze "), "calm sea breeze")

    def test_none_becomes_empty(self):
        self.assertEqual(clean_for_json(None), "")

    def test_punctuation_kept(self):
        self.assertEqual(clean_for_json(", dusk."), ", dusk.")

"""Tests for ORP (Optimal Recognition Point) calculation and display splitting."""

import pytest

from rsvp_reader.services.tokenizer.orp import calculate_orp, split_for_display


# =============================================================================
# ORP Calculation Tests
# =============================================================================


class TestCalculateOrp:
    """Tests for the length-based ORP table."""

    @pytest.mark.parametrize(
        "word,expected_orp",
        [
            ("", 0),
            ("a", 0),
            ("to", 0),
            ("the", 0),
            ("word", 1),
            ("hello", 1),
            ("system", 1),
            ("reading", 2),
            ("computer", 2),
            ("wonderful", 2),
            ("understand", 3),
            ("extraordinary", 3),
            ("antidisestablishmentarianism", 3),
        ],
    )
    def test_orp_by_length(self, word, expected_orp):
        assert calculate_orp(word) == expected_orp

    def test_orp_is_always_inside_word(self):
        for length in range(1, 40):
            word = "x" * length
            assert 0 <= calculate_orp(word) < length

    def test_orp_counts_characters_not_bytes(self):
        # Four characters, more than four bytes in UTF-8
        assert calculate_orp("café") == 1
        assert calculate_orp("日本語で") == 1

    def test_orp_never_decreases_with_length(self):
        previous = 0
        for length in range(1, 30):
            orp = calculate_orp("y" * length)
            assert orp >= previous
            previous = orp


# =============================================================================
# Display Split Tests
# =============================================================================


class TestSplitForDisplay:
    """Tests for splitting a word around its ORP character."""

    def test_split_reading(self):
        assert split_for_display("reading") == ("re", "a", "ding")

    def test_split_short_word(self):
        assert split_for_display("a") == ("", "a", "")

    def test_split_empty_word(self):
        assert split_for_display("") == ("", "", "")

    def test_split_with_explicit_index(self):
        assert split_for_display("hello", 4) == ("hell", "o", "")

    def test_split_clamps_index(self):
        assert split_for_display("hi", 5) == ("h", "i", "")
        assert split_for_display("hi", -3) == ("", "h", "i")

    def test_split_parts_rebuild_word(self):
        for word in ("I", "the", "reading", "extraordinary"):
            assert "".join(split_for_display(word)) == word

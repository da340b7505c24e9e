#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for word splitting and wrapping."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdtool.utils.text import split_words, word_wrap


@pytest.mark.unit
class TestSplitWords:
    """Test splitting text into words."""

    def test_runs_of_whitespace(self):
        """Test that any run of ASCII whitespace separates words."""
        assert split_words("  one\ttwo\n\nthree  ") == ["one", "two", "three"]

    def test_empty(self):
        """Test that blank text has no words."""
        assert split_words("") == []
        assert split_words(" \n\t ") == []

    def test_non_breaking_space_stays_in_word(self):
        """Test that U+00A0 does not split a word."""
        assert split_words("a\u00a0b c") == ["a\u00a0b", "c"]


@pytest.mark.unit
class TestWordWrap:
    """Test greedy word wrapping."""

    def test_single_short_word(self):
        """Test that a short word is returned unchanged."""
        assert word_wrap(["foo"], 78) == "foo"

    def test_no_words(self):
        """Test that an empty sequence gives the empty string."""
        assert word_wrap([], 78, "- ", "  ") == ""

    def test_wraps_at_width(self):
        """Test that words move to the next line once the column limit is reached."""
        words = split_words("one two three four five six seven")
        assert word_wrap(words, 20) == "one two three four\nfive six seven"

    def test_prefix_and_indent(self):
        """Test that the first line takes the prefix and later lines the indent."""
        words = split_words("one two three four")
        assert word_wrap(words, 10, "- ", "  ") == "- one two\n  three\n  four"

    def test_prefix_counts_towards_width(self):
        """Test that column accounting starts after the prefix."""
        assert word_wrap(["abcd", "efgh"], 10, "> > ") == "> > abcd\nefgh"

    def test_long_word_is_never_split(self):
        """Test that a word longer than the width sits alone after the indent."""
        assert word_wrap(["averylongwordexceedingwidth"], 5, "", "  ") == "  averylongwordexceedingwidth"

    def test_long_first_word_after_bullet(self):
        """Test that a bullet prefix is kept on its own line before an oversized word."""
        assert word_wrap(["averylongword", "b"], 6, "- ", "  ") == "-\n  averylongword\n  b"

    def test_long_first_word_with_indent_prefix(self):
        """Test that no blank line is left when the prefix is the indent itself."""
        assert word_wrap(["averylongword"], 6, "  ", "  ") == "  averylongword"

    def test_line_start_applies_to_each_line(self):
        """Test that the line start hook sees only the first word of every line."""
        words = split_words("one - two # three")
        result = word_wrap(words, 8, line_start=lambda word: word.upper())
        assert result == "ONE -\nTWO #\nTHREE"

    def test_line_start_counts_towards_width(self):
        """Test that the width is measured on the word the hook returns."""
        result = word_wrap(["-", "ab", "cd"], 6, line_start=lambda word: "\\" + word)
        assert result == "\\- ab\n\\cd"

    def test_long_word_between_short_words(self):
        """Test that an oversized word breaks the lines around it."""
        result = word_wrap(["a", "averylongword", "b"], 8, "", "  ")
        assert result == "a\n  averylongword\n  b"

    @pytest.mark.parametrize("width", [1, 0, -5])
    def test_small_width_means_unlimited(self, width):
        """Test that a width of 1 or less disables wrapping."""
        words = ["word"] * 200
        assert word_wrap(words, width) == " ".join(words)

    @pytest.mark.fuzzing
    @given(
        st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=15), max_size=40),
        st.integers(min_value=2, max_value=60),
    )
    def test_words_preserved_in_order(self, words, width):
        """Test that wrapping never drops, splits or reorders words."""
        assert split_words(word_wrap(words, width, "", "  ")) == words

    @pytest.mark.fuzzing
    @given(
        st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=8), min_size=1, max_size=40),
        st.integers(min_value=12, max_value=60),
    )
    def test_lines_fit_width(self, words, width):
        """Test that lines of short words stay below the width."""
        for line in word_wrap(words, width, "", "  ").split("\n"):
            assert len(line) < width

"""Tests for delimiter classification and the escape-aware closer search."""

from __future__ import annotations

import pytest

from mathspan.scanning.delimiters import (
    Delimiter,
    classify_block_delim,
    classify_inline_delim,
    count_preceding_backslashes,
    find_unescaped_close,
)


class TestInlineDelimiter:
    """Word-boundary rules for a single $."""

    def test_not_a_marker(self) -> None:
        assert classify_inline_delim("abc", 1) == Delimiter(False, False)

    def test_start_of_buffer_can_open(self) -> None:
        """A missing previous character counts as a boundary."""
        assert classify_inline_delim("$x$", 0).can_open

    def test_end_of_buffer_can_close(self) -> None:
        assert classify_inline_delim("$x$", 2).can_close

    def test_position_zero_does_not_wrap(self) -> None:
        """The last character of the buffer is not 'previous' to position 0."""
        result = classify_inline_delim("$x\\", 0)
        assert result.can_open

    @pytest.mark.parametrize("prev", [" ", "\t", "(", ",", "-", "\n"])
    def test_opens_after_non_word(self, prev: str) -> None:
        assert classify_inline_delim(f"{prev}$x", 1).can_open

    @pytest.mark.parametrize("prev", ["a", "Z", "5", "_"])
    def test_word_character_blocks_opening(self, prev: str) -> None:
        assert not classify_inline_delim(f"{prev}$x", 1).can_open

    def test_backslash_blocks_opening(self) -> None:
        assert not classify_inline_delim("\\$x", 1).can_open

    def test_preceding_marker_blocks_opening(self) -> None:
        assert not classify_inline_delim("$$x", 1).can_open

    @pytest.mark.parametrize("nxt", ["a", "9", "_"])
    def test_word_character_blocks_closing(self, nxt: str) -> None:
        assert not classify_inline_delim(f"x${nxt}", 1).can_close

    def test_following_marker_blocks_closing(self) -> None:
        assert not classify_inline_delim("x$$", 1).can_close

    @pytest.mark.parametrize("nxt", [" ", ".", ")", "\n"])
    def test_closes_before_non_word(self, nxt: str) -> None:
        assert classify_inline_delim(f"x${nxt}", 1).can_close

    def test_non_ascii_letters_are_boundaries(self) -> None:
        """Word characters are ASCII only."""
        result = classify_inline_delim("é$x", 1)
        assert result.can_open


class TestBlockDelimiter:
    """Rules for a $$ pair."""

    def test_pair_opens_and_closes(self) -> None:
        assert classify_block_delim("a $$x$$", 2) == Delimiter(True, True)

    def test_pair_at_buffer_start(self) -> None:
        assert classify_block_delim("$$x$$", 0) == Delimiter(True, True)

    def test_single_marker_is_not_a_pair(self) -> None:
        assert classify_block_delim("$x", 0) == Delimiter(False, False)

    def test_triple_marker_rejected(self) -> None:
        assert classify_block_delim("$$$x", 0) == Delimiter(False, False)

    def test_escaped_pair_rejected(self) -> None:
        assert classify_block_delim("\\$$x", 1) == Delimiter(False, False)

    def test_preceding_marker_rejected(self) -> None:
        assert classify_block_delim("$$$x", 1) == Delimiter(False, False)

    def test_word_characters_around_pair_allowed(self) -> None:
        """Unlike single markers, pairs ignore word boundaries."""
        assert classify_block_delim("a$$b", 1) == Delimiter(True, True)


class TestBackslashCounting:
    def test_none(self) -> None:
        assert count_preceding_backslashes("a$", 1) == 0

    def test_several(self) -> None:
        assert count_preceding_backslashes("a\\\\\\$", 4) == 3

    def test_stops_at_buffer_start(self) -> None:
        assert count_preceding_backslashes("\\\\$", 2) == 2


class TestFindUnescapedClose:
    """Escape-aware search for the closing marker."""

    def test_plain_match(self) -> None:
        assert find_unescaped_close("$abc$", 1) == 4

    def test_not_found(self) -> None:
        assert find_unescaped_close("$abc", 1) == -1

    def test_escaped_marker_skipped(self) -> None:
        assert find_unescaped_close("$a\\$b$", 1) == 5

    def test_double_backslash_does_not_escape(self) -> None:
        """An even run of backslashes escapes itself, not the marker."""
        assert find_unescaped_close("$a\\\\$b", 1) == 4

    def test_triple_backslash_escapes(self) -> None:
        assert find_unescaped_close("$a\\\\\\$b", 1) == -1

    def test_double_marker(self) -> None:
        assert find_unescaped_close("$$a\\$$b$$", 2, "$$") == 7

    def test_only_escaped_markers(self) -> None:
        assert find_unescaped_close("\\$\\$\\$", 0) == -1

    def test_start_past_end(self) -> None:
        assert find_unescaped_close("$a$", 10) == -1

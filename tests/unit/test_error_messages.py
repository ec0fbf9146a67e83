"""Unit tests for engine error message parsing."""

from __future__ import annotations

import pytest

from dbcompare.domain.services import parse_error_message, shorten


@pytest.mark.unit
class TestParseErrorMessage:
    """Tests for parse_error_message."""

    def test_strips_category_prefix(self) -> None:
        """Test that the leading category is moved into kind."""
        message = parse_error_message(
            "Conversion Error: Could not convert string 'forty-two' to INT32"
        )

        assert message.kind == "Conversion"
        assert message.text == "Could not convert string 'forty-two' to INT32"

    def test_multi_word_category(self) -> None:
        """Test categories made of several words."""
        message = parse_error_message("Invalid Input Error: bad value")

        assert message.kind == "Invalid Input"
        assert message.text == "bad value"

    def test_drops_statement_context(self) -> None:
        """Test that the trailing LINE block is removed."""
        raw = 'Parser Error: syntax error at or near "SELEC"\n\nLINE 1: SELEC 1\n        ^'
        message = parse_error_message(raw)

        assert message.kind == "Parser"
        assert message.text == 'syntax error at or near "SELEC"'
        assert message.raw == raw

    def test_message_without_prefix(self) -> None:
        """Test a bare sentence, as SQLite reports errors."""
        message = parse_error_message("cannot store TEXT value in INTEGER column t.x")

        assert message.kind is None
        assert message.text == "cannot store TEXT value in INTEGER column t.x"
        assert str(message) == message.text

    def test_collapses_whitespace(self) -> None:
        """Test that line breaks inside a sentence become spaces."""
        assert parse_error_message("a\n  b").text == "a b"


@pytest.mark.unit
class TestShorten:
    """Tests for shorten."""

    def test_short_text_unchanged(self) -> None:
        assert shorten("short", 10) == "short"

    def test_long_text_cut(self) -> None:
        """Test that long text is cut with an ellipsis."""
        text = shorten("x" * 100, 20)

        assert len(text) == 20
        assert text.endswith("...")

    def test_width_too_small(self) -> None:
        with pytest.raises(ValueError):
            shorten("abc", 3)

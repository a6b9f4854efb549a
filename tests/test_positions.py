"""
Tests for position resolution and the token builder.
"""

import pytest

from phptokenizer.ast_analysis.models import Position, Span
from phptokenizer.ast_analysis.positions import PositionMap
from phptokenizer.ast_analysis.token_builder import TokenBuilder
from phptokenizer.exceptions import PositionError
from phptokenizer.tokens import TokenKind


class TestPositionMap:
    """Test offset to line/column mapping."""

    def test_first_line(self):
        positions = PositionMap(b"ab\ncd\n")
        assert positions.position_for_offset(0) == Position(1, 1)
        assert positions.position_for_offset(2) == Position(1, 3)

    def test_following_lines(self):
        positions = PositionMap(b"ab\ncd\n")
        assert positions.position_for_offset(3) == Position(2, 1)
        assert positions.position_for_offset(4) == Position(2, 2)
        assert positions.position_for_offset(6) == Position(3, 1)

    def test_line_count(self):
        assert PositionMap(b"").line_count == 1
        assert PositionMap("a\nb\nc").line_count == 3

    def test_accepts_str(self):
        """Text is encoded before offsets are computed."""
        positions = PositionMap("x\ny")
        assert positions.position_for_offset(2) == Position(2, 1)

    def test_offset_out_of_range(self):
        positions = PositionMap(b"abc")
        with pytest.raises(PositionError):
            positions.position_for_offset(4)
        with pytest.raises(PositionError):
            positions.position_for_offset(-1)

    def test_anchor_positions(self):
        positions = PositionMap(b"ab\ncd")
        span = Span(1, 4)
        assert positions.start_position(span) == Position(1, 2)
        assert positions.end_position(span) == Position(2, 2)


class TestTokenBuilder:
    """Test the append-only token sink."""

    def test_add_uses_anchor_length(self):
        builder = TokenBuilder(PositionMap(b"ab\ncd"))
        token = builder.add(TokenKind.RETURN, Span(3, 5))

        assert (token.line, token.column, token.length) == (2, 1, 2)

    def test_add_end_marks_last_character(self):
        builder = TokenBuilder(PositionMap(b"ab\ncd"))
        token = builder.add_end(TokenKind.CLASS_END, Span(0, 5))

        assert (token.line, token.column, token.length) == (2, 2, 1)

    def test_order_is_kept(self):
        builder = TokenBuilder(PositionMap(b"abcdef"))
        builder.add(TokenKind.IF_BEGIN, Span(4, 5))
        builder.add(TokenKind.ELSE, Span(0, 1))

        assert [token.kind for token in builder.tokens] == [TokenKind.IF_BEGIN, TokenKind.ELSE]
        assert len(builder) == 2

    def test_to_json_record_shape(self):
        builder = TokenBuilder(PositionMap(b"return"))
        builder.add(TokenKind.RETURN, Span(0, 6))

        assert builder.to_json() == (
            '[{"token":{"key":"RETURN","value":21},"line":1,"column":1,"length":6}]'
        )

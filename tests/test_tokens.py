"""
Tests for the token catalog.
"""

import pytest

from phptokenizer.exceptions import UnknownTokenError
from phptokenizer.tokens import (
    FILE_END_CODE,
    TokenKind,
    kind_for_code,
    name_for_code,
    token_amount,
    token_mapping,
)


class TestTokenCatalog:
    """Test the stable code table."""

    def test_codes_are_unique(self):
        """Every kind has its own code."""
        codes = [kind.value for kind in TokenKind]
        assert len(codes) == len(set(codes))

    def test_reserved_code_is_unused(self):
        """Code 1 marks the end of a file for consumers."""
        assert FILE_END_CODE == 1
        assert all(kind.value != 1 for kind in TokenKind)

    def test_stable_codes(self):
        """Persisted codes never move."""
        assert TokenKind.FOR_BEGIN == 47
        assert TokenKind.FOR_END == 2
        assert TokenKind.IF_BEGIN == 12
        assert TokenKind.ASSIGN == 35
        assert TokenKind.APPLY == 41
        assert TokenKind.YIELD == 46

    def test_amount(self):
        """Amount counts the reserved code too."""
        assert token_amount() == len(TokenKind) + 1
        assert token_amount() == 47

    def test_mapping_keys(self):
        """Mapping covers exactly the codes 2..N."""
        mapping = token_mapping()
        assert set(mapping) == set(range(2, token_amount() + 1))
        assert len(set(mapping.values())) == len(mapping)

    def test_mapping_order(self):
        """Mapping follows declaration order."""
        codes = list(token_mapping())
        assert codes[0] == 47
        assert codes[1] == 2
        assert codes[-1] == 46

    def test_reverse_lookup(self):
        """Names are found by code."""
        assert kind_for_code(33) is TokenKind.CASE
        assert name_for_code(42) == "ECHO"

    def test_unknown_code(self):
        """Unknown codes raise."""
        with pytest.raises(UnknownTokenError):
            kind_for_code(FILE_END_CODE)
        with pytest.raises(UnknownTokenError):
            name_for_code(999)

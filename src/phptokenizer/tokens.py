"""
Catalog of structural token kinds.

Codes are persisted by downstream consumers, so they must never change.
Code 1 is reserved: consumers use it to mark the end of a file.
"""

from enum import IntEnum
from typing import Dict

from .exceptions import UnknownTokenError

FILE_END_CODE = 1


class TokenKind(IntEnum):
    """Structural token kinds in declaration order."""

    FOR_BEGIN = 47
    FOR_END = 2
    BREAK = 3
    CONTINUE = 4
    CLASS_BEGIN = 5
    CLASS_END = 6
    DO_BEGIN = 7
    DO_END = 8
    FUNCTION_BEGIN = 9
    FUNCTION_END = 10
    VARDEF = 11
    IF_BEGIN = 12
    IF_END = 13
    ELSE = 14
    GOTO = 15
    INLINE_HTML = 16
    INTERFACE_BEGIN = 17
    INTERFACE_END = 18
    NAMESPACE = 19
    NAMESPACE_USE = 20
    RETURN = 21
    SWITCH_BEGIN = 22
    SWITCH_END = 23
    THROW = 24
    TRAIT_BEGIN = 25
    TRAIT_END = 26
    TRY = 27
    CATCH_BEGIN = 28
    CATCH_END = 29
    FINALLY = 30
    WHILE_BEGIN = 31
    WHILE_END = 32
    CASE = 33
    TRAIT_USE = 34
    ASSIGN = 35
    TERNARY = 36  # conditional expression
    NEW_CLASS = 37
    IN_CLASS_BEGIN = 38
    IN_CLASS_END = 39
    NEW_ARRAY = 40
    APPLY = 41  # call expression
    ECHO = 42
    UNSET = 43
    ISSET = 44
    EVAL = 45
    YIELD = 46


# Built once at import time; IntEnum would silently alias duplicate codes.
_BY_CODE: Dict[int, TokenKind] = {kind.value: kind for kind in TokenKind}

assert len(_BY_CODE) == len(TokenKind.__members__), "token codes must be unique"
assert FILE_END_CODE not in _BY_CODE, "code 1 is reserved for the end of a file"


def kind_for_code(code: int) -> TokenKind:
    """Return the token kind bound to ``code``."""
    try:
        return _BY_CODE[code]
    except KeyError:
        raise UnknownTokenError(f"No token kind has code {code}") from None


def name_for_code(code: int) -> str:
    """Return the name of the token kind bound to ``code``."""
    return kind_for_code(code).name


def token_mapping() -> Dict[int, str]:
    """Map every code to its kind name, in declaration order."""
    return {kind.value: kind.name for kind in TokenKind}


def token_amount() -> int:
    """Number of kinds plus one for the reserved end-of-file code."""
    return len(TokenKind) + 1

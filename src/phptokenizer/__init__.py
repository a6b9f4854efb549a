"""phptokenizer - structural token streams of PHP source files."""

__version__ = "0.1.0"

from .tokens import TokenKind, token_amount, token_mapping
from .ast_analysis import EmittedToken, StructureAnalyzer, tokenize
from .exceptions import PhpTokenizerError

__all__ = [
    "TokenKind",
    "token_amount",
    "token_mapping",
    "EmittedToken",
    "StructureAnalyzer",
    "tokenize",
    "PhpTokenizerError",
]

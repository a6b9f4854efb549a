"""
Token builder collecting structural tokens in traversal order.
"""

from typing import Any, List, Optional, Tuple

from ..tokens import TokenKind
from .models import EmittedToken, dump_json
from .positions import PositionMap


class TokenBuilder:
    """Append-only sink of emitted tokens for a single source file."""

    def __init__(self, positions: PositionMap):
        self.positions = positions
        self._tokens: List[EmittedToken] = []

    def add(self, kind: TokenKind, anchor: Any) -> EmittedToken:
        """Add a token at the start of an anchor, covering the whole anchor."""
        start = self.positions.start_position(anchor)
        token = EmittedToken(
            kind=kind,
            line=start.line,
            column=start.column,
            length=anchor.end_byte - anchor.start_byte,
        )
        self._tokens.append(token)
        return token

    def add_end(self, kind: TokenKind, node: Any) -> EmittedToken:
        """Add a closing token on the last character of a node."""
        end = self.positions.end_position(node)
        token = EmittedToken(kind=kind, line=end.line, column=end.column - 1, length=1)
        self._tokens.append(token)
        return token

    @property
    def tokens(self) -> Tuple[EmittedToken, ...]:
        return tuple(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def to_json(self, indent: Optional[int] = None) -> str:
        return dump_json([token.to_dict() for token in self._tokens], indent)

"""
Data models for structural token extraction.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from ..tokens import TokenKind

COMPACT_SEPARATORS = (",", ":")


class Position(NamedTuple):
    """1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True)
class Span:
    """Byte range used as an anchor when no single token covers it."""

    start_byte: int
    end_byte: int

    @classmethod
    def between(cls, first: Any, last: Any) -> "Span":
        return cls(first.start_byte, last.end_byte)


@dataclass(frozen=True)
class EmittedToken:
    """A structural token with its source position."""

    kind: TokenKind
    line: int
    column: int
    length: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record shape consumers read."""
        return {
            "token": {
                "key": self.kind.name,
                "value": self.kind.value,
            },
            "line": self.line,
            "column": self.column,
            "length": self.length,
        }


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal parse problem."""

    message: str
    start: int
    length: int
    kind: int = 0  # error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "start": self.start,
            "length": self.length,
        }


def dump_json(data: Any, indent: Optional[int] = None) -> str:
    """Serialize compactly unless an indent is requested."""
    if indent is None:
        return json.dumps(data, separators=COMPACT_SEPARATORS)
    return json.dumps(data, indent=indent)


@dataclass
class AnalysisResult:
    """Tokens and diagnostics produced for one source file."""

    tokens: Tuple[EmittedToken, ...] = ()
    diagnostics: List[Diagnostic] = field(default_factory=list)
    file_path: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def tokens_to_json(self, indent: Optional[int] = None) -> str:
        return dump_json([token.to_dict() for token in self.tokens], indent)

    def diagnostics_to_json(self, indent: Optional[int] = None) -> str:
        return dump_json([diagnostic.to_dict() for diagnostic in self.diagnostics], indent)

"""
PHP parsing on top of tree-sitter.

The parser recovers from syntax errors: broken input still yields a tree,
with the problems reported as diagnostics.
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

import tree_sitter_php
from tree_sitter import Language, Parser

from ..exceptions import ParseError, SourceReadError
from .models import Diagnostic, dump_json

logger = logging.getLogger(__name__)

STDIN_SENTINELS = ("/dev/stdin", "-")
_ERROR_SNIPPET_LIMIT = 40


@dataclass
class ParseResult:
    """A parsed source file."""

    tree: Any
    source: bytes
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def diagnostics_to_json(self) -> str:
        return dump_json([diagnostic.to_dict() for diagnostic in self.diagnostics])


def read_source(file_path: str) -> bytes:
    """Read raw source bytes from a path or from standard input."""
    if file_path in STDIN_SENTINELS:
        return sys.stdin.buffer.read()
    try:
        return Path(file_path).read_bytes()
    except OSError as e:
        raise SourceReadError(f"Cannot read {file_path}: {e}") from e


class PhpParser:
    """Parses PHP source (including inline markup) into a tree-sitter tree."""

    def __init__(self):
        try:
            self.language = Language(tree_sitter_php.language_php())
            self._parser = Parser(self.language)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Cannot load the PHP grammar: {e}") from e

    def parse(self, source: Union[bytes, str]) -> ParseResult:
        """
        Parse source text.

        Args:
            source: PHP source, str is encoded as UTF-8

        Returns:
            ParseResult holding the tree and its diagnostics
        """
        if isinstance(source, str):
            source = source.encode("utf-8")

        started = time.perf_counter()
        tree = self._parser.parse(source)
        diagnostics = collect_diagnostics(tree.root_node, source)
        logger.debug(
            f"Parsed {len(source)} bytes in {time.perf_counter() - started:.4f}s "
            f"with {len(diagnostics)} diagnostics"
        )
        return ParseResult(tree=tree, source=source, diagnostics=diagnostics)

    def parse_file(self, file_path: str) -> ParseResult:
        """Parse a file, or standard input for a stdin sentinel path."""
        return self.parse(read_source(file_path))


def collect_diagnostics(root: Any, source: bytes) -> List[Diagnostic]:
    """Report ERROR and MISSING nodes in source order."""
    if not root.has_error:
        return []

    diagnostics: List[Diagnostic] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            diagnostics.append(Diagnostic(
                message=f"'{node.type}' expected.",
                start=node.start_byte,
                length=0,
            ))
        elif node.type == "ERROR":
            diagnostics.append(Diagnostic(
                message=f"Unexpected '{_snippet(source, node)}'.",
                start=node.start_byte,
                length=node.end_byte - node.start_byte,
            ))
        elif node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics


def _snippet(source: bytes, node: Any) -> str:
    text = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
    text = text.strip().splitlines()[0] if text.strip() else ""
    if len(text) > _ERROR_SNIPPET_LIMIT:
        text = text[:_ERROR_SNIPPET_LIMIT] + "..."
    return text


_default_parser: Optional[PhpParser] = None


def get_parser() -> PhpParser:
    """Get a shared parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = PhpParser()
    return _default_parser

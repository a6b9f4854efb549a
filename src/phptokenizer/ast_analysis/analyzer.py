"""
Structure Analyzer Module
Turns PHP source into its stream of structural tokens.
"""

import logging
from typing import List, Optional, Union

from .models import AnalysisResult, EmittedToken
from .parser import ParseResult, PhpParser, get_parser
from .positions import PositionMap
from .token_builder import TokenBuilder
from .visitors import StructureVisitor

logger = logging.getLogger(__name__)


class StructureAnalyzer:
    """
    Parses PHP source and extracts its structural tokens.

    Parse problems never stop the analysis: they are reported as
    diagnostics next to the tokens. A node the rules cannot handle raises
    ``TraversalError`` and no tokens are returned.
    """

    def __init__(self, parser: Optional[PhpParser] = None):
        self.parser = parser or get_parser()

    def analyze_file(self, file_path: str) -> AnalysisResult:
        """
        Analyze a PHP file.

        Args:
            file_path: Path to the file, ``/dev/stdin`` or ``-`` for standard input

        Returns:
            AnalysisResult with tokens in source order
        """
        return self.analyze_parsed(self.parser.parse_file(file_path), file_path)

    def analyze_code(self, source: Union[bytes, str], file_path: Optional[str] = None) -> AnalysisResult:
        """Analyze PHP source held in memory."""
        return self.analyze_parsed(self.parser.parse(source), file_path)

    def analyze_parsed(self, parsed: ParseResult, file_path: Optional[str] = None) -> AnalysisResult:
        """Extract the tokens of an already parsed source."""
        builder = TokenBuilder(PositionMap(parsed.source))
        StructureVisitor(builder, parsed.source).walk(parsed.root)
        logger.debug(f"Extracted {len(builder)} tokens from {file_path or '<memory>'}")
        return AnalysisResult(
            tokens=builder.tokens,
            diagnostics=parsed.diagnostics,
            file_path=file_path,
        )


def tokenize(source: Union[bytes, str]) -> List[EmittedToken]:
    """Structural tokens of a PHP source text."""
    return list(StructureAnalyzer().analyze_code(source).tokens)

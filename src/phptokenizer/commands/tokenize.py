"""
Default command: tokenize one PHP file.
"""

import logging
import sys

from ..ast_analysis.analyzer import StructureAnalyzer
from .base import BaseCommand

logger = logging.getLogger(__name__)


class TokenizeCommand(BaseCommand):
    """Parse a file and print its structural tokens as JSON."""

    @classmethod
    def help(cls) -> str:
        return "Print the structural tokens of a PHP file"

    def execute(self) -> int:
        analyzer = StructureAnalyzer()
        parsed = analyzer.parser.parse_file(self.args.file)

        # Diagnostics are informational and never stop the traversal.
        if self.config.report_diagnostics:
            print(parsed.diagnostics_to_json(), file=sys.stderr)
        elif parsed.diagnostics:
            logger.info(f"{len(parsed.diagnostics)} parse diagnostics for {self.args.file}")

        result = analyzer.analyze_parsed(parsed, self.args.file)
        print(result.tokens_to_json(self.config.json_indent))
        return 0

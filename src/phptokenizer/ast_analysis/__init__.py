"""
AST analysis module for structural token extraction.
Provides the parser, position resolution, the structural visitor and the token sink.
"""

from .models import AnalysisResult, Diagnostic, EmittedToken, Position, Span
from .positions import PositionMap
from .parser import ParseResult, PhpParser, get_parser
from .token_builder import TokenBuilder
from .visitors import StructureVisitor
from .analyzer import StructureAnalyzer, tokenize

__all__ = [
    'AnalysisResult',
    'Diagnostic',
    'EmittedToken',
    'Position',
    'Span',
    'PositionMap',
    'ParseResult',
    'PhpParser',
    'get_parser',
    'TokenBuilder',
    'StructureVisitor',
    'StructureAnalyzer',
    'tokenize',
]

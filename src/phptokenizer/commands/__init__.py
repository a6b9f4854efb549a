"""CLI modes for phptokenizer."""

from .base import BaseCommand, CommandContext
from .catalog import AmountCommand, MappingCommand
from .tokenize import TokenizeCommand

__all__ = [
    "BaseCommand",
    "CommandContext",
    "AmountCommand",
    "MappingCommand",
    "TokenizeCommand",
]

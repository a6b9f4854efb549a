"""
Base command interface for phptokenizer CLI modes.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..services.configuration_service import TokenizerConfig


@dataclass
class CommandContext:
    """Context passed to command handlers."""
    config: TokenizerConfig
    args: Any  # argparse.Namespace


class BaseCommand(ABC):
    """Base class for all CLI modes."""

    def __init__(self, context: CommandContext):
        self.context = context
        self.config = context.config
        self.args = context.args

    @abstractmethod
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Exit code (0 for success)
        """
        pass

    @classmethod
    @abstractmethod
    def help(cls) -> str:
        """Return help text for the command."""
        pass

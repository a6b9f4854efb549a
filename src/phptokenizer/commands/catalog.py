"""
Commands describing the token catalog without parsing anything.
"""

from ..ast_analysis.models import dump_json
from ..tokens import token_amount, token_mapping
from .base import BaseCommand


class AmountCommand(BaseCommand):
    """Print the number of token codes, the reserved one included."""

    @classmethod
    def help(cls) -> str:
        return "Print the number of token kinds plus one"

    def execute(self) -> int:
        print(token_amount())
        return 0


class MappingCommand(BaseCommand):
    """Print the code to name mapping as a JSON object."""

    @classmethod
    def help(cls) -> str:
        return "Print a JSON object mapping token codes to names"

    def execute(self) -> int:
        print(dump_json(token_mapping(), self.config.json_indent))
        return 0

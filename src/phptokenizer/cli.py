"""Main CLI entry point for phptokenizer."""

import sys
import argparse
import logging
import traceback
from typing import Optional

from .commands.base import CommandContext
from .commands.catalog import AmountCommand, MappingCommand
from .commands.tokenize import TokenizeCommand
from .exceptions import ConfigurationError, PhpTokenizerError
from .services.configuration_service import TokenizerConfig, get_config_service

logger = logging.getLogger(__name__)

MODES = {
    "AMOUNT": AmountCommand,
    "MAPPING": MappingCommand,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="phptokenizer",
        description="phptokenizer - structural tokens of PHP source files"
    )
    # Optional here so a missing file exits with 1 instead of argparse's 2.
    parser.add_argument(
        "file",
        nargs="?",
        help="PHP file to tokenize (/dev/stdin or - reads standard input)"
    )
    parser.add_argument(
        "mode",
        nargs="?",
        help="; ".join(f"{name}: {command.help()}" for name, command in MODES.items())
    )
    parser.add_argument(
        "--config",
        help="JSON configuration file"
    )
    return parser


def setup_logging(config: TokenizerConfig) -> None:
    """Send log records to stderr, stdout carries the results only."""
    logging.basicConfig(
        level=config.effective_log_level,
        format='%(message)s',
        stream=sys.stderr
    )


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.file is None:
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = get_config_service(args.config).get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config)

    command_class = MODES.get(args.mode, TokenizeCommand)
    if args.mode is not None and args.mode not in MODES:
        logger.warning(f"Unknown mode {args.mode!r}, tokenizing {args.file}")

    command = command_class(CommandContext(config=config, args=args))

    try:
        return command.execute()
    except KeyboardInterrupt:
        print("Operation cancelled by user", file=sys.stderr)
        return 1
    except PhpTokenizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1


def cli_main():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()

"""CLI entry point."""

import os
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from cli.commands import get_config, handle_help, handle_join, handle_split, handle_verify
from cli.constants import HELP_TEXT, RED, RESET
from cli.models import HelpCommand, JoinCommand, SplitCommand, VerifyCommand
from cli.parser import ParseError, parse_command
from common.exceptions import ChunkingError
from common.logging_config import get_logger, setup_logging

LOGGED_COMPONENTS = ('cli', 'chunking', 'chunkstore')


def dispatch(cmd) -> str:
    """Route a parsed command to its handler."""
    if isinstance(cmd, SplitCommand):
        return handle_split(cmd)
    elif isinstance(cmd, JoinCommand):
        return handle_join(cmd)
    elif isinstance(cmd, VerifyCommand):
        return handle_verify(cmd)
    elif isinstance(cmd, HelpCommand):
        return handle_help(cmd)
    raise ParseError(f"Unsupported command: {cmd!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for CLI. Returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug = '--debug' in args
    if debug:
        args.remove('--debug')
        log_level = 'DEBUG'
    else:
        log_level = os.getenv('LOG_LEVEL') or get_config().get_log_level()

    for component in LOGGED_COMPONENTS:
        setup_logging(component, log_level=log_level)
    logger = get_logger('cli')
    if debug:
        logger.info("Debug logging enabled")

    try:
        cmd = parse_command(args)
    except ParseError as e:
        print(f"{RED}Error:{RESET} {e}\n", file=sys.stderr)
        print(HELP_TEXT, file=sys.stderr)
        return 2

    try:
        print(dispatch(cmd))
    except ChunkingError as e:
        logger.error(f"{cmd.command} failed: {e}")
        print(f"{RED}Integrity error:{RESET} {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"{cmd.command} failed: {e}", exc_info=debug)
        print(f"{RED}Error:{RESET} {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command parser for CLI arguments."""

from typing import Optional, Sequence

from cli.models import (
    CommandRequest,
    HelpCommand,
    JoinCommand,
    SplitCommand,
    VerifyCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(tokens: Sequence[str]) -> CommandRequest:
    """Parse command arguments into a CommandRequest object.

    Args:
        tokens: Command name followed by its arguments (e.g. sys.argv[1:])

    Returns:
        CommandRequest object (one of Split/Join/Verify/Help)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not tokens:
        raise ParseError("Empty command")

    command_name, args = tokens[0], list(tokens[1:])

    if command_name == "split":
        return _parse_split(args)
    elif command_name == "join":
        return _parse_join(args)
    elif command_name == "verify":
        return _parse_verify(args)
    elif command_name in ("help", "-h", "--help"):
        return HelpCommand()
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_split(args: list[str]) -> SplitCommand:
    """Parse 'split <file> <store-dir> [--chunk-size N]' command."""
    chunk_size: Optional[int] = None
    positional = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--chunk-size":
            if i + 1 >= len(args):
                raise ParseError("--chunk-size requires a value")
            chunk_size = _parse_size(args[i + 1])
            i += 2
            continue
        if arg.startswith("--chunk-size="):
            chunk_size = _parse_size(arg.split("=", 1)[1])
        elif arg.startswith("--"):
            raise ParseError(f"Unknown option: {arg}")
        else:
            positional.append(arg)
        i += 1

    if len(positional) != 2:
        raise ParseError("split requires exactly 2 arguments: <file> <store-dir>")

    file_path, store_dir = positional
    return SplitCommand(file_path=file_path, store_dir=store_dir, chunk_size=chunk_size)


def _parse_join(args: list[str]) -> JoinCommand:
    """Parse 'join <store-dir> <output>' command."""
    if len(args) != 2:
        raise ParseError("join requires exactly 2 arguments: <store-dir> <output>")

    store_dir, output_path = args
    return JoinCommand(store_dir=store_dir, output_path=output_path)


def _parse_verify(args: list[str]) -> VerifyCommand:
    """Parse 'verify <store-dir>' command."""
    if len(args) != 1:
        raise ParseError("verify requires exactly 1 argument: <store-dir>")

    return VerifyCommand(store_dir=args[0])


_SIZE_UNITS = {"k": 1024, "m": 1024 ** 2, "g": 1024 ** 3}


def _parse_size(value: str) -> int:
    """Parse a byte count such as '1000', '64k' or '4M'."""
    text = value.strip().lower()
    multiplier = 1
    if text and text[-1] in _SIZE_UNITS:
        multiplier = _SIZE_UNITS[text[-1]]
        text = text[:-1]

    try:
        size = int(text) * multiplier
    except ValueError:
        raise ParseError(f"Invalid size: {value}")

    if size <= 0:
        raise ParseError(f"Size must be positive: {value}")
    return size

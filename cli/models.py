"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class SplitCommand:
    """Split a file into a chunk store directory."""

    file_path: str
    store_dir: str
    chunk_size: Optional[int] = None
    command: Literal["split"] = "split"


@dataclass(frozen=True)
class JoinCommand:
    """Rebuild a file from a chunk store directory."""

    store_dir: str
    output_path: str
    command: Literal["join"] = "join"


@dataclass(frozen=True)
class VerifyCommand:
    """Validate every chunk and the file checksum without writing output."""

    store_dir: str
    command: Literal["verify"] = "verify"


@dataclass(frozen=True)
class HelpCommand:
    """Show usage."""

    command: Literal["help"] = "help"


CommandRequest = Union[SplitCommand, JoinCommand, VerifyCommand, HelpCommand]

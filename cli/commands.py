"""Command handler functions for CLI operations."""

import asyncio
from pathlib import Path
from typing import Optional

from chunkstore.chunk_storage import ChunkStore
from chunkstore.pipeline import join_from_store, split_to_store, verify_store
from cli.config import Config
from cli.constants import DEFAULT_CONFIG_PATH, GREEN, HELP_TEXT, RESET
from cli.models import HelpCommand, JoinCommand, SplitCommand, VerifyCommand
from cli.utils import format_file_size, short_checksum
from common.logging_config import get_logger

logger = get_logger(__name__)


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        logger.debug(f"Loading config from {DEFAULT_CONFIG_PATH}")
        _config = Config(DEFAULT_CONFIG_PATH)
    return _config


def handle_split(cmd: SplitCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'split' command.

    Args:
        cmd: SplitCommand with file path, store directory and optional chunk size
        config: Optional Config for dependency injection (testing)

    Returns:
        Summary of the written chunks
    """
    if config is None:
        config = get_config()
    chunk_size = cmd.chunk_size or config.get_chunk_size()
    logger.info(f"Executing split command: {cmd.file_path} -> {cmd.store_dir} (chunk_size={chunk_size})")

    store = ChunkStore(cmd.store_dir)
    manifest = asyncio.run(split_to_store(
        cmd.file_path,
        store,
        chunk_size=chunk_size,
        read_block_size=config.get_read_block_size(),
    ))
    return (
        f"{GREEN}Split{RESET} {manifest.file_name} ({format_file_size(manifest.size)}) "
        f"into {len(manifest.chunks)} chunk(s) of up to {format_file_size(chunk_size)} in {store.root}\n"
        f"File checksum: {manifest.final_checksum}"
    )


def handle_join(cmd: JoinCommand) -> str:
    """
    Handle 'join' command.

    Args:
        cmd: JoinCommand with store directory and output path

    Returns:
        Summary of the rebuilt file
    """
    logger.info(f"Executing join command: {cmd.store_dir} -> {cmd.output_path}")
    store = ChunkStore(cmd.store_dir)
    final = asyncio.run(join_from_store(store, cmd.output_path))
    size = Path(cmd.output_path).stat().st_size
    return (
        f"{GREEN}Joined{RESET} {len(final.source_chunks)} chunk(s) into {cmd.output_path} "
        f"({format_file_size(size)}, checksum {short_checksum(final.final_checksum)})"
    )


def handle_verify(cmd: VerifyCommand) -> str:
    """
    Handle 'verify' command.

    Args:
        cmd: VerifyCommand with store directory

    Returns:
        Verification result message
    """
    logger.info(f"Executing verify command: {cmd.store_dir}")
    final = asyncio.run(verify_store(ChunkStore(cmd.store_dir)))
    return (
        f"{GREEN}OK{RESET} {len(final.source_chunks)} chunk(s) verified, "
        f"checksum {short_checksum(final.final_checksum)}"
    )


def handle_help(cmd: HelpCommand) -> str:
    return HELP_TEXT

"""Splits a byte stream into fixed-size, checksummed chunks."""

from pathlib import Path
from typing import AsyncIterator, Union

from chunking.checksum import RunningDigest, compute_checksum
from chunking.sources import ByteSource, FileByteSource
from common.constants import DEFAULT_CHUNK_SIZE_BYTES, DEFAULT_READ_BLOCK_SIZE_BYTES
from common.logging_config import get_logger
from common.types import ChunkFinal, ChunkIntermediate, ChunkResult

logger = get_logger(__name__)


async def chunk(source: ByteSource, chunk_size: int) -> AsyncIterator[ChunkResult]:
    """
    Cut the bytes of ``source`` into windows of exactly ``chunk_size`` bytes.

    Every full window is yielded as a ChunkIntermediate with its own
    checksum, indices starting at 0. Once the source is exhausted a single
    ChunkFinal carries the leftover bytes (possibly empty) and the checksum
    of everything read. The source is released on every exit path,
    including when the consumer stops iterating early.

    Args:
        source: Byte source to consume exactly once
        chunk_size: Size of each window in bytes

    Yields:
        ChunkIntermediate records followed by exactly one ChunkFinal

    Raises:
        ValueError: If chunk_size is not positive
    """
    async with source:
        if chunk_size <= 0:
            raise ValueError("Chunk size must be a positive integer")

        file_digest = RunningDigest()
        buffer = bytearray()
        index = 0
        total_bytes = 0

        async for block in source:
            file_digest.update(block)
            total_bytes += len(block)
            view = memoryview(block)

            # buffer stays below 2 * chunk_size: oversized blocks go in one slice at a time
            for offset in range(0, len(view), chunk_size):
                buffer += view[offset:offset + chunk_size]

                while len(buffer) >= chunk_size:
                    window = bytes(buffer[:chunk_size])
                    del buffer[:chunk_size]
                    checksum = compute_checksum(window)
                    logger.debug(f"Cut chunk {index} ({len(window)} bytes, checksum={checksum[:16]}...)")
                    yield ChunkIntermediate(index=index, data=window, checksum=checksum)
                    index += 1

        final_checksum = file_digest.finalize()
        logger.info(
            f"Chunked {total_bytes} bytes into {index} full chunks "
            f"+ {len(buffer)} trailing bytes (chunk_size={chunk_size})"
        )
        yield ChunkFinal(data=bytes(buffer), final_checksum=final_checksum)


class FileChunker:
    """Chunks a file on disk."""

    def __init__(
        self,
        file_path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE_BYTES,
        read_block_size: int = DEFAULT_READ_BLOCK_SIZE_BYTES,
    ):
        self.file_path = Path(file_path)
        self.chunk_size = chunk_size
        self.read_block_size = read_block_size

    def chunk(self) -> AsyncIterator[ChunkResult]:
        """Start a fresh pass over the file; each call opens the file again."""
        block_size = min(self.read_block_size, self.chunk_size) if self.chunk_size > 0 else self.read_block_size
        source = FileByteSource(self.file_path, block_size=block_size)
        return chunk(source, self.chunk_size)

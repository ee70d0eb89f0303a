"""Helpers shared by chunk/join tests."""

import hashlib
from typing import AsyncIterator, List, Optional

from common.types import ChunkDescriptor, ChunkFinal, ChunkResult


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def make_descriptor(
    index: int,
    data: Optional[bytes],
    checksum: Optional[str] = None,
    calls: Optional[list] = None,
) -> ChunkDescriptor:
    """
    Build a ChunkDescriptor whose accessor returns ``data``.

    Args:
        index: Chunk index
        data: Bytes the accessor returns (None simulates a missing chunk)
        checksum: Declared checksum, defaults to the real checksum of data
        calls: Optional list the accessor appends its index to when awaited

    Returns:
        ChunkDescriptor instance
    """
    async def accessor():
        if calls is not None:
            calls.append(index)
        return data

    if checksum is None:
        checksum = sha256_hex(data or b"")
    return ChunkDescriptor(index=index, checksum=checksum, accessor=accessor)


def split_bytes(content: bytes, size: int) -> List[bytes]:
    return [content[i:i + size] for i in range(0, len(content), size)]


async def collect(results: AsyncIterator) -> list:
    return [result async for result in results]


def descriptors_from_chunk_results(results: List[ChunkResult]) -> List[ChunkDescriptor]:
    """Turn chunker output into joiner input, remainder included as the last chunk."""
    descriptors = []
    for result in results:
        if isinstance(result, ChunkFinal):
            if result.data:
                descriptors.append(make_descriptor(len(descriptors), result.data))
        else:
            descriptors.append(make_descriptor(result.index, result.data, result.checksum))
    return descriptors

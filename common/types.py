"""Shared data type definitions (chunk results, join results, descriptors)."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Union

ChunkAccessor = Callable[[], Awaitable[Optional[bytes]]]


@dataclass(frozen=True)
class ChunkIntermediate:
    """
    A full-size window cut by the chunker.
    """
    index: int
    data: bytes
    checksum: str


@dataclass(frozen=True)
class ChunkFinal:
    """
    Terminal chunker record: leftover bytes (possibly empty) and the file checksum.
    """
    data: bytes
    final_checksum: str


ChunkResult = Union[ChunkIntermediate, ChunkFinal]


@dataclass(frozen=True)
class ManifestEntry:
    """
    Index and checksum of a chunk that was joined.
    """
    index: int
    checksum: str


@dataclass(frozen=True)
class JoinIntermediate:
    """
    Validated bytes of a single chunk, emitted in ascending index order.
    """
    data: bytes
    checksum: str


@dataclass(frozen=True)
class JoinFinal:
    """
    Terminal joiner record: verified file checksum and the chunks that made it up.
    """
    final_checksum: str
    source_chunks: Tuple[ManifestEntry, ...]


JoinResult = Union[JoinIntermediate, JoinFinal]


@dataclass(frozen=True)
class ChunkDescriptor:
    """
    Joiner input: a chunk's position, declared checksum and byte accessor.

    The accessor returns None when the chunk's bytes are not available.
    """
    index: int
    checksum: str
    accessor: ChunkAccessor

"""Reassembles checksummed chunks into the original byte stream."""

from typing import AsyncIterator, Iterable, List

from chunking.checksum import RunningDigest, compute_checksum
from common.exceptions import (
    InvalidChecksumError,
    InvalidChunkError,
    InvalidFinalChecksumError,
    MissingChunkError,
)
from common.logging_config import get_logger
from common.types import ChunkDescriptor, JoinFinal, JoinIntermediate, JoinResult, ManifestEntry

logger = get_logger(__name__)


def _sorted_contiguous(chunks: Iterable[ChunkDescriptor]) -> List[ChunkDescriptor]:
    """Sort chunks by index and check they cover 0..count-1 exactly once."""
    sorted_chunks = sorted(chunks, key=lambda c: c.index)
    for position, descriptor in enumerate(sorted_chunks):
        if descriptor.index != position:
            logger.error(
                f"Chunk set is not contiguous: expected index {position}, found {descriptor.index}"
            )
            raise InvalidChunkError(position)
    return sorted_chunks


async def join(
    expected_final_checksum: str,
    chunks: Iterable[ChunkDescriptor],
) -> AsyncIterator[JoinResult]:
    """
    Validate and reassemble chunks in ascending index order.

    Contiguity is checked before anything is yielded. Each chunk is then
    fetched, checked against its own checksum and yielded immediately, so a
    consumer may already hold earlier chunks when a later one fails. The
    whole-file checksum is compared only once every chunk has passed.

    Args:
        expected_final_checksum: SHA-256 hex digest of the complete file
        chunks: Chunk descriptors in any order

    Yields:
        One JoinIntermediate per chunk followed by exactly one JoinFinal

    Raises:
        InvalidChunkError: Indices are duplicated or not contiguous from 0
        MissingChunkError: A chunk's accessor returned no data
        InvalidChecksumError: A chunk's bytes do not match its checksum
        InvalidFinalChecksumError: The reassembled file does not match
    """
    sorted_chunks = _sorted_contiguous(chunks)

    file_digest = RunningDigest()
    source_chunks: List[ManifestEntry] = []

    for descriptor in sorted_chunks:
        data = await descriptor.accessor()
        if data is None:
            logger.error(f"Chunk {descriptor.index} has no data")
            raise MissingChunkError(descriptor.index)

        checksum = compute_checksum(data)
        if checksum != descriptor.checksum:
            logger.error(
                f"Checksum mismatch for chunk {descriptor.index}: "
                f"expected {descriptor.checksum}, got {checksum}"
            )
            raise InvalidChecksumError(descriptor.index, descriptor.checksum, checksum)

        file_digest.update(data)
        source_chunks.append(ManifestEntry(index=descriptor.index, checksum=descriptor.checksum))
        logger.debug(f"Joined chunk {descriptor.index} ({len(data)} bytes)")
        yield JoinIntermediate(data=data, checksum=descriptor.checksum)

    final_checksum = file_digest.finalize()
    if final_checksum != expected_final_checksum:
        logger.error(
            f"Final checksum mismatch: expected {expected_final_checksum}, got {final_checksum}"
        )
        raise InvalidFinalChecksumError(expected_final_checksum, final_checksum)

    logger.info(f"Joined {len(source_chunks)} chunks, checksum={final_checksum[:16]}...")
    yield JoinFinal(final_checksum=final_checksum, source_chunks=tuple(source_chunks))


class FileJoiner:
    """Joins a fixed set of chunks against an expected file checksum."""

    def __init__(self, final_checksum: str, chunks: Iterable[ChunkDescriptor]):
        self.final_checksum = final_checksum
        self.chunks = list(chunks)

    def join(self) -> AsyncIterator[JoinResult]:
        return join(self.final_checksum, self.chunks)

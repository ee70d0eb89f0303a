"""Split files into a ChunkStore and join them back out again."""

from contextlib import aclosing
from pathlib import Path
from typing import List, Optional, Union

import aiofiles

from chunking.checksum import compute_checksum
from chunking.chunker import FileChunker
from chunking.joiner import join
from chunkstore.chunk_storage import ChunkStore
from chunkstore.manifest import FileManifest, ManifestChunk
from common.constants import DEFAULT_CHUNK_SIZE_BYTES, DEFAULT_READ_BLOCK_SIZE_BYTES, PARTIAL_FILE_SUFFIX
from common.logging_config import get_logger
from common.types import ChunkFinal, JoinFinal, JoinIntermediate

logger = get_logger(__name__)


async def split_to_store(
    file_path: Union[str, Path],
    store: ChunkStore,
    chunk_size: int = DEFAULT_CHUNK_SIZE_BYTES,
    read_block_size: int = DEFAULT_READ_BLOCK_SIZE_BYTES,
) -> FileManifest:
    """
    Chunk a file and persist every chunk plus a manifest.

    A non-empty trailing remainder is stored as one more chunk with its
    own checksum, so the stored chunks alone rebuild the whole file.

    Any split already in the store is replaced: its manifest is removed
    before the first chunk is written and chunks the new manifest does not
    reference are deleted. If the split fails the store is left without a
    manifest or chunk files.

    Args:
        file_path: File to split
        store: Destination store
        chunk_size: Size of each chunk in bytes
        read_block_size: Size of each read from the file

    Returns:
        The manifest written to the store
    """
    file_path = Path(file_path)
    chunker = FileChunker(file_path, chunk_size=chunk_size, read_block_size=read_block_size)
    chunks = []
    total_size = 0
    final_checksum: Optional[str] = None
    previous_chunks = store.list_chunks()

    store.ensure_directory()
    store.delete_manifest()
    try:
        async with aclosing(chunker.chunk()) as results:
            async for result in results:
                if isinstance(result, ChunkFinal):
                    final_checksum = result.final_checksum
                    if result.data:
                        index = len(chunks)
                        store.write_chunk(index, result.data)
                        chunks.append(ManifestChunk(
                            index=index,
                            checksum=compute_checksum(result.data),
                            size=len(result.data),
                        ))
                        total_size += len(result.data)
                else:
                    store.write_chunk(result.index, result.data)
                    chunks.append(ManifestChunk(index=result.index, checksum=result.checksum, size=len(result.data)))
                    total_size += len(result.data)
    except BaseException as e:
        logger.error(f"Split of {file_path} failed after {len(chunks)} chunks: {e}")
        _cleanup_chunks(store, store.list_chunks())
        raise

    stale = [index for index in previous_chunks if index >= len(chunks)]
    _cleanup_chunks(store, stale)

    manifest = FileManifest(
        file_name=file_path.name,
        size=total_size,
        chunk_size=chunk_size,
        final_checksum=final_checksum,
        chunks=chunks,
    )
    store.write_manifest(manifest)
    logger.info(f"Split {file_path} into {len(chunks)} chunks in {store.root}")
    return manifest


def _cleanup_chunks(store: ChunkStore, indices: List[int]) -> None:
    """Delete chunk files that no manifest will reference."""
    for index in sorted(set(indices)):
        try:
            store.delete_chunk(index)
        except OSError as e:
            logger.warning(f"Failed to delete chunk {index} from {store.root}: {e}")
    if indices:
        logger.info(f"Removed {len(set(indices))} unreferenced chunk(s) from {store.root}")


async def join_from_store(store: ChunkStore, output_path: Union[str, Path]) -> JoinFinal:
    """
    Rebuild a file from a store into ``output_path``.

    Bytes are written to a ``.part`` file that only replaces
    ``output_path`` once the whole-file checksum has been verified. The
    partial file is removed on failure.

    Raises:
        ChunkingError: If any chunk or the final checksum fails validation
        OSError: If the store or output cannot be read or written
    """
    output_path = Path(output_path)
    partial_path = output_path.with_name(output_path.name + PARTIAL_FILE_SUFFIX)
    manifest = store.read_manifest()
    final: Optional[JoinFinal] = None

    try:
        async with aiofiles.open(partial_path, 'wb') as out:
            async with aclosing(join(manifest.final_checksum, store.descriptors(manifest))) as results:
                async for result in results:
                    if isinstance(result, JoinIntermediate):
                        await out.write(result.data)
                    else:
                        final = result
    except BaseException:
        partial_path.unlink(missing_ok=True)
        logger.warning(f"Removed partial output {partial_path}")
        raise

    partial_path.replace(output_path)
    logger.info(f"Joined {len(final.source_chunks)} chunks from {store.root} into {output_path}")
    return final


async def verify_store(store: ChunkStore) -> JoinFinal:
    """Run every validation a join performs without writing any output."""
    manifest = store.read_manifest()
    final: Optional[JoinFinal] = None
    async with aclosing(join(manifest.final_checksum, store.descriptors(manifest))) as results:
        async for result in results:
            if isinstance(result, JoinFinal):
                final = result
    return final

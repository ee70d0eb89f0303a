"""Tests for the validating joiner."""

import random

import pytest

from chunking.joiner import FileJoiner, join
from common.exceptions import (
    ChunkingError,
    InvalidChecksumError,
    InvalidChunkError,
    InvalidFinalChecksumError,
    MissingChunkError,
)
from common.types import ChunkDescriptor, JoinFinal, JoinIntermediate, ManifestEntry
from helpers import collect, make_descriptor, sha256_hex, split_bytes

CONTENT = b"Hello, World! This is a test file."


def chunked(content: bytes = CONTENT, size: int = 10, calls: list = None) -> list:
    return [make_descriptor(i, piece, calls=calls) for i, piece in enumerate(split_bytes(content, size))]


class TestJoining:
    """Test successful joins."""

    @pytest.mark.asyncio
    async def test_join_reconstructs_content(self):
        chunks = chunked()
        results = await collect(join(sha256_hex(CONTENT), chunks))

        intermediates = results[:-1]
        final = results[-1]
        assert all(isinstance(r, JoinIntermediate) for r in intermediates)
        assert b"".join(r.data for r in intermediates) == CONTENT
        assert [r.checksum for r in intermediates] == [c.checksum for c in chunks]
        assert isinstance(final, JoinFinal)
        assert final.final_checksum == sha256_hex(CONTENT)
        assert final.source_chunks == tuple(ManifestEntry(index=c.index, checksum=c.checksum) for c in chunks)

    @pytest.mark.asyncio
    async def test_reversed_and_shuffled_input_gives_identical_output(self):
        expected = await collect(join(sha256_hex(CONTENT), chunked()))

        reversed_chunks = list(reversed(chunked()))
        shuffled_chunks = chunked()
        random.Random(7).shuffle(shuffled_chunks)

        assert await collect(join(sha256_hex(CONTENT), reversed_chunks)) == expected
        assert await collect(join(sha256_hex(CONTENT), shuffled_chunks)) == expected

    @pytest.mark.asyncio
    async def test_empty_chunk_set(self):
        results = await collect(join(sha256_hex(b""), []))

        assert results == [JoinFinal(final_checksum=sha256_hex(b""), source_chunks=())]

    @pytest.mark.asyncio
    async def test_empty_chunk_set_with_wrong_checksum(self):
        with pytest.raises(InvalidFinalChecksumError):
            await collect(join(sha256_hex(b"not empty"), []))

    @pytest.mark.asyncio
    async def test_file_joiner_wrapper(self):
        joiner = FileJoiner(final_checksum=sha256_hex(CONTENT), chunks=chunked())
        results = await collect(joiner.join())

        assert results[-1].final_checksum == sha256_hex(CONTENT)
        assert len(results[-1].source_chunks) == 4


class TestContiguity:
    """Test index validation happening before any output."""

    @pytest.mark.asyncio
    async def test_gap_fails_before_yielding(self):
        calls = []
        chunks = [make_descriptor(0, b"a", calls=calls), make_descriptor(2, b"b", calls=calls)]
        results = join(sha256_hex(b"ab"), chunks)

        with pytest.raises(InvalidChunkError) as exc_info:
            await results.__anext__()

        assert exc_info.value.expected_index == 1
        assert calls == []

    @pytest.mark.asyncio
    async def test_missing_first_index(self):
        with pytest.raises(InvalidChunkError) as exc_info:
            await collect(join("x", [make_descriptor(1, b"a")]))
        assert exc_info.value.expected_index == 0

    @pytest.mark.asyncio
    async def test_duplicate_index(self):
        chunks = [make_descriptor(0, b"a"), make_descriptor(0, b"a"), make_descriptor(1, b"b")]
        with pytest.raises(InvalidChunkError) as exc_info:
            await collect(join(sha256_hex(b"ab"), chunks))
        assert exc_info.value.expected_index == 1

    @pytest.mark.asyncio
    async def test_negative_index(self):
        with pytest.raises(InvalidChunkError):
            await collect(join("x", [make_descriptor(-1, b"a"), make_descriptor(0, b"b")]))


class TestIntegrityFailures:
    """Test mid-stream and final validation failures."""

    @pytest.mark.asyncio
    async def test_missing_chunk_stops_processing(self):
        calls = []
        pieces = split_bytes(CONTENT, 10)
        chunks = [make_descriptor(i, piece, calls=calls) for i, piece in enumerate(pieces)]
        chunks[1] = make_descriptor(1, None, checksum=sha256_hex(pieces[1]), calls=calls)

        seen = []
        with pytest.raises(MissingChunkError) as exc_info:
            async for result in join(sha256_hex(CONTENT), chunks):
                seen.append(result)

        assert exc_info.value.index == 1
        assert [r.data for r in seen] == [pieces[0]]
        assert calls == [0, 1]

    @pytest.mark.asyncio
    async def test_missing_only_chunk(self):
        with pytest.raises(MissingChunkError):
            await collect(join("dummy", [make_descriptor(0, None, checksum="dummy")]))

    @pytest.mark.asyncio
    async def test_tampered_chunk_raises_invalid_checksum(self):
        pieces = split_bytes(CONTENT, 10)
        chunks = [make_descriptor(i, piece) for i, piece in enumerate(pieces)]
        tampered = b"X" + pieces[2][1:]
        chunks[2] = make_descriptor(2, tampered, checksum=sha256_hex(pieces[2]))

        seen = []
        with pytest.raises(InvalidChecksumError) as exc_info:
            async for result in join(sha256_hex(CONTENT), chunks):
                seen.append(result)

        error = exc_info.value
        assert error.index == 2
        assert error.expected == sha256_hex(pieces[2])
        assert error.actual == sha256_hex(tampered)
        assert "index 2" in str(error)
        assert [r.data for r in seen] == pieces[:2]

    @pytest.mark.asyncio
    async def test_wrong_final_checksum_after_all_intermediates(self):
        chunks = chunked()
        seen = []

        with pytest.raises(InvalidFinalChecksumError) as exc_info:
            async for result in join("invalid-final-checksum", chunks):
                seen.append(result)

        assert len(seen) == len(chunks)
        assert all(isinstance(r, JoinIntermediate) for r in seen)
        assert exc_info.value.expected == "invalid-final-checksum"
        assert exc_info.value.actual == sha256_hex(CONTENT)

    @pytest.mark.asyncio
    async def test_accessor_exception_propagates_unchanged(self):
        async def broken():
            raise ConnectionError("storage offline")

        chunks = chunked()
        chunks[0] = ChunkDescriptor(index=0, checksum=chunks[0].checksum, accessor=broken)

        with pytest.raises(ConnectionError, match="storage offline"):
            await collect(join(sha256_hex(CONTENT), chunks))

    def test_errors_share_base_class(self):
        for error_type in (InvalidChunkError, MissingChunkError, InvalidChecksumError, InvalidFinalChecksumError):
            assert issubclass(error_type, ChunkingError)

"""Custom exception classes for chunking and joining."""

from typing import Optional


class ChunkingError(Exception):
    """
    Base exception class for all chunk/join errors.
    """
    pass


class InvalidChunkError(ChunkingError):
    """
    Raised when a chunk set is malformed (duplicate or non-contiguous indices).

    Detected before any bytes are emitted by the joiner.
    """

    def __init__(self, expected_index: int, message: Optional[str] = None):
        self.expected_index = expected_index
        super().__init__(message or f"Missing chunk at index {expected_index}")


class MissingChunkError(ChunkingError):
    """
    Raised when a chunk's accessor reports that no data is available.
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Chunk at index {index} has no data")


class InvalidChecksumError(ChunkingError):
    """
    Raised when a chunk's computed checksum does not match its declared one.
    """

    def __init__(self, index: int, expected: str, actual: str):
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Chunk at index {index} has invalid checksum. "
            f"Expected: {expected}, Got: {actual}"
        )


class InvalidFinalChecksumError(ChunkingError):
    """
    Raised when the reassembled file's checksum does not match the expected one.
    """

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Final file checksum is invalid. Expected: {expected}, Got: {actual}"
        )

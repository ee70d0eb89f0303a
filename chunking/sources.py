"""Byte sources consumed by the chunker.

A byte source is an async iterable of ``bytes`` blocks that is also an
async context manager; leaving the context releases whatever the source
holds open.
"""

import inspect
from pathlib import Path
from typing import AsyncIterable, AsyncIterator, Iterable, Protocol, Union, runtime_checkable

import aiofiles

from common.constants import DEFAULT_READ_BLOCK_SIZE_BYTES
from common.logging_config import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ByteSource(Protocol):
    """Sequential feed of byte blocks that must be closed after use."""

    def __aiter__(self) -> AsyncIterator[bytes]:
        ...

    async def aclose(self) -> None:
        ...

    async def __aenter__(self) -> "ByteSource":
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...


class FileByteSource:
    """Reads a file from disk in blocks of at most ``block_size`` bytes."""

    def __init__(self, path: Union[str, Path], block_size: int = DEFAULT_READ_BLOCK_SIZE_BYTES):
        if block_size <= 0:
            raise ValueError("Block size must be a positive integer")
        self.path = Path(path)
        self.block_size = block_size
        self._file = None
        self.closed = False

    async def open(self) -> None:
        """Open the underlying file if it is not open yet."""
        if self.closed:
            raise ValueError(f"Byte source for {self.path} is already closed")
        if self._file is None:
            self._file = await aiofiles.open(self.path, 'rb')
            logger.debug(f"Opened {self.path} for reading (block_size={self.block_size})")

    async def __aiter__(self) -> AsyncIterator[bytes]:
        await self.open()
        while True:
            block = await self._file.read(self.block_size)
            if not block:
                break
            yield block

    async def aclose(self) -> None:
        """Close the underlying file. Safe to call more than once."""
        if self._file is not None:
            await self._file.close()
            self._file = None
            logger.debug(f"Closed {self.path}")
        self.closed = True

    async def __aenter__(self) -> "FileByteSource":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class IterableByteSource:
    """
    Adapts a sync or async iterable of byte blocks to a byte source.

    If the wrapped iterator exposes ``close``/``aclose`` it is called
    when the source is released.
    """

    def __init__(self, blocks: Union[Iterable[bytes], AsyncIterable[bytes]]):
        if hasattr(blocks, '__aiter__'):
            self._iterator = blocks.__aiter__()
        else:
            self._iterator = iter(blocks)
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self.closed:
            raise ValueError("Byte source is already closed")
        if hasattr(self._iterator, '__anext__'):
            async for block in self._iterator:
                yield bytes(block)
        else:
            for block in self._iterator:
                yield bytes(block)

    async def aclose(self) -> None:
        """Release the wrapped iterator. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        closer = getattr(self._iterator, 'aclose', None) or getattr(self._iterator, 'close', None)
        if closer is not None:
            result = closer()
            if inspect.isawaitable(result):
                await result

    async def __aenter__(self) -> "IterableByteSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

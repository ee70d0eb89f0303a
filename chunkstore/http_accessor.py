"""Fetches chunk bytes from an HTTP endpoint."""

from typing import Optional

import httpx

from common.logging_config import get_logger
from common.types import ChunkAccessor

logger = get_logger(__name__)


class HttpChunkAccessor:
    """
    Serves chunk accessors backed by ``GET {base_url}/{index}``.

    A 404 response means the chunk has no data. Any other error status
    raises httpx.HTTPStatusError; transport errors propagate as-is.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip('/')

    def chunk_url(self, index: int) -> str:
        return f"{self.base_url}/{index}"

    async def fetch(self, index: int) -> Optional[bytes]:
        url = self.chunk_url(index)
        response = await self.client.get(url)
        if response.status_code == 404:
            logger.warning(f"Chunk {index} not found at {url}")
            return None
        response.raise_for_status()
        logger.debug(f"Fetched chunk {index} from {url} ({len(response.content)} bytes)")
        return response.content

    def accessor(self, index: int) -> ChunkAccessor:
        async def read() -> Optional[bytes]:
            return await self.fetch(index)
        return read

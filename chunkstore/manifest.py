"""Pydantic models describing a chunked file on disk."""

from typing import List

from pydantic import BaseModel, Field

from common.types import ChunkDescriptor


class ManifestChunk(BaseModel):
    """One stored chunk."""
    index: int = Field(ge=0)
    checksum: str
    size: int = Field(ge=0)


class FileManifest(BaseModel):
    """Everything needed to rebuild a file from its stored chunks."""
    file_name: str
    size: int = Field(ge=0)
    chunk_size: int = Field(gt=0)
    final_checksum: str
    chunks: List[ManifestChunk] = []

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, data: str) -> "FileManifest":
        return cls.model_validate_json(data)

    def descriptors(self, accessor_for) -> List[ChunkDescriptor]:
        """
        Build joiner input for every chunk in the manifest.

        Args:
            accessor_for: Callable mapping a chunk index to its ChunkAccessor

        Returns:
            List of ChunkDescriptor in manifest order
        """
        return [
            ChunkDescriptor(index=c.index, checksum=c.checksum, accessor=accessor_for(c.index))
            for c in self.chunks
        ]

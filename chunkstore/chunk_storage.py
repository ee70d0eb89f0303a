"""Manages chunk files of a single split file in a local directory."""

from pathlib import Path
from typing import List, Optional, Union

from chunkstore.manifest import FileManifest
from common.constants import CHUNK_FILE_SUFFIX, MANIFEST_FILE_NAME
from common.logging_config import get_logger
from common.types import ChunkAccessor, ChunkDescriptor

logger = get_logger(__name__)


class ChunkStore:
    """Stores chunks as ``<index>.chk`` files next to a ``manifest.json``."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def ensure_directory(self) -> None:
        """Ensure the store directory exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def get_chunk_path(self, index: int) -> Path:
        """
        Get file path for a chunk.
        
        Args:
            index: Position of the chunk in the file
            
        Returns:
            Path object for chunk file
        """
        return self.root / f"{index:08d}{CHUNK_FILE_SUFFIX}"

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILE_NAME

    def write_chunk(self, index: int, data: bytes) -> str:
        """
        Write chunk data to disk.
        
        Args:
            index: Position of the chunk in the file
            data: Raw chunk data
            
        Returns:
            String path to written file
            
        Raises:
            OSError: If write operation fails
        """
        self.ensure_directory()
        filepath = self.get_chunk_path(index)
        filepath.write_bytes(data)
        logger.debug(f"Wrote chunk {index} to {filepath} ({len(data)} bytes)")
        return str(filepath)

    def read_chunk(self, index: int) -> Optional[bytes]:
        """
        Read entire chunk from disk.
        
        Args:
            index: Position of the chunk in the file
            
        Returns:
            Raw chunk data, or None if the chunk file does not exist
            
        Raises:
            OSError: If read operation fails
        """
        filepath = self.get_chunk_path(index)
        try:
            return filepath.read_bytes()
        except FileNotFoundError:
            logger.warning(f"Chunk {index} not found at {filepath}")
            return None

    def accessor(self, index: int) -> ChunkAccessor:
        """Return an async accessor that reads chunk ``index`` on demand."""
        async def read() -> Optional[bytes]:
            return self.read_chunk(index)
        return read

    def delete_chunk(self, index: int) -> bool:
        """
        Delete chunk file from disk.
        
        Returns:
            True if file was deleted, False if it didn't exist
        """
        filepath = self.get_chunk_path(index)
        if filepath.exists():
            filepath.unlink()
            return True
        return False

    def chunk_exists(self, index: int) -> bool:
        return self.get_chunk_path(index).exists()

    def list_chunks(self) -> List[int]:
        """
        List indices of all chunks in the store directory.
        
        Returns:
            Sorted list of chunk indices
        """
        if not self.root.exists():
            return []

        indices = []
        for filepath in self.root.glob(f"*{CHUNK_FILE_SUFFIX}"):
            if filepath.stem.isdigit():
                indices.append(int(filepath.stem))
        return sorted(indices)

    def write_manifest(self, manifest: FileManifest) -> Path:
        self.ensure_directory()
        self.manifest_path.write_text(manifest.to_json())
        logger.info(f"Wrote manifest for {manifest.file_name} ({len(manifest.chunks)} chunks) to {self.manifest_path}")
        return self.manifest_path

    def delete_manifest(self) -> bool:
        """
        Delete the store's manifest.

        Returns:
            True if a manifest was deleted, False if there was none
        """
        if self.manifest_path.exists():
            self.manifest_path.unlink()
            logger.debug(f"Deleted manifest {self.manifest_path}")
            return True
        return False

    def read_manifest(self) -> FileManifest:
        """
        Load the store's manifest.

        Raises:
            FileNotFoundError: If the store has no manifest
            pydantic.ValidationError: If the manifest is malformed
        """
        return FileManifest.from_json(self.manifest_path.read_text())

    def descriptors(self, manifest: FileManifest) -> List[ChunkDescriptor]:
        """Joiner input for every chunk listed in ``manifest``, read from this store."""
        return manifest.descriptors(self.accessor)

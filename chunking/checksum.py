"""Provides SHA-256 checksum calculation and verification helpers."""

import hashlib


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.
    
    Args:
        data: Bytes to compute checksum for
        
    Returns:
        Hexadecimal string representation of SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


class RunningDigest:
    """
    Calculate SHA-256 checksum incrementally for streaming data.
    
    A digest is finalized exactly once; it cannot be updated or
    finalized again afterwards.

    Usage:
        digest = RunningDigest()
        digest.update(block1)
        digest.update(block2)
        file_checksum = digest.finalize()
    """
    
    def __init__(self):
        self._hasher = hashlib.sha256()
        self._finalized = False
    
    @property
    def finalized(self) -> bool:
        return self._finalized

    def update(self, data: bytes) -> None:
        """
        Update checksum with new data.
        
        Args:
            data: Bytes to add to checksum calculation
        """
        if self._finalized:
            raise ValueError("Cannot update after finalization")
        self._hasher.update(data)
    
    def finalize(self) -> str:
        """
        Finalize checksum calculation and return result.
        
        Returns:
            Hexadecimal string representation of SHA-256 hash
        """
        if self._finalized:
            raise ValueError("Digest already finalized")
        self._finalized = True
        return self._hasher.hexdigest()

"""Project-wide constants (e.g., CHUNK_SIZE, storage layout names)."""

DEFAULT_CHUNK_SIZE_BYTES: int = 4 * 1024 * 1024  # 4 MiB default chunk size
DEFAULT_READ_BLOCK_SIZE_BYTES: int = 64 * 1024

CHUNK_FILE_SUFFIX: str = ".chk"
MANIFEST_FILE_NAME: str = "manifest.json"
PARTIAL_FILE_SUFFIX: str = ".part"

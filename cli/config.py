"""Configuration management for the chunkwise CLI."""

import json
import os
import shutil
from pathlib import Path

from common.constants import DEFAULT_CHUNK_SIZE_BYTES, DEFAULT_READ_BLOCK_SIZE_BYTES
from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "chunk_size": os.environ.get("CHUNKWISE_CHUNK_SIZE", DEFAULT_CHUNK_SIZE_BYTES),
        "read_block_size": DEFAULT_READ_BLOCK_SIZE_BYTES,
        "log_level": os.environ.get("LOG_LEVEL", "INFO"),
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.chunkwise/config.json)
        """
        self.config_path = Path(config_path)
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.chunkwise' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                logger.warning(f"Unreadable config {self.config_path} ({e}), backing up to {backup_path}")
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config: {copy_error}")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config to {self.config_path}: {e}")
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def get_chunk_size(self) -> int:
        """
        Get chunk size in bytes.

        Raises:
            ValueError: If the configured value is not a positive integer
        """
        return self._positive_int('chunk_size')

    def set_chunk_size(self, size: int) -> None:
        if size <= 0:
            raise ValueError("chunk_size must be a positive integer")
        self.data['chunk_size'] = size
        self.save()

    def get_read_block_size(self) -> int:
        return self._positive_int('read_block_size')

    def get_log_level(self) -> str:
        return str(self.data.get('log_level', 'INFO')).upper()

    def _positive_int(self, key: str) -> int:
        """Read ``key`` as a positive integer; digit strings (e.g. from the environment) are accepted."""
        value = self.data.get(key, self.DEFAULT_CONFIG[key])
        if isinstance(value, str) and value.strip().isdecimal():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")
        return value

"""Shared pytest fixtures for all tests."""

import pytest

from chunkstore.chunk_storage import ChunkStore
from cli.config import Config


@pytest.fixture
def temp_config(tmp_path):
    """
    Create temporary config instance.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Config instance with temp config file
    """
    config_dir = tmp_path / '.chunkwise'
    config_dir.mkdir()
    return Config(config_dir / 'config.json')


@pytest.fixture
def store(tmp_path):
    """Empty chunk store in a temporary directory."""
    return ChunkStore(tmp_path / 'store')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a 2500 byte sample file.

    Returns:
        Path to sample file
    """
    file_path = tmp_path / 'sample.bin'
    file_path.write_bytes(bytes(range(250)) * 10)
    return file_path

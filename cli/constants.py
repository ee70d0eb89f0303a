"""CLI constants."""

from pathlib import Path

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"

DEFAULT_CONFIG_PATH = Path.home() / '.chunkwise' / 'config.json'

HELP_TEXT = """Usage: chunkwise [--debug] <command> [args]

Commands:
  split <file> <store-dir> [--chunk-size N]   Split file into checksummed chunks (N accepts k/M/G suffixes)
  join <store-dir> <output>                   Rebuild file from chunks, verifying every checksum
  verify <store-dir>                          Verify chunks and file checksum without writing output
  help                                        Show this help
"""

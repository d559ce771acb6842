"""Concrete implementation of the AddressSource interface for local files.

Uses `pathlib` to read UTF-8 text files, one address per line.
"""

import logging
from pathlib import Path
from typing import List

from geocli.domain.interfaces.address_source import AddressSource
from geocli.domain.models.common import Address, FilePath

logger = logging.getLogger(__name__)

class LocalFileSystem(AddressSource):
    """Implementation of AddressSource for the local disk."""

    def read_addresses(self, file_path: FilePath) -> List[Address]:
        """Reads addresses, skipping blank lines and trimming surrounding whitespace."""
        path = Path(file_path).expanduser()
        logger.debug(f"Attempting to read addresses from: {path}")
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            with path.open('r', encoding='utf-8') as f:
                addresses = [Address(line.strip()) for line in f if line.strip()]
        except PermissionError as e:
            logger.error(f"Permission denied reading file: {path}")
            raise PermissionError(f"Permission denied: {file_path}") from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading file {path}: {e}", exc_info=True)
            raise IOError(f"Failed to read file {file_path}: {e}") from e

        logger.info(f"Read {len(addresses)} address(es) from {path}")
        return addresses

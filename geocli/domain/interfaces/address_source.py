import abc
from typing import List

from geocli.domain.models.common import Address, FilePath


class AddressSource(abc.ABC):
    """Interface for loading the addresses of a batch."""

    @abc.abstractmethod
    def read_addresses(self, path: FilePath) -> List[Address]:
        """Reads addresses, one per non-blank line, preserving file order.

        Args:
            path: The path to the address file.

        Returns:
            The addresses in the order they appear.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If the user lacks permission to read the file.
        """
        pass

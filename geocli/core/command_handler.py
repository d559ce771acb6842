"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the work
to the address source, the GeocodeService and the user interface.
"""

import logging
from typing import List, Optional

from geocli.core.services.geocode_service import GeocodeService
from geocli.domain.interfaces.address_source import AddressSource
from geocli.domain.interfaces.user_interface import UserInterface
from geocli.domain.models.common import FilePath
from geocli.domain.models.errors import BatchExecutionError
from geocli.domain.models.geocoding import CallResult

logger = logging.getLogger(__name__)

FILE_PROMPT = "Please input the path to the file containing addresses: "

class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        geocode_service: GeocodeService,
        address_source: AddressSource,
        ui: UserInterface,
    ):
        """Initializes the CommandHandler with required services."""
        self.geocode_service = geocode_service
        self.address_source = address_source
        self.ui = ui

    def handle_geocode(self, file_path_str: Optional[str] = None, show_summary: bool = False) -> Optional[List[CallResult]]:
        """Handles the 'geocode' command.

        Reads the address file (asking for its path when none is given),
        resolves every address and displays the ordered results.

        Returns:
            The results in input order, or None if the command failed.
        """
        if not file_path_str:
            file_path_str = self.ui.get_prompt(FILE_PROMPT).strip()
        logger.info(f"Handling 'geocode' command for file: {file_path_str}")

        try:
            addresses = self.address_source.read_addresses(FilePath(file_path_str))
        except (FileNotFoundError, PermissionError, IOError) as e:
            logger.error(f"Could not read addresses: {e}")
            self.ui.display_error(f"Could not read addresses: {e}")
            return None

        try:
            results = self.geocode_service.geocode_all(addresses)
        except BatchExecutionError as e:
            logger.error(f"Geocode command failed: {e}", exc_info=True)
            self.ui.display_error(f"Geocoding aborted: {e}")
            return None

        self.ui.display_results(results)
        if show_summary:
            self.ui.display_summary(results)
        return results

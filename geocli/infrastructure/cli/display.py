import json
import logging
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from geocli.domain.interfaces.user_interface import UserInterface
from geocli.domain.models.geocoding import CallResult, GeocodeStatus

logger = logging.getLogger(__name__)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output.

    The JSON result goes to stdout so it can be piped; everything meant for a
    human (info, errors, the summary table) goes to stderr.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        """Initializes the rich Consoles."""
        self._console = console or Console()
        self._err_console = err_console or Console(stderr=True)

    @property
    def console(self) -> Console:
        """Console used for machine readable output."""
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    @property
    def err_console(self) -> Console:
        """Console used for messages and tables."""
        return self._err_console

    @err_console.setter
    def err_console(self, value: Console) -> None:
        self._err_console = value

    def display_results(self, results: Sequence[CallResult], **kwargs: Any) -> None:
        """Prints the results as a JSON array of address/status/location records."""
        indent = kwargs.get("indent", 2)
        payload = json.dumps([result.to_dict() for result in results], indent=indent, ensure_ascii=False)
        logger.debug(f"display_results called with {len(results)} result(s)")
        self.console.print_json(payload, indent=indent)

    def display_summary(self, results: Sequence[CallResult]) -> None:
        """Prints a table with one row per address, plus found/not-found totals."""
        table = Table(title="Geocoding results", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Address", style="white")
        table.add_column("Status")
        table.add_column("Lat", justify="right")
        table.add_column("Lng", justify="right")

        found = 0
        for position, result in enumerate(results, start=1):
            if result.status is GeocodeStatus.FOUND:
                found += 1
                status = "[green]FOUND[/green]"
                location = result.location or {}
                lat, lng = str(location.get("lat", "")), str(location.get("lng", ""))
            else:
                status = "[red]NOT_FOUND[/red]"
                lat, lng = "-", "-"
            table.add_row(str(position), escape(result.address), status, lat, lng)

        self.err_console.print(table)
        self.err_console.print(f"[bold]{found}[/bold] found, [bold]{len(results) - found}[/bold] not found")

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.err_console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.err_console.print(f"[blue]Info:[/blue] {info_message}")

    def get_prompt(self, prompt_message: str = "Input: ") -> str:
        return self.err_console.input(f"[bold green]{prompt_message}[/bold green]")

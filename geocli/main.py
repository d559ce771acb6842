"""Main entry point for the geoCLI application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx
import typer
from typing_extensions import Annotated

# --- Core Layer ---
from geocli.core.command_handler import CommandHandler
from geocli.core.services.geocode_service import GeocodeService

# --- Domain Layer ---
from geocli.domain.models.common import EndpointUrl
from geocli.domain.models.errors import ConfigurationError

# --- Infrastructure Layer ---
from geocli.infrastructure.cli.display import ConsoleDisplay
from geocli.infrastructure.config.settings import get_api_key, get_config, get_geocoding_url, get_log_level, load_configuration
from geocli.infrastructure.filesystem.local_fs import LocalFileSystem
from geocli.infrastructure.geocoding.http_client import GeocodingHttpClient
from geocli.infrastructure.geocoding.remote_geocoder import RemoteGeocoder
from geocli.infrastructure.monitoring.logger_setup import parse_log_level, setup_logging
from geocli.infrastructure.resilience.api_retry import ApiRetryService

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    url: str,
    api_key: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one geocoding run.

    This acts as the Composition Root.

    Raises:
        ConfigurationError: If the endpoint URL is malformed.
    """
    logger.debug("Initializing application dependencies...")
    dependencies: Dict[str, Any] = {}

    # 1. Infrastructure Adapters & Services
    dependencies['ui'] = ConsoleDisplay()
    dependencies['address_source'] = LocalFileSystem()
    params = {'key': api_key} if api_key else {}
    dependencies['http_client'] = GeocodingHttpClient(EndpointUrl(url), params=params, transport=transport)
    dependencies['api_retry_service'] = ApiRetryService(sleep=sleep)
    dependencies['geocoder'] = RemoteGeocoder(
        http_client=dependencies['http_client'],
        retry_service=dependencies['api_retry_service'],
    )

    # 2. Core Services
    dependencies['geocode_service'] = GeocodeService(geocoder=dependencies['geocoder'])

    # 3. Command Handler
    dependencies['command_handler'] = CommandHandler(
        geocode_service=dependencies['geocode_service'],
        address_source=dependencies['address_source'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies

# --- Typer App Definition ---
app = typer.Typer(
    name="geocli",
    help="geoCLI: resolve a file of addresses to coordinates with concurrent, retried geocoding requests.",
    add_completion=False,
)

@app.callback()
def main_callback() -> None:
    """Batch geocoding from the command line."""

@app.command()
def geocode(
    file: Annotated[Optional[Path], typer.Argument(
        dir_okay=False, resolve_path=True,
        help="File with one address per line. Prompted for when omitted.")] = None,
    url: Annotated[Optional[str], typer.Option("--url", "-u", help="Geocoding endpoint base URL.")] = None,
    api_key: Annotated[Optional[str], typer.Option("--api-key", "-k", help="API key sent as the 'key' parameter.")] = None,
    summary: Annotated[bool, typer.Option("--summary/--no-summary", help="Also print a results table to stderr.")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="Logging level (DEBUG, INFO, WARNING, ERROR).")] = None,
):
    """Geocode every address in FILE and print the results as JSON, in input order."""
    load_configuration()
    setup_logging(
        log_level=parse_log_level(log_level or get_log_level()),
        log_file=get_config('logging.file'),
    )

    try:
        dependencies = create_dependencies(url=url or get_geocoding_url(), api_key=api_key or get_api_key())
    except ConfigurationError as e:
        logger.error(f"Fatal Error during application initialization: {e}")
        ConsoleDisplay().display_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)

    handler: CommandHandler = dependencies['command_handler']
    try:
        results = handler.handle_geocode(str(file) if file else None, show_summary=summary)
    finally:
        dependencies['http_client'].close()

    if results is None:
        raise typer.Exit(code=1)

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()

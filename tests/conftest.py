import json
import logging
import random
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

from geocli.infrastructure.config.settings import clear_test_config, reset_configuration
from geocli.infrastructure.geocoding.http_client import GeocodingHttpClient
from geocli.infrastructure.resilience.api_retry import ApiRetryService

TEST_URL = "https://geocoder.test/maps/api/geocode/json"


def ok_payload(lat: float, lng: float) -> Dict[str, Any]:
    """Builds a Google-style OK response for one location."""
    return {
        "status": "OK",
        "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}],
    }


def fake_location(address: str) -> Dict[str, float]:
    """Deterministic pseudo location derived from the address text."""
    return {"lat": float(len(address)), "lng": float(sum(map(ord, address)) % 180)}


class RecordingSleep:
    """Stands in for time.sleep; remembers the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry_service(no_sleep: RecordingSleep) -> ApiRetryService:
    """Retry service with the default policy, a seeded RNG and no real sleeping."""
    return ApiRetryService(rng=random.Random(1234), sleep=no_sleep)


@pytest.fixture
def make_http_client():
    """Factory building a GeocodingHttpClient on top of an httpx.MockTransport handler."""
    clients: List[GeocodingHttpClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> GeocodingHttpClient:
        client = GeocodingHttpClient(TEST_URL, transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def address_file(tmp_path: Path) -> Path:
    """Address file with blank lines sprinkled in."""
    path = tmp_path / "addresses.txt"
    path.write_text(
        "1600 Amphitheatre Parkway, Mountain View, CA\n"
        "\n"
        "Nowhere Street 0, Atlantis\n"
        "   \n"
        "10 Downing Street, London\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path):
    """Keeps tests independent from the developer's env vars, .env and YAML config."""
    for name in ("GEOCLI_GEOCODING_URL", "GEOCLI_GEOCODING_API_KEY", "GEOCODING_URL",
                 "GEOCODING_API_KEY", "GOOGLE_MAPS_API_KEY", "GEOCLI_LOGGING_LEVEL",
                 "LOGGING_LEVEL", "GEOCLI_LOGGING_FILE", "LOGGING_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("geocli.infrastructure.config.settings.DEFAULT_CONFIG_FILE", tmp_path / "missing.yaml")
    monkeypatch.chdir(tmp_path)
    reset_configuration()
    clear_test_config()
    yield
    reset_configuration()
    clear_test_config()


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"),
                          headers={"Content-Type": "application/json"})


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undoes setup_logging calls made by a test (CLI runs configure the root logger)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

"""Thin HTTP GET client for the geocoding endpoint.

Hides the specifics of httpx: validates the endpoint when constructed,
merges static and per-call query parameters (URL-encoded by httpx) and
decodes the JSON body. Each call is a single attempt; retries live in
ApiRetryService.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from geocli.domain.models.common import EndpointUrl, QueryParams, RawResponse
from geocli.domain.models.errors import ConfigurationError, InvalidResponseError

logger = logging.getLogger(__name__)

CHARSET = "utf-8"
REQUEST_TIMEOUT_SECONDS = 30.0


class GeocodingHttpClient:
    """Issues GET requests against one endpoint with a fixed parameter map."""

    def __init__(
        self,
        base_url: EndpointUrl,
        params: Optional[Mapping[str, str]] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initializes the client.

        Args:
            base_url: Absolute http(s) URL of the endpoint.
            params: Query parameters sent with every request (e.g. API key).
            timeout: Per-attempt timeout in seconds, connect included.
            transport: Optional httpx transport (tests use httpx.MockTransport).

        Raises:
            ConfigurationError: If base_url is not a usable http(s) URL.
        """
        self.base_url = self._validate_url(base_url)
        self.params: Dict[str, str] = dict(params or {})
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"Accept-Charset": CHARSET},
            transport=transport,
        )
        logger.debug(f"GeocodingHttpClient initialized for {self.base_url.copy_with(query=None)} (timeout={timeout}s)")

    @staticmethod
    def _validate_url(base_url: str) -> httpx.URL:
        try:
            url = httpx.URL(base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise ConfigurationError(f"Malformed endpoint URL '{base_url}': {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"Endpoint URL must be an absolute http(s) URL, got '{base_url}'")
        return url

    def build_url(self, params: Optional[Mapping[str, str]] = None) -> httpx.URL:
        """Returns the full request URL with encoded query parameters."""
        merged: Dict[str, Any] = {**self.params, **(params or {})}
        return self.base_url.copy_merge_params(merged)

    def get_json(self, params: Optional[QueryParams] = None) -> RawResponse:
        """Performs one GET request and returns the decoded JSON object.

        Raises:
            httpx.HTTPError: On transport failures, timeouts and non-2xx statuses.
            InvalidResponseError: If the body is not a JSON object.
        """
        url = self.build_url(params)
        response = self._client.get(url)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Response from {url.host} is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidResponseError(f"Expected a JSON object from {url.host}, got {type(payload).__name__}")
        return RawResponse(payload)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GeocodingHttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

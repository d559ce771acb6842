"""Concrete implementation of the Geocoder interface backed by an HTTP endpoint.

Translates between the domain model (Address -> CallResult) and the Google
Maps Geocoding API response format::

    {"status": "OK", "results": [{"geometry": {"location": {"lat": .., "lng": ..}}}]}

The location mapping is passed through untouched.
"""

import logging
from typing import Any, Optional

from geocli.domain.interfaces.geocoder import Geocoder
from geocli.domain.models.common import Address, LocationPayload, QueryParams, RawResponse
from geocli.domain.models.geocoding import CallResult
from geocli.infrastructure.geocoding.http_client import GeocodingHttpClient
from geocli.infrastructure.resilience.api_retry import ApiRetryService, MaxRetryError

logger = logging.getLogger(__name__)

OK_STATUS = "OK"
STATUS_KEY = "status"
ADDRESS_PARAM = "address"


def is_ok_response(response: Any) -> bool:
    """True when the endpoint reported status OK."""
    return isinstance(response, dict) and response.get(STATUS_KEY) == OK_STATUS


def extract_location(response: RawResponse) -> Optional[LocationPayload]:
    """Pulls results[0].geometry.location out of an OK response, if present."""
    try:
        location = response["results"][0]["geometry"]["location"]
    except (KeyError, IndexError, TypeError):
        return None
    return LocationPayload(location) if location is not None else None


class RemoteGeocoder(Geocoder):
    """Geocoder issuing one retried request per address."""

    def __init__(self, http_client: GeocodingHttpClient, retry_service: ApiRetryService):
        self.http_client = http_client
        self.retry_service = retry_service

    def geocode(self, address: Address) -> CallResult:
        params = QueryParams({ADDRESS_PARAM: address})
        try:
            response = self.retry_service.execute_with_retry(
                self.http_client.get_json,
                params,
                is_success=is_ok_response,
                endpoint_name="geocode",
            )
        except MaxRetryError as e:
            logger.error(f"Transport failure while geocoding '{address}': {e.original_exception}", exc_info=e.original_exception)
            return CallResult.not_found(address)

        if not is_ok_response(response):
            status = response.get(STATUS_KEY) if isinstance(response, dict) else None
            logger.info(f"No result for '{address}' (last status: {status})")
            return CallResult.not_found(address)

        location = extract_location(response)
        if location is None:
            logger.warning(f"Status OK for '{address}' but the response carries no location")
            return CallResult.not_found(address)

        logger.debug(f"Resolved '{address}' to {location}")
        return CallResult.found(address, location)

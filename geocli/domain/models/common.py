"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like addresses, endpoint
URLs, query parameters and location payloads, ensuring consistency and
type safety.
"""

from typing import Any, Dict, NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
Address = NewType("Address", str)              # One free-text address (a work item)
FilePath = NewType("FilePath", str)            # Path to the address file
EndpointUrl = NewType("EndpointUrl", str)      # Base URL of the geocoding endpoint

# === Remote Endpoint Context ===
QueryParams = NewType("QueryParams", Dict[str, str])       # Query string parameters before encoding
LocationPayload = NewType("LocationPayload", Dict[str, Any])  # Opaque location, e.g. {'lat': 1.0, 'lng': 2.0}
RawResponse = NewType("RawResponse", Dict[str, Any])       # Decoded JSON body of one attempt

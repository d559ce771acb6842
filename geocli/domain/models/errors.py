"""Exceptions shared across layers.

Per-address network problems never surface as exceptions past the remote
geocoder; the types below describe configuration and structural faults.
"""


class ConfigurationError(ValueError):
    """Raised when the endpoint configuration is unusable (e.g. malformed URL)."""


class InvalidResponseError(Exception):
    """Raised when the endpoint answers with something other than a JSON object."""


class BatchExecutionError(RuntimeError):
    """Raised when the executor cannot retrieve the outcome of a work item.

    This signals a broken invariant (every address yields exactly one result),
    not a network condition.
    """

import abc

from geocli.domain.models.common import Address
from geocli.domain.models.geocoding import CallResult


class Geocoder(abc.ABC):
    """Interface for resolving a single address into a location."""

    @abc.abstractmethod
    def geocode(self, address: Address) -> CallResult:
        """Resolves one address.

        Implementations absorb per-address failures (bad status, timeouts,
        transport errors) into a NOT_FOUND result instead of raising.

        Args:
            address: The free-text address to resolve.

        Returns:
            Exactly one CallResult for the address.
        """
        pass

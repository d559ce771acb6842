"""Domain models for the outcome of geocoding a single address."""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from geocli.domain.models.common import Address, LocationPayload


class GeocodeStatus(str, enum.Enum):
    """Status tag attached to every per-address record."""
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class CallResult:
    """Tagged outcome of resolving one address.

    A FOUND result always carries a location payload, a NOT_FOUND result never
    does. Use the ``found`` and ``not_found`` constructors rather than building
    instances by hand.
    """
    address: Address
    status: GeocodeStatus
    location: Optional[LocationPayload] = None

    def __post_init__(self) -> None:
        if (self.status is GeocodeStatus.FOUND) != (self.location is not None):
            raise ValueError(
                f"Inconsistent result for '{self.address}': status={self.status.value}, "
                f"location={'present' if self.location is not None else 'absent'}"
            )

    @classmethod
    def found(cls, address: Address, location: LocationPayload) -> "CallResult":
        return cls(address=address, status=GeocodeStatus.FOUND, location=location)

    @classmethod
    def not_found(cls, address: Address) -> "CallResult":
        return cls(address=address, status=GeocodeStatus.NOT_FOUND)

    @property
    def is_found(self) -> bool:
        return self.status is GeocodeStatus.FOUND

    def to_dict(self) -> Dict[str, Any]:
        """Renders the record in the output shape (address, status, location)."""
        entry: Dict[str, Any] = {"address": self.address, "status": self.status.value}
        if self.location is not None:
            entry["location"] = self.location
        return entry

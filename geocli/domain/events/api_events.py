"""Domain Events related to geocoding API calls and resilience.

Examples include events for when calls are retried, fail, or succeed, and
when a batch finishes.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


# --- Specific API Events ---

@dataclass
class ApiCallSucceeded(DomainEvent):
    """Event triggered when an attempt returns a successful response."""
    endpoint: str
    attempt_number: int
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class ApiCallFailed(DomainEvent):
    """Event triggered when an API call fails definitively (after retries)."""
    endpoint: str
    attempts: int
    error_type: str
    error_message: str
    timestamp: float = field(default_factory=time.time)

@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled for a failed attempt."""
    endpoint: str
    attempt_number: int
    delay_seconds: float
    reason: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class BatchCompleted(DomainEvent):
    """Event triggered when every address of a batch has a result."""
    total: int
    found: int
    not_found: int
    elapsed_ms: float
    timestamp: float = field(default_factory=time.time)

"""Core service resolving a batch of addresses concurrently.

Each address is handed to the Geocoder on a fixed-size thread pool. Queued
addresses wait in the executor queue until a worker is free; a worker runs
one address to completion (retries and backoff sleeps included) before it
picks up the next one. Results are written into slots keyed by input
position, so completion order never affects output order.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from geocli.domain.events.api_events import BatchCompleted
from geocli.domain.interfaces.geocoder import Geocoder
from geocli.domain.models.common import Address
from geocli.domain.models.errors import BatchExecutionError
from geocli.domain.models.geocoding import CallResult

logger = logging.getLogger(__name__)

MAX_WORKERS = 10
THREAD_NAME_PREFIX = "geocode"


class GeocodeService:
    """Fans a batch of addresses out to a Geocoder under a concurrency cap."""

    def __init__(self, geocoder: Geocoder, max_workers: int = MAX_WORKERS):
        """Initializes the GeocodeService.

        Args:
            geocoder: Resolves a single address; expected not to raise.
            max_workers: Number of addresses processed at the same time.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.geocoder = geocoder
        self.max_workers = max_workers

    def _resolve_one(self, address: Address) -> CallResult:
        """Runs the geocoder for one address, isolating its failures."""
        try:
            return self.geocoder.geocode(address)
        except Exception as e:
            logger.error(f"Geocoding '{address}' failed unexpectedly: {e}", exc_info=True)
            return CallResult.not_found(address)

    def geocode_all(self, addresses: Sequence[Address]) -> List[CallResult]:
        """Resolves every address and returns the results in input order.

        Args:
            addresses: The batch; may be empty.

        Returns:
            One CallResult per address, position i matching addresses[i].

        Raises:
            BatchExecutionError: If the outcome of an address cannot be retrieved.
        """
        total = len(addresses)
        if total == 0:
            logger.info("Empty batch, nothing to geocode.")
            return []

        start_time = time.perf_counter()
        slots: List[Optional[CallResult]] = [None] * total
        pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix=THREAD_NAME_PREFIX)
        failed = True
        logger.info(f"Geocoding {total} address(es) with {self.max_workers} worker(s)")
        try:
            futures: Dict[Future, int] = {
                pool.submit(self._resolve_one, address): index
                for index, address in enumerate(addresses)
            }
            for done, future in enumerate(as_completed(futures), start=1):
                index = futures[future]
                try:
                    slots[index] = future.result()
                except Exception as e:
                    raise BatchExecutionError(
                        f"Could not retrieve the result for address #{index} ('{addresses[index]}')"
                    ) from e
                logger.debug(f"Progress {done}/{total}: #{index} -> {slots[index].status.value}")

            missing = [index for index, slot in enumerate(slots) if slot is None]
            if missing:
                raise BatchExecutionError(f"No result produced for address position(s) {missing}")
            failed = False
        finally:
            # Queued work is dropped on the fatal path; running workers finish their item.
            pool.shutdown(wait=True, cancel_futures=failed)

        results: List[CallResult] = [slot for slot in slots if slot is not None]
        found = sum(1 for result in results if result.is_found)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"EVENT: {BatchCompleted(total=total, found=found, not_found=total - found, elapsed_ms=elapsed_ms)}")
        logger.info(f"Batch finished in {elapsed_ms:.0f}ms: {found} found, {total - found} not found")
        return results

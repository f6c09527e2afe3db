"""Bounded-parallelism runner for independent units of work."""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConcurrencyLimiter:
    """Runs callables on a fixed-size worker pool, at most ``limit`` at a time.

    Error policy is abort-all-on-first-error: once any unit raises, units
    that have not started are cancelled, units already running are allowed
    to finish, and the failing unit's exception is re-raised to the caller.
    When several units fail before the pool notices, the one earliest in
    input order is raised.
    """

    def __init__(self, limit: int):
        """Initialize the limiter.

        Args:
            limit: Maximum number of units running at once (K)

        Raises:
            ValueError: If limit is less than 1
        """
        if limit < 1:
            raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
        self.limit = limit

    def run(self, units: Iterable[Callable[[], T]]) -> list[T]:
        """Run every unit and wait for all of them to settle.

        Args:
            units: Zero-argument callables

        Returns:
            Results in the same order as the input units
        """
        units = list(units)
        if not units:
            return []

        workers = min(self.limit, len(units))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="spendflix-worker") as executor:
            futures = [executor.submit(unit) for unit in units]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            if pending:
                cancelled = sum(1 for future in pending if future.cancel())
                if cancelled:
                    logger.warning("Cancelled %d pending units after a failure", cancelled)
                # Running units cannot be interrupted; let them settle
                wait(pending)

            for future in futures:
                if future.cancelled():
                    continue
                error = future.exception()
                if error is not None:
                    raise error

            return [future.result() for future in futures]

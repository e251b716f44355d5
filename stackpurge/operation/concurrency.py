"""Bounded concurrency executor shared by every operator."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


def run_with_concurrency(tasks: Iterable[Callable[[], None]], concurrency: int = DEFAULT_CONCURRENCY) -> None:
    """Run zero-argument tasks with at most ``concurrency`` in flight.

    The first failure cancels every task that has not started yet; tasks already
    running are allowed to finish. The first exception is then re-raised.

    Args:
        tasks: Zero-argument callables to run
        concurrency: Maximum number of tasks running at the same time (>= 1)

    Raises:
        ValueError: If concurrency is lower than 1
        Exception: The first exception raised by a task
    """
    if concurrency < 1:
        raise ValueError(f"Concurrency must be at least 1, got {concurrency}")

    task_list = list(tasks)
    if not task_list:
        return

    first_error: Optional[BaseException] = None

    with ThreadPoolExecutor(max_workers=min(concurrency, len(task_list))) as executor:
        futures = [executor.submit(task) for task in task_list]

        for future in as_completed(futures):
            if future.cancelled():
                continue
            error = future.exception()
            if error is None or first_error is not None:
                continue

            first_error = error
            cancelled = sum(1 for pending in futures if pending.cancel())
            if cancelled:
                logger.debug(f"Cancelled {cancelled} pending tasks after failure: {error}")

    if first_error is not None:
        raise first_error

"""
polling.py

Bounded fixed-interval polling shared by every "wait until the page is ready"
step of the workflow.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Union

logger = logging.getLogger(__name__)

Predicate = Callable[[], Union[bool, Awaitable[bool]]]


async def poll(predicate: Predicate, max_attempts: int, interval_ms: int = 500,
               description: str = "condition") -> bool:
    """
    Evaluate ``predicate`` until it returns a truthy value or the attempts run out.

    Args:
        predicate: zero-argument callable, sync or async.
        max_attempts: upper bound on predicate evaluations.
        interval_ms: pause between two evaluations; no pause follows the last one.
        description: used in log lines.

    Returns:
        bool: True if the predicate was satisfied, False on timeout.
    """
    for attempt in range(1, max_attempts + 1):
        result: Any = predicate()
        if inspect.isawaitable(result):
            result = await result

        if result:
            logger.info(f"{description} satisfied after {attempt} attempt(s) (~{attempt * interval_ms} ms)")
            return True

        if attempt < max_attempts:
            await asyncio.sleep(interval_ms / 1000)

    logger.warning(f"{description} not satisfied within {max_attempts * interval_ms} ms; proceeding anyway.")
    return False

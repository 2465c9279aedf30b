"""Optimistic command: apply locally, confirm remotely, undo on failure."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from taskboard.core.errors import TaskStoreError


logger = logging.getLogger(__name__)

T = TypeVar("T")

Rollback = Callable[[], None]


@dataclass
class OptimisticOutcome(Generic[T]):
    """Result of an optimistic command once the remote call settled."""

    succeeded: bool
    result: T | None = None
    error: TaskStoreError | None = None


async def run_optimistic(
    *,
    name: str,
    apply: Callable[[], Rollback],
    attempt: Callable[[], Awaitable[T]],
) -> OptimisticOutcome[T]:
    """Run one optimistic mutation.

    Args:
        name: Operation name used in logs
        apply: Mutates local state immediately and returns its inverse,
            recorded at apply time
        attempt: Performs the remote call

    Returns:
        OptimisticOutcome holding the remote result, or the error after the
        inverse was applied
    """
    rollback = apply()
    try:
        result = await attempt()
    except TaskStoreError as e:
        rollback()
        logger.warning("%s failed, local change rolled back: %s", name, e)
        return OptimisticOutcome(succeeded=False, error=e)
    except Exception:
        rollback()
        raise

    return OptimisticOutcome(succeeded=True, result=result)

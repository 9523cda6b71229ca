"""Bounded, failure-isolated processing of work items in small groups."""

from dataclasses import dataclass
import logging
import time
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_GROUP_SIZE = 5
DEFAULT_PAUSE_SECONDS = 0.1


@dataclass(frozen=True)
class ItemOutcome(Generic[T]):
    """Result of running the worker on one item."""

    item: T
    ok: bool
    value: Any = None
    error: Optional[str] = None


def run_in_groups(
    items: Iterable[T],
    worker: Callable[[T], Any],
    group_size: int = DEFAULT_GROUP_SIZE,
    pause: float = DEFAULT_PAUSE_SECONDS,
    on_progress: Optional[Callable[[int], None]] = None,
) -> list[ItemOutcome[T]]:
    """Run ``worker`` over ``items`` a group at a time.

    An exception raised for one item is recorded on its outcome and never
    stops the other items of the group or later groups. A worker returning
    ``False`` counts as a failed item without an error message.

    Args:
        items: Work items, processed in order
        worker: Callable applied to each item
        group_size: Number of items per group
        pause: Seconds to wait between groups (not after the last one)
        on_progress: Called with the percentage of items processed after
            each group

    Returns:
        One outcome per item, in input order
    """
    if group_size < 1:
        raise ValueError("group_size must be at least 1")

    pending = list(items)
    outcomes: list[ItemOutcome[T]] = []
    for start in range(0, len(pending), group_size):
        group = pending[start : start + group_size]
        for item in group:
            try:
                value = worker(item)
            except Exception as e:
                logger.warning("Item %r failed: %s", item, e)
                outcomes.append(ItemOutcome(item=item, ok=False, error=str(e)))
                continue
            outcomes.append(ItemOutcome(item=item, ok=value is not False, value=value))

        done = start + len(group)
        if on_progress is not None:
            on_progress(round(done / len(pending) * 100))
        if pause > 0 and done < len(pending):
            time.sleep(pause)
    return outcomes

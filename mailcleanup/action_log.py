"""
Manual-action log.

Replays an analysis snapshot as a paced sequence of per-category records,
each telling the user which query to run in Gmail and how many messages it
found. Nothing here talks to Gmail.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, Tuple

from .snapshot import AnalysisSnapshot

DEFAULT_DELAY_SECONDS = 1.0


def instructions_for(query: str) -> Tuple[str, ...]:
    """The five manual steps for deleting what query matches"""
    return (
        f"Copy this query: {query}",
        "Paste into Gmail search box",
        "Select all emails (checkbox at top)",
        'Click "Select all conversations that match this search"',
        "Click Delete button",
    )


@dataclass(frozen=True)
class ManualActionRecord:
    category_name: str
    full_query: str
    count_found: int
    recorded_at: datetime

    @property
    def instructions(self) -> Tuple[str, ...]:
        return instructions_for(self.full_query)


def build_log(snapshot: AnalysisSnapshot, delay: float = DEFAULT_DELAY_SECONDS,
              sleep: Callable[[float], None] = time.sleep,
              clock: Callable[[], datetime] = datetime.now) -> Iterator[ManualActionRecord]:
    """
    Return a generator of ManualActionRecord, one per snapshot query.

    Each record is emitted after waiting `delay` seconds so a person can follow
    along. The generator is single-use; call close() on it to cancel.

    Raises:
        ValueError: immediately, if the snapshot is an error snapshot or
                    found nothing to clean up
    """
    if snapshot.is_error:
        raise ValueError(f"Cannot build instructions from a failed analysis: {snapshot.error}")
    if snapshot.total_estimated_count <= 0:
        raise ValueError("Cannot build instructions: the analysis found no emails to clean up")

    def replay():
        for result in snapshot.queries:
            sleep(delay)
            yield ManualActionRecord(
                category_name=result.category_name,
                full_query=result.full_query,
                count_found=result.estimated_count,
                recorded_at=clock(),
            )

    return replay()

"""Spaced repetition scheduler.

Maps a word's current stage and a review outcome to its next stage, next
review date, counter increments and collection membership. The scheduler
does no I/O; callers persist the returned ``ReviewResult``.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional, Sequence

from wordbook.config import settings
from wordbook.exceptions import InvalidConfiguration
from wordbook.models.base import as_utc

logger = logging.getLogger(__name__)


class ReviewOutcome(Enum):
    """Result of a single review attempt."""
    REMEMBERED = "remembered"
    FORGOTTEN = "forgotten"


@dataclass(frozen=True)
class ReviewResult:
    """New review state for a word after one outcome."""
    stage: int
    next_review: datetime
    correct_delta: int
    wrong_delta: int
    added_collection_ids: frozenset[int]
    collection_ids: frozenset[int]


class Scheduler:
    """Ebbinghaus-style stage scheduler over a fixed interval table."""

    def __init__(self, intervals: Optional[Sequence[int]] = None):
        """Initialize the scheduler and validate the interval table."""
        if intervals is None:
            intervals = settings.learning.review_intervals
        intervals = tuple(intervals)
        if not intervals:
            raise InvalidConfiguration("Interval table must contain at least one entry")
        if any(days < 0 for days in intervals):
            raise InvalidConfiguration(
                "Interval table must not contain negative day offsets",
                details={"intervals": list(intervals)},
            )
        self.intervals = intervals

    @property
    def last_stage(self) -> int:
        return len(self.intervals) - 1

    def clamp_stage(self, stage: Optional[int]) -> int:
        """Clamp a stored stage into the valid index range."""
        if stage is None:
            return 0
        if stage < 0 or stage > self.last_stage:
            clamped = min(max(stage, 0), self.last_stage)
            logger.warning(f"Stage {stage} out of range [0, {self.last_stage}], using {clamped}")
            return clamped
        return stage

    def next_stage(self, stage: Optional[int], outcome: ReviewOutcome) -> int:
        """Get the stage a word moves to after the outcome."""
        if outcome is ReviewOutcome.FORGOTTEN:
            return 0
        return min(self.clamp_stage(stage) + 1, self.last_stage)

    def due_after(self, stage: int, now: datetime) -> datetime:
        """Calculate the next review date for a word entering ``stage`` at ``now``."""
        days = self.intervals[self.clamp_stage(stage)]
        if now.tzinfo is None:
            now = as_utc(now)
        # Aware datetime arithmetic adds calendar days on the wall clock of now's zone
        return as_utc(now + timedelta(days=days))

    def apply(
        self,
        stage: Optional[int],
        outcome: ReviewOutcome,
        now: datetime,
        collection_ids: Iterable[int] = (),
        mistakes_collection_id: Optional[int] = None,
    ) -> ReviewResult:
        """Apply one review outcome to a word's confirmed state."""
        current = frozenset(collection_ids)
        new_stage = self.next_stage(stage, outcome)
        next_review = self.due_after(new_stage, now)

        if outcome is ReviewOutcome.REMEMBERED:
            return ReviewResult(
                stage=new_stage,
                next_review=next_review,
                correct_delta=1,
                wrong_delta=0,
                added_collection_ids=frozenset(),
                collection_ids=current,
            )

        added = frozenset()
        if mistakes_collection_id is not None and mistakes_collection_id not in current:
            added = frozenset({mistakes_collection_id})
        return ReviewResult(
            stage=new_stage,
            next_review=next_review,
            correct_delta=0,
            wrong_delta=1,
            added_collection_ids=added,
            collection_ids=current | added,
        )

"""Due-word selection and ordering."""
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from wordbook.models.base import as_utc
from wordbook.models.models import Word

WordPredicate = Callable[[Word], bool]


def is_due(word: Word, now: datetime) -> bool:
    """Check whether a word is due at ``now`` (inclusive)."""
    return as_utc(word.next_review) <= as_utc(now)


def in_collection(collection_id: Optional[int]) -> Optional[WordPredicate]:
    """Build a predicate confining words to one collection; None shows all."""
    if collection_id is None:
        return None
    return lambda word: collection_id in word.collection_ids


def due_set(
    words: Iterable[Word],
    now: datetime,
    predicate: Optional[WordPredicate] = None,
) -> List[Word]:
    """Get the due words ordered by next review date, then id."""
    due = [
        word for word in words
        if is_due(word, now) and (predicate is None or predicate(word))
    ]
    return sorted(due, key=lambda word: (as_utc(word.next_review), word.id))


def due_count(
    words: Iterable[Word],
    now: datetime,
    predicate: Optional[WordPredicate] = None,
) -> int:
    """Get the number of due words."""
    return len(due_set(words, now, predicate))

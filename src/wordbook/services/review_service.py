"""Service for adding words and running review sessions."""
import logging
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy.orm import Session

from wordbook.config import settings
from wordbook.exceptions import PersistenceFailure, ReviewSessionError, WordValidationError
from wordbook.models.base import as_utc
from wordbook.models.models import Word
from wordbook.monitoring import reviews, words_added
from wordbook.services import queue_selector
from wordbook.services.scheduler import ReviewOutcome, ReviewResult, Scheduler
from wordbook.services.word_service import WordService

logger = logging.getLogger(__name__)


class ReviewService:
    """Service tying the scheduler and queue selection to the record store."""

    def __init__(self, db: Session, scheduler: Optional[Scheduler] = None):
        """Initialize the service with a database session."""
        self.db = db
        self.word_service = WordService(db)
        self.scheduler = scheduler or Scheduler()

    def add_word(
        self,
        owner_id: int,
        term: str,
        translation: str = "",
        now: Optional[datetime] = None,
    ) -> Word:
        """Add a new word, due immediately."""
        term = (term or "").strip()
        translation = (translation or "").strip()
        if not term:
            raise WordValidationError("Word text cannot be empty", field="term")
        if settings.learning.require_translation and not translation:
            raise WordValidationError("Translation cannot be empty", field="translation")

        word = Word(
            owner_id=owner_id,
            term=term,
            translation=translation,
            stage=0,
            next_review=as_utc(now or datetime.now(UTC)),
            correct_count=0,
            wrong_count=0,
        )
        word = self.word_service.insert_word(word)
        words_added.inc()
        return word

    def due_words(
        self,
        owner_id: int,
        now: Optional[datetime] = None,
        collection_id: Optional[int] = None,
    ) -> List[Word]:
        """Get the owner's due words from a fresh snapshot."""
        return queue_selector.due_set(
            self.word_service.list_words(owner_id),
            now or datetime.now(UTC),
            queue_selector.in_collection(collection_id),
        )

    def due_count(
        self,
        owner_id: int,
        now: Optional[datetime] = None,
        collection_id: Optional[int] = None,
    ) -> int:
        """Get the number of the owner's due words."""
        return len(self.due_words(owner_id, now, collection_id))

    def total_count(self, owner_id: int) -> int:
        """Get the total number of the owner's words."""
        return self.word_service.count_words(owner_id)

    def apply_outcome(
        self,
        word: Word,
        outcome: ReviewOutcome,
        now: Optional[datetime] = None,
    ) -> ReviewResult:
        """Schedule a word after a review and persist the result.

        Raises:
            PersistenceFailure: If the store rejects the write. The stored
                word keeps its previous state.
        """
        now = now or datetime.now(UTC)
        mistakes_id = None
        if outcome is ReviewOutcome.FORGOTTEN:
            mistakes_id = self.word_service.get_or_create_mistakes_collection(word.owner_id).id

        result = self.scheduler.apply(
            word.stage,
            outcome,
            now,
            collection_ids=word.collection_ids,
            mistakes_collection_id=mistakes_id,
        )
        self.word_service.update_word(
            word.id,
            stage=result.stage,
            next_review=result.next_review,
            correct_delta=result.correct_delta,
            wrong_delta=result.wrong_delta,
            collection_ids=result.added_collection_ids,
        )
        reviews.labels(outcome=outcome.value).inc()
        logger.info(
            f"Word {word.id} {outcome.value}: stage {result.stage}, "
            f"next review {result.next_review.isoformat()}"
        )
        return result

    def start_session(
        self,
        owner_id: int,
        now: Optional[datetime] = None,
        collection_id: Optional[int] = None,
    ) -> "ReviewSession":
        """Start a review session over the words due right now."""
        words = self.due_words(owner_id, now, collection_id)
        logger.info(f"Starting review session for owner {owner_id} with {len(words)} words")
        return ReviewSession(self, words)


class ReviewSession:
    """Cursor over a snapshot of due words.

    The snapshot is fixed at creation. The cursor only moves past a word once
    its outcome has been written to the store.
    """

    def __init__(self, service: ReviewService, words: List[Word]):
        self.service = service
        self.words = list(words)
        self.position = 0
        self.answer_revealed = False

    @property
    def current_word(self) -> Optional[Word]:
        if self.is_complete:
            return None
        return self.words[self.position]

    @property
    def is_complete(self) -> bool:
        return self.position >= len(self.words)

    @property
    def remaining(self) -> int:
        return len(self.words) - self.position

    @property
    def reviewed(self) -> int:
        return self.position

    def reveal_answer(self) -> None:
        """Toggle whether the current word's translation is shown."""
        self.answer_revealed = not self.answer_revealed

    def submit(self, outcome: ReviewOutcome, now: Optional[datetime] = None) -> ReviewResult:
        """Apply an outcome to the current word and move to the next one."""
        word = self.current_word
        if word is None:
            raise ReviewSessionError("Review session is already complete")

        try:
            result = self.service.apply_outcome(word, outcome, now)
        except PersistenceFailure:
            logger.warning(f"Outcome for word {word.id} was not saved, staying on it")
            raise

        self.position += 1
        self.answer_revealed = False
        return result

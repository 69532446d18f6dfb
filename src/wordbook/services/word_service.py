"""Record store for words and collections."""
import logging
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordbook.config import settings
from wordbook.exceptions import PersistenceFailure, WordValidationError
from wordbook.models.models import Collection, Word, word_collections
from wordbook.monitoring import persistence_failures

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("term", "translation", "stage", "next_review")
UPDATABLE_FIELDS = frozenset(SCALAR_FIELDS + ("correct_delta", "wrong_delta", "collection_ids"))


class WordService:
    """SQLAlchemy-backed store for words and their collections."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def _fail(self, operation: str, message: str, error: Optional[Exception] = None) -> PersistenceFailure:
        """Roll back the session and build the failure to raise."""
        self.db.rollback()
        persistence_failures.labels(operation=operation).inc()
        if error is not None:
            logger.error(f"{message}: {error}")
        else:
            logger.error(message)
        return PersistenceFailure(message, details={"operation": operation})

    def get_word(self, word_id: int) -> Optional[Word]:
        """Get a word by its ID."""
        return self.db.query(Word).filter(Word.id == word_id).first()

    def list_words(self, owner_id: int) -> List[Word]:
        """Get every word owned by ``owner_id``."""
        return (
            self.db.query(Word)
            .filter(Word.owner_id == owner_id)
            .order_by(Word.id)
            .all()
        )

    def count_words(self, owner_id: int) -> int:
        """Get the count of words owned by ``owner_id``."""
        return self.db.query(Word).filter(Word.owner_id == owner_id).count()

    def insert_word(self, word: Word) -> Word:
        """Store a new word and return it with its assigned id."""
        try:
            self.db.add(word)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("insert", f"Could not insert word {word.term!r}", e) from e
        self.db.refresh(word)
        logger.info(f"Inserted word {word.id} for owner {word.owner_id}")
        return word

    def update_word(self, word_id: int, **fields: Any) -> Word:
        """Apply a partial update to a stored word.

        ``correct_delta`` and ``wrong_delta`` are applied as SQL increments on
        the stored counters. ``collection_ids`` only ever adds memberships.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown word fields: {sorted(unknown)}")

        values = {getattr(Word, key): fields[key] for key in SCALAR_FIELDS if key in fields}
        if fields.get("correct_delta"):
            values[Word.correct_count] = Word.correct_count + fields["correct_delta"]
        if fields.get("wrong_delta"):
            values[Word.wrong_count] = Word.wrong_count + fields["wrong_delta"]

        collection_ids = set(fields.get("collection_ids") or ())

        try:
            owner_id = self.db.query(Word.owner_id).filter(Word.id == word_id).scalar()
            if owner_id is None:
                raise self._fail("update", f"Word {word_id} not found")

            if collection_ids:
                owned = set(
                    self.db.execute(
                        select(Collection.id).where(
                            Collection.id.in_(collection_ids),
                            Collection.owner_id == owner_id,
                        )
                    ).scalars()
                )
                foreign = collection_ids - owned
                if foreign:
                    raise WordValidationError(
                        f"Collections {sorted(foreign)} do not belong to owner {owner_id}",
                        field="collection_ids",
                    )

            if values:
                self.db.query(Word).filter(Word.id == word_id).update(
                    values, synchronize_session=False
                )

            if collection_ids:
                existing = set(
                    self.db.execute(
                        select(word_collections.c.collection_id)
                        .where(word_collections.c.word_id == word_id)
                    ).scalars()
                )
                for collection_id in collection_ids - existing:
                    self.db.execute(
                        word_collections.insert().values(word_id=word_id, collection_id=collection_id)
                    )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("update", f"Could not update word {word_id}", e) from e

        return self.get_word(word_id)

    def create_collection(self, owner_id: int, name: str, is_system: bool = False) -> Collection:
        """Create a named collection for an owner.

        The mistakes collection name is reserved for the system collection.
        """
        name = (name or "").strip()
        if not name:
            raise WordValidationError("Collection name cannot be empty", field="name")
        if not is_system and name == settings.learning.mistakes_collection:
            raise WordValidationError(
                f"Collection name {name!r} is reserved", field="name"
            )

        collection = Collection(owner_id=owner_id, name=name, is_system=is_system)
        try:
            self.db.add(collection)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("create_collection", f"Could not create collection {name!r}", e) from e
        self.db.refresh(collection)
        return collection

    def list_collections(self, owner_id: int) -> List[Collection]:
        """Get every collection owned by ``owner_id``."""
        return (
            self.db.query(Collection)
            .filter(Collection.owner_id == owner_id)
            .order_by(Collection.id)
            .all()
        )

    def get_or_create_mistakes_collection(self, owner_id: int) -> Collection:
        """Get the owner's automatic mistakes collection, creating it if needed."""
        name = settings.learning.mistakes_collection
        collection = (
            self.db.query(Collection)
            .filter(
                Collection.owner_id == owner_id,
                Collection.name == name,
                Collection.is_system == True,
            )
            .first()
        )
        if collection:
            return collection
        logger.info(f"Creating mistakes collection for owner {owner_id}")
        return self.create_collection(owner_id, name, is_system=True)

    def add_word_to_collection(self, word_id: int, collection_id: int) -> Word:
        """Add a word to a collection; existing membership is kept as is."""
        return self.update_word(word_id, collection_ids={collection_id})

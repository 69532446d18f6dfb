"""Database models for wordbook."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from wordbook.models.base import Base, TimestampMixin


word_collections = Table(
    "word_collections",
    Base.metadata,
    Column("word_id", Integer, ForeignKey("words.id"), primary_key=True),
    Column("collection_id", Integer, ForeignKey("collections.id"), primary_key=True),
)


class Word(Base, TimestampMixin):
    """A single vocabulary entry and its review state."""

    __tablename__ = "words"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False, index=True)
    term = Column(String, nullable=False)
    translation = Column(String, nullable=False, default="")
    stage = Column(Integer, nullable=False, default=0)
    next_review = Column(DateTime(timezone=True), nullable=False)
    correct_count = Column(Integer, nullable=False, default=0)
    wrong_count = Column(Integer, nullable=False, default=0)

    # Relationships
    collections = relationship(
        "Collection", secondary=word_collections, back_populates="words"
    )

    @property
    def collection_ids(self) -> frozenset[int]:
        """Ids of the collections this word belongs to."""
        return frozenset(collection.id for collection in self.collections)

    def __repr__(self) -> str:
        return f"<Word id={self.id} term={self.term!r} stage={self.stage}>"


class Collection(Base, TimestampMixin):
    """A named grouping of words ("book"); system collections are managed automatically."""

    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("owner_id", "name"),)

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    is_system = Column(Boolean, default=False)

    # Relationships
    words = relationship("Word", secondary=word_collections, back_populates="collections")

"""Database models"""
from sqlalchemy import Column, String, Integer, ForeignKey, Index

from ..database import Base


class Word(Base):
    """Vocabulary entry; its id is the 1-based dimension in every document vector"""
    __tablename__ = "words"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)


class Document(Base):
    """Indexed document, identified by its title"""
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(500), nullable=False, unique=True)


class Counter(Base):
    """Occurrences of a word in a document"""
    __tablename__ = "counters"

    # The composite key is the (doc_id, word_id) uniqueness constraint
    doc_id = Column(Integer, ForeignKey('documents.id', ondelete='CASCADE'), primary_key=True)
    word_id = Column(Integer, ForeignKey('words.id', ondelete='CASCADE'), primary_key=True)
    count = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index('idx_counters_word', 'word_id'),
    )

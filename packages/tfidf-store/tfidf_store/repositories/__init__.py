"""Repository exports"""
from .named_repo import NamedEntityRepository, WordRepository, DocumentRepository
from .counter_repo import CounterRepository

__all__ = [
    "NamedEntityRepository",
    "WordRepository",
    "DocumentRepository",
    "CounterRepository",
]

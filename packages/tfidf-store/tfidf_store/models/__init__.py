"""Database models"""
from .corpus import Word, Document, Counter

__all__ = [
    "Word",
    "Document",
    "Counter",
]

"""TF-IDF Store - vocabulary, documents and frequency table"""
__version__ = "0.1.0"

from .config import SETTINGS, TfidfSettings

from .database import (
    Base,
    get_db,
    init_db,
    drop_db,
    close_db,
    build_async_engine,
    build_session_factory,
    async_engine,
    AsyncSessionLocal,
)

from .models import (
    Word,
    Document,
    Counter,
)

from .repositories import (
    WordRepository,
    DocumentRepository,
    CounterRepository,
)

from . import schemas

__all__ = [
    # Config
    "SETTINGS",
    "TfidfSettings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "drop_db",
    "close_db",
    "build_async_engine",
    "build_session_factory",
    "async_engine",
    "AsyncSessionLocal",
    # Models
    "Word",
    "Document",
    "Counter",
    # Repositories
    "WordRepository",
    "DocumentRepository",
    "CounterRepository",
    # Schemas
    "schemas",
]

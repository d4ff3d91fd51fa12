"""Database utilities for CLI"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from tfidf_engine import CorpusDocument, UpdateOrchestrator
from tfidf_store import (
    CounterRepository,
    DocumentRepository,
    WordRepository,
    build_async_engine,
    build_session_factory,
    drop_db,
    init_db,
)

TEXT_SUFFIXES = (".txt", ".md")


@asynccontextmanager
async def session_scope(database_url: Optional[str] = None):
    """Session on a short-lived engine, disposed when the command ends"""
    engine = build_async_engine(database_url)
    try:
        async with build_session_factory(engine)() as session:
            yield session
    finally:
        await engine.dispose()


async def init_database(database_url: Optional[str] = None):
    """Initialize database (create tables)"""
    engine = build_async_engine(database_url)
    try:
        await init_db(engine)
    finally:
        await engine.dispose()


async def drop_all_tables(database_url: Optional[str] = None):
    """Drop all tables (destructive)"""
    engine = build_async_engine(database_url)
    try:
        await drop_db(engine)
    finally:
        await engine.dispose()


async def get_database_stats(database_url: Optional[str] = None) -> Dict[str, int]:
    """Row counts of documents, words and counters"""
    async with session_scope(database_url) as session:
        return {
            "documents": await DocumentRepository(session).count(),
            "words": await WordRepository(session).count(),
            "counters": await CounterRepository(session).count(),
        }


def collect_text_files(path: Path, recursive: bool = False) -> List[Path]:
    """Text files under ``path`` (or ``path`` itself), sorted by name"""
    if path.is_file():
        return [path]
    pattern = "**/*" if recursive else "*"
    return sorted(
        file_path for file_path in path.glob(pattern)
        if file_path.is_file() and file_path.suffix in TEXT_SUFFIXES
    )


async def ingest_documents(
    documents: Iterable[Tuple[str, str]],
    database_url: Optional[str] = None
) -> Tuple[List[CorpusDocument], int]:
    """
    Ingest ``(title, content)`` pairs in order

    Returns:
        The final corpus and the number of documents it gained. Titles
        already indexed are ignored and do not count.
    """
    async with session_scope(database_url) as session:
        orchestrator = UpdateOrchestrator(session)
        before = await DocumentRepository(session).count()
        corpus: List[CorpusDocument] = []
        for title, content in documents:
            corpus = await orchestrator.ingest(title, content)
        if not corpus:
            corpus = await orchestrator.corpus()
        return corpus, len(corpus) - before


async def get_corpus(database_url: Optional[str] = None) -> List[CorpusDocument]:
    """Current corpus view with siblings"""
    async with session_scope(database_url) as session:
        return await UpdateOrchestrator(session).corpus()

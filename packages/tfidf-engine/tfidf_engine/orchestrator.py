"""Update orchestrator: ingest one document, then refresh the whole corpus"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tfidf_store.repositories import CounterRepository, DocumentRepository, WordRepository

from .models import CorpusDocument
from .similarity import compute_siblings
from .tokenizer import tokenize
from .vectors import VectorBuilder

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], Iterable[str]]


class CorpusRecomputer(ABC):
    """Produces the corpus view (vectors and siblings) after an update"""

    @abstractmethod
    async def recompute(self) -> List[CorpusDocument]:
        ...


class FullCorpusRecomputer(CorpusRecomputer):
    """Rebuilds every vector and every sibling list from scratch, without locking"""

    def __init__(self, session: AsyncSession):
        self.documents = DocumentRepository(session)
        self.words = WordRepository(session)
        self.builder = VectorBuilder(session)

    async def recompute(self) -> List[CorpusDocument]:
        rows = await self.documents.list_documents()
        document_count = len(rows)
        # MAX(id) rather than a row count keeps every word id a valid index
        vocabulary_size = await self.words.max_id()

        logger.info(
            f"Recomputing TF-IDF for {document_count} documents "
            f"over {vocabulary_size} dimensions"
        )
        corpus = []
        for doc_id, title in rows:
            vector = await self.builder.build_vector(doc_id, vocabulary_size, document_count)
            corpus.append(CorpusDocument(id=doc_id, title=title, vector=vector))

        compute_siblings(corpus)
        return corpus


class UpdateOrchestrator:
    """Single entry point for indexing documents"""

    def __init__(
        self,
        session: AsyncSession,
        tokenizer: Optional[Tokenizer] = None,
        recomputer: Optional[CorpusRecomputer] = None,
    ):
        """
        Args:
            session: Database session shared by the stores
            tokenizer: ``text -> lowercase tokens`` (defaults to the regex tokenizer)
            recomputer: Corpus refresh strategy (defaults to a full recompute)
        """
        self.documents = DocumentRepository(session)
        self.words = WordRepository(session)
        self.counters = CounterRepository(session)
        self.tokenize = tokenizer or tokenize
        self.recomputer = recomputer or FullCorpusRecomputer(session)

    async def ingest(self, title: str, content: str) -> List[CorpusDocument]:
        """
        Index a document and return the refreshed corpus

        A title that already exists is ignored: its new content is not
        tokenized or merged. The corpus is recomputed either way.
        """
        doc_id, created = await self.documents.get_or_create(title)
        if doc_id is None:
            logger.error(f"Could not store document {title!r}, skipping tokenization")
        elif not created:
            logger.warning(f"Document ignored, already indexed: {title}")
        else:
            tokens = await self._index_tokens(doc_id, content)
            logger.info(f"Indexed {tokens} tokens for document {title!r}")

        return await self.corpus()

    async def _index_tokens(self, doc_id: int, content: str) -> int:
        indexed = 0
        for word in self.tokenize(content):
            word_id, _ = await self.words.get_or_create(word)
            if word_id is None:
                continue
            if await self.counters.increment(doc_id, word_id):
                indexed += 1
        return indexed

    async def corpus(self) -> List[CorpusDocument]:
        """Current corpus view, without ingesting anything"""
        return await self.recomputer.recompute()

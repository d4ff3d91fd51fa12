"""TF-IDF vector builder"""
import logging
import math

from sqlalchemy.ext.asyncio import AsyncSession

from tfidf_store.repositories import CounterRepository

from .models import SparseVector

logger = logging.getLogger(__name__)


def inverse_document_frequency(document_count: int, documents_with_word: int) -> float:
    """``1 + ln(N / df)``"""
    return 1.0 + math.log(document_count / documents_with_word)


class VectorBuilder:
    """Builds a document's TF-IDF vector from the frequency table"""

    def __init__(self, session: AsyncSession):
        self.counters = CounterRepository(session)

    async def build_vector(
        self,
        doc_id: int,
        vocabulary_size: int,
        document_count: int
    ) -> SparseVector:
        """
        Compute the TF-IDF vector of one document

        Term frequency is the relative frequency ``count / doc_size``,
        without log dampening. Document frequencies are read from the
        counters on every call. The statistics are read with separate
        queries, so a concurrent ingestion may be partially visible.

        Args:
            doc_id: Document to vectorize
            vocabulary_size: Dimensionality, the highest assigned word id
            document_count: Number of documents in the corpus

        Returns:
            Vector where dimension ``word_id - 1`` holds ``tf * idf``;
            all-zero when the document has no tokens
        """
        vector = SparseVector(vocabulary_size)

        doc_size = await self.counters.document_size(doc_id)
        if doc_size == 0:
            logger.debug(f"Document {doc_id} has no tokens, zero vector")
            return vector

        word_counts = await self.counters.word_counts(doc_id)
        frequencies = await self.counters.document_frequencies(
            word_id for word_id, _ in word_counts
        )

        for word_id, count in word_counts:
            documents_with_word = frequencies.get(word_id, 0)
            # word created after vocabulary_size was read
            if documents_with_word == 0 or word_id > vocabulary_size:
                continue
            tf = count / doc_size
            idf = inverse_document_frequency(document_count, documents_with_word)
            vector[word_id - 1] = tf * idf

        return vector

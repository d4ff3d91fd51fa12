"""Frequency table repository"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, func, distinct
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.corpus import Counter

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CounterRepository:
    """Sparse (document, word) -> occurrence count table"""

    def __init__(self, session: AsyncSession, use_upsert: Optional[bool] = None):
        """
        Args:
            session: Database session
            use_upsert: Force (True) or disable (False) the atomic upsert.
                By default it is used when the dialect supports it.

        Raises:
            ValueError: upsert forced on a dialect without ON CONFLICT
        """
        self.session = session
        self.use_upsert = use_upsert
        if use_upsert:
            dialect = session.get_bind().dialect.name
            if dialect not in UPSERT_DIALECTS:
                raise ValueError(f"Dialect {dialect!r} has no ON CONFLICT upsert")

    def _dialect_insert(self):
        if self.use_upsert is False:
            return None
        return UPSERT_DIALECTS.get(self.session.get_bind().dialect.name)

    async def increment(self, doc_id: int, word_id: int) -> bool:
        """
        Add one occurrence of ``word_id`` to ``doc_id``

        Returns:
            False when the increment could not be stored
        """
        try:
            dialect_insert = self._dialect_insert()
            if dialect_insert is not None:
                await self._upsert(dialect_insert, doc_id, word_id)
            else:
                await self._update_or_insert(doc_id, word_id)
            await self.session.commit()
            return True
        except SQLAlchemyError:
            logger.exception(f"Unexpected error counting word {word_id} in document {doc_id}")
            await self.session.rollback()
            return False

    async def _upsert(self, dialect_insert, doc_id: int, word_id: int):
        table = Counter.__table__
        stmt = dialect_insert(table).values(doc_id=doc_id, word_id=word_id, count=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.doc_id, table.c.word_id],
            set_={"count": table.c.count + 1},
        )
        await self.session.execute(stmt)

    async def _update_or_insert(self, doc_id: int, word_id: int):
        table = Counter.__table__
        bump = (
            table.update()
            .where(table.c.doc_id == doc_id, table.c.word_id == word_id)
            .values(count=table.c.count + 1)
        )
        result = await self.session.execute(bump)
        if result.rowcount:
            return
        try:
            await self.session.execute(
                table.insert().values(doc_id=doc_id, word_id=word_id, count=1)
            )
            await self.session.flush()
        except IntegrityError:
            # Concurrent insert of the same pair; a single update, no further retries
            await self.session.rollback()
            await self.session.execute(bump)

    async def get_count(self, doc_id: int, word_id: int) -> int:
        result = await self.session.execute(
            select(Counter.count).where(Counter.doc_id == doc_id, Counter.word_id == word_id)
        )
        return result.scalar_one_or_none() or 0

    async def document_size(self, doc_id: int) -> int:
        """Total token occurrences recorded for a document"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Counter.count), 0)).where(Counter.doc_id == doc_id)
        )
        return int(result.scalar_one())

    async def word_counts(self, doc_id: int) -> List[Tuple[int, int]]:
        """``(word_id, count)`` for every word of a document, by word id"""
        result = await self.session.execute(
            select(Counter.word_id, func.sum(Counter.count))
            .where(Counter.doc_id == doc_id)
            .group_by(Counter.word_id)
            .order_by(Counter.word_id)
        )
        return [(word_id, int(total)) for word_id, total in result]

    async def document_frequencies(self, word_ids: Iterable[int]) -> Dict[int, int]:
        """Number of distinct documents with a nonzero count, per word"""
        word_ids = list(word_ids)
        if not word_ids:
            return {}
        result = await self.session.execute(
            select(Counter.word_id, func.count(distinct(Counter.doc_id)))
            .where(Counter.word_id.in_(word_ids), Counter.count > 0)
            .group_by(Counter.word_id)
        )
        return {word_id: int(total) for word_id, total in result}

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Counter))
        return result.scalar_one()

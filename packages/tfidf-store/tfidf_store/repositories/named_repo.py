"""Create-or-get repositories keyed by a unique name"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.corpus import Word, Document

logger = logging.getLogger(__name__)


class NamedEntityRepository:
    """
    Maps a unique name to a stable integer id

    The unique constraint on ``name`` is the source of truth. Every write
    is committed on its own, so a lost insert race only rolls back the
    failed statement.
    """

    model = None
    label = "entity"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_id(self, name: str) -> Optional[int]:
        """Get id by name"""
        result = await self.session.execute(
            select(self.model.id).where(self.model.name == name)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str) -> Tuple[Optional[int], bool]:
        """
        Return the id for ``name``, inserting a row if it is new

        Returns:
            ``(id, created)``. ``created`` is True only for the call whose
            insert succeeded. On a persistence failure the id is None.
        """
        try:
            existing = await self.get_id(name)
            if existing is not None:
                return existing, False
            return await self._create(name)
        except SQLAlchemyError:
            logger.exception(f"Unexpected error resolving {self.label} {name!r}")
            await self.session.rollback()
            return None, False

    async def _create(self, name: str) -> Tuple[Optional[int], bool]:
        table = self.model.__table__
        try:
            result = await self.session.execute(table.insert().values(name=name))
            await self.session.commit()
        except IntegrityError:
            # Concurrent insert, we just select then
            await self.session.rollback()
            return await self.get_id(name), False

        new_id = result.inserted_primary_key[0]
        logger.info(f"New {self.label}: {name}")
        return new_id, True

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar_one()


class WordRepository(NamedEntityRepository):
    """Vocabulary store"""

    model = Word
    label = "word"

    async def max_id(self) -> int:
        """
        Highest assigned word id, 0 for an empty vocabulary

        Used as the vector dimensionality instead of the row count so that
        every word id stays a valid index even if rows are removed.
        """
        result = await self.session.execute(select(func.max(Word.id)))
        return result.scalar_one_or_none() or 0


class DocumentRepository(NamedEntityRepository):
    """Document store, keyed by title"""

    model = Document
    label = "document"

    async def list_documents(self) -> List[Tuple[int, str]]:
        """All documents as ``(id, title)``, in id order"""
        result = await self.session.execute(
            select(Document.id, Document.name).order_by(Document.id)
        )
        return [(row.id, row.name) for row in result]

"""
Taxonomy repository - lookups over one vocabulary table (services, skills, ...).
"""
from typing import Dict, Iterable, List, Set, Type
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.taxonomy import _Term
from app.repositories.base import BaseRepository


class TaxonomyRepository(BaseRepository[_Term]):
    """
    Usage:
        services = TaxonomyRepository(Service)
        await services.list_ordered(db)
    """

    def __init__(self, model: Type[_Term]):
        super().__init__(model)

    async def list_ordered(
        self,
        db: AsyncSession,
    ) -> List[_Term]:
        """All terms, alphabetically."""
        result = await db.execute(
            select(self.model).order_by(self.model.name.asc())
        )
        return list(result.scalars().all())

    async def ids_by_name(
        self,
        db: AsyncSession,
        names: Iterable[str],
    ) -> Dict[str, UUID]:
        """Map each known name to its id; unknown names are absent from the result."""
        names = list(names)
        if not names:
            return {}
        result = await db.execute(
            select(self.model.name, self.model.id).where(self.model.name.in_(names))
        )
        return {name: term_id for name, term_id in result.all()}

    async def existing_ids(
        self,
        db: AsyncSession,
        ids: Iterable[UUID],
    ) -> Set[UUID]:
        """Subset of ``ids`` that exist in the table."""
        ids = list(ids)
        if not ids:
            return set()
        result = await db.execute(
            select(self.model.id).where(self.model.id.in_(ids))
        )
        return set(result.scalars().all())

    async def get_or_create(
        self,
        db: AsyncSession,
        name: str,
    ) -> _Term:
        """Used by the seed script."""
        result = await db.execute(
            select(self.model).where(self.model.name == name)
        )
        term = result.scalar_one_or_none()
        if term is None:
            term = await self.create(db, name=name)
        return term

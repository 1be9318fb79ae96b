"""
Taxonomy routes - the vocabularies forms pick from.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.taxonomy import TermResponse
from app.services.taxonomy_service import TaxonomyService

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])

taxonomy_service = TaxonomyService()


@router.get("/{kind}", response_model=List[TermResponse])
async def list_terms(
    kind: str,
    db: AsyncSession = Depends(get_db),
):
    """services, industries, technologies, skills or benefits, ordered by name."""
    return await taxonomy_service.list_terms(db, kind)

"""
Taxonomy term schemas.
"""
from typing import List
from uuid import UUID
from app.schemas.base import BaseSchema


class TermResponse(BaseSchema):
    id: UUID
    name: str


class AgencyFilterOptions(BaseSchema):
    """Choices offered by the agency directory filters."""

    services: List[TermResponse]
    industries: List[TermResponse]
    technologies: List[TermResponse]
    locations: List[str]
    sizes: List[str]
    ratings: List[float]

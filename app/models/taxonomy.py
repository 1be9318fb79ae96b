"""
Taxonomy terms - the controlled vocabularies listings are tagged with.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class _Term(BaseModel):
    __abstract__ = True

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class Service(_Term):
    """What an agency offers / what a project needs, e.g. 'Computer Vision'."""

    __tablename__ = "services"


class Industry(_Term):
    __tablename__ = "industries"


class Technology(_Term):
    __tablename__ = "technologies"


class Skill(_Term):
    """Skills a job posting requires."""

    __tablename__ = "skills"


class Benefit(_Term):
    __tablename__ = "benefits"


TAXONOMY_MODELS = {
    "services": Service,
    "industries": Industry,
    "technologies": Technology,
    "skills": Skill,
    "benefits": Benefit,
}

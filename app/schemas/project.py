"""
Project schemas.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import EmailStr, Field, field_validator
from app.schemas.base import FormSchema, IDSchema, unique_in_order


BUDGET_RANGES = {
    "5000-10000": "$5,000 - $10,000",
    "10000-25000": "$10,000 - $25,000",
    "25000-50000": "$25,000 - $50,000",
    "50000-plus": "$50,000+",
}

BudgetRange = Literal["5000-10000", "10000-25000", "25000-50000", "50000-plus"]


class CompanyDetails(FormSchema):
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    company_name: str = Field(..., min_length=2, max_length=255)


class ProjectCreate(FormSchema):
    """Body of the 'post a project' form."""

    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(..., min_length=50)
    required_services: List[str] = Field(..., min_length=1)  # service names
    industry: str = Field(..., min_length=1, max_length=100)
    budget_range: BudgetRange
    timing: Literal["short-term", "long-term"]
    location: Optional[str] = Field(None, max_length=255)
    company_details: CompanyDetails

    @field_validator("required_services")
    @classmethod
    def _drop_repeats(cls, value: List[str]) -> List[str]:
        return unique_in_order(value)


class ProjectResponse(IDSchema):
    """A project as listed on the owner's account page and the project page."""

    title: str
    description: str
    industry: str
    budget_range: str
    budget_label: str
    project_timing: str
    location_preference: Optional[str] = None
    company_name: Optional[str] = None
    status: str
    status_label: str
    created_at: datetime
    services: List[str] = []

"""
Agency schemas - directory cards, profile page and the owner's profile form.
"""
from typing import List, Optional
from uuid import UUID
from pydantic import EmailStr, Field, field_validator
from app.schemas.base import BaseSchema, FormSchema, IDSchema, unique_in_order


AGENCY_LOCATIONS = ["United States", "United Kingdom", "Europe", "Asia", "Remote"]
AGENCY_SIZES = ["1-10 employees", "11-50 employees", "51-200 employees", "201+ employees"]
AGENCY_RATINGS = [4.5, 4.0, 3.5, 3.0]
AGENCY_SORTS = ["rating-desc", "rating-asc", "name-asc", "name-desc"]


class AgencyFilters(BaseSchema):
    """Directory filter values; None (or empty) means 'any'."""

    search: Optional[str] = None
    service: Optional[str] = None
    industry: Optional[str] = None
    technology: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    size: Optional[str] = None


class AgencyCard(IDSchema):
    """One agency in the directory grid."""

    name: str
    rating: float
    location: str
    services: List[str] = []
    industries: List[str] = []
    technologies: List[str] = []
    size: str
    image_url: Optional[str] = None


class FeaturedProject(IDSchema):
    title: str
    description: str
    industry: str
    budget_range: str


class AgencyDetail(IDSchema):
    """Public agency profile page."""

    name: str
    description: str
    rating_avg: float
    review_count: int
    location: str
    location_city: Optional[str] = None
    location_country: Optional[str] = None
    employee_range: Optional[str] = None
    contact_email: str
    contact_phone: Optional[str] = None
    logo_url: Optional[str] = None
    case_studies: Optional[str] = None
    certifications_awards: Optional[str] = None
    services: List[str] = []
    industries: List[str] = []
    technologies: List[str] = []
    featured_projects: List[FeaturedProject] = []


class AgencyProfileForm(FormSchema):
    """Create-or-update body for the caller's own agency."""

    agency_name: str = Field(..., min_length=2, max_length=255)
    services_offered: List[UUID] = Field(..., min_length=1)
    industry_specialties: List[UUID] = Field(..., min_length=1)
    case_studies: Optional[str] = None
    certifications_awards: Optional[str] = None
    contact_email: EmailStr
    contact_phone: Optional[str] = Field(None, max_length=50)
    # Object key from an earlier POST /agencies/me/logo; omitted keeps the current logo
    logo_path: Optional[str] = None

    @field_validator("services_offered", "industry_specialties")
    @classmethod
    def _drop_repeats(cls, value: List[UUID]) -> List[UUID]:
        return unique_in_order(value)


class MyAgencyResponse(IDSchema):
    """The owner's view of their agency, as needed to prefill the form."""

    name: str
    contact_email: str
    contact_phone: Optional[str] = None
    case_studies: Optional[str] = None
    certifications_awards: Optional[str] = None
    logo_url: Optional[str] = None
    status: str
    services: List[UUID] = []
    industries: List[UUID] = []


class LogoUploadResponse(BaseSchema):
    url: str
    path: str

"""
Job schemas.
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import EmailStr, Field, HttpUrl, field_validator
from app.schemas.base import FormSchema, IDSchema, unique_in_order


JOB_INDUSTRIES = ["AI", "Healthcare", "Finance", "IT", "Retail", "Manufacturing", "Education", "Other"]

EmploymentType = Literal["full-time", "part-time", "contract", "internship"]
ExperienceLevel = Literal["entry", "mid", "senior", "expert"]


class SalaryRange(FormSchema):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)


class Qualifications(FormSchema):
    education: str = Field(..., min_length=2, max_length=255)
    experience_level: ExperienceLevel
    certifications: List[str] = []


class CompanyInfo(FormSchema):
    name: str = Field(..., min_length=2, max_length=255)
    website: HttpUrl
    contact_email: EmailStr


class JobCreate(FormSchema):
    """Body of the 'post a job' form."""

    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(..., min_length=200)
    required_skills: List[str] = Field(..., min_length=1)  # skill names
    employment_type: EmploymentType
    salary_range: SalaryRange
    location: str = Field(..., min_length=2, max_length=255)
    industry: str = Field(..., min_length=2, max_length=100)
    application_deadline: date
    qualifications: Qualifications
    company_info: CompanyInfo
    benefits: List[str] = []  # benefit names
    terms_accepted: bool

    @field_validator("terms_accepted")
    @classmethod
    def _terms_must_be_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must accept the terms and conditions")
        return value

    @field_validator("required_skills", "benefits")
    @classmethod
    def _drop_repeats(cls, value: List[str]) -> List[str]:
        return unique_in_order(value)


class JobResponse(IDSchema):
    """A job posting with its skill and benefit names."""

    title: str
    description: str
    employment_type: str
    industry: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_display: str
    location: Optional[str] = None
    application_deadline: Optional[date] = None
    education_required: Optional[str] = None
    experience_level: Optional[str] = None
    certifications: List[str] = []
    company_name: Optional[str] = None
    company_website: Optional[str] = None
    status: str
    status_label: str
    created_at: datetime
    skills: List[str] = []
    benefits: List[str] = []

"""
Pydantic schemas for API validation and serialization.
"""
from app.schemas.base import (
    BaseSchema,
    FormSchema,
    PaginatedResponse,
    MessageResponse,
    ErrorResponse,
)
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    MagicLinkRequest,
    MagicLinkVerifyRequest,
    TokenResponse,
    RefreshTokenRequest,
    ChangePasswordRequest,
)
from app.schemas.user import UserUpdate, UserResponse
from app.schemas.taxonomy import TermResponse, AgencyFilterOptions
from app.schemas.agency import (
    AgencyFilters,
    AgencyCard,
    AgencyDetail,
    AgencyProfileForm,
    MyAgencyResponse,
    LogoUploadResponse,
)
from app.schemas.project import ProjectCreate, ProjectResponse
from app.schemas.job import JobCreate, JobResponse
from app.schemas.event import EventFilters, EventCard

__all__ = [
    # Base
    "BaseSchema",
    "FormSchema",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "MagicLinkRequest",
    "MagicLinkVerifyRequest",
    "TokenResponse",
    "RefreshTokenRequest",
    "ChangePasswordRequest",
    # User
    "UserUpdate",
    "UserResponse",
    # Taxonomy
    "TermResponse",
    "AgencyFilterOptions",
    # Agency
    "AgencyFilters",
    "AgencyCard",
    "AgencyDetail",
    "AgencyProfileForm",
    "MyAgencyResponse",
    "LogoUploadResponse",
    # Project
    "ProjectCreate",
    "ProjectResponse",
    # Job
    "JobCreate",
    "JobResponse",
    # Event
    "EventFilters",
    "EventCard",
]

"""
Tests for request body validation.
"""
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.schemas.agency import AgencyProfileForm
from app.schemas.auth import RegisterRequest
from app.schemas.job import JobCreate
from app.schemas.project import ProjectCreate


def messages(exc_info) -> str:
    return " ".join(error["msg"] for error in exc_info.value.errors())


class TestRegisterRequest:
    def test_valid(self):
        body = RegisterRequest(
            email="a@example.com",
            password="password123",
            confirm_password="password123",
            role="agency",
        )
        assert body.role == "agency"

    def test_passwords_must_match(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(
                email="a@example.com",
                password="password123",
                confirm_password="password124",
                role="business",
            )
        assert "Passwords don't match" in messages(exc_info)

    def test_short_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                email="a@example.com",
                password="short",
                confirm_password="short",
                role="business",
            )

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                email="a@example.com",
                password="password123",
                confirm_password="password123",
                role="admin",
            )


def agency_form(**overrides) -> dict:
    values = dict(
        agency_name="Neural Forge",
        services_offered=[str(uuid4())],
        industry_specialties=[str(uuid4())],
        contact_email="hello@example.com",
    )
    values.update(overrides)
    return values


class TestAgencyProfileForm:
    def test_blank_optional_text_becomes_none(self):
        form = AgencyProfileForm(**agency_form(contact_phone="   ", case_studies=""))
        assert form.contact_phone is None
        assert form.case_studies is None

    def test_text_is_stripped(self):
        form = AgencyProfileForm(**agency_form(agency_name="  Neural Forge  "))
        assert form.agency_name == "Neural Forge"

    def test_requires_a_service(self):
        with pytest.raises(ValidationError):
            AgencyProfileForm(**agency_form(services_offered=[]))

    def test_requires_an_industry(self):
        with pytest.raises(ValidationError):
            AgencyProfileForm(**agency_form(industry_specialties=[]))

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            AgencyProfileForm(**agency_form(agency_name="   "))

    def test_repeated_terms_are_dropped(self):
        first, second = uuid4(), uuid4()
        form = AgencyProfileForm(**agency_form(
            services_offered=[str(first), str(second), str(first)],
            industry_specialties=[str(second), str(second)],
        ))
        assert form.services_offered == [first, second]
        assert form.industry_specialties == [second]

    def test_logo_url_is_not_accepted_from_the_client(self):
        form = AgencyProfileForm(**agency_form(logo_url="https://elsewhere.example.com/x.png"))
        assert not hasattr(form, "logo_url")


def project_form(**overrides) -> dict:
    values = dict(
        title="Demand forecasting model",
        description="We need a model that forecasts weekly demand for 400 retail stores.",
        required_services=["Machine Learning"],
        industry="Retail",
        budget_range="10000-25000",
        timing="short-term",
        company_details={"email": "ops@example.com", "company_name": "Acme"},
    )
    values.update(overrides)
    return values


class TestProjectCreate:
    def test_valid(self):
        body = ProjectCreate(**project_form())
        assert body.company_details.phone is None

    def test_invalid_budget(self):
        with pytest.raises(ValidationError):
            ProjectCreate(**project_form(budget_range="1-2"))

    def test_short_description(self):
        with pytest.raises(ValidationError):
            ProjectCreate(**project_form(description="Too short"))

    def test_requires_a_service(self):
        with pytest.raises(ValidationError):
            ProjectCreate(**project_form(required_services=[]))

    def test_repeated_services_are_dropped(self):
        body = ProjectCreate(**project_form(
            required_services=["Machine Learning", "NLP", "Machine Learning"],
        ))
        assert body.required_services == ["Machine Learning", "NLP"]


def job_form(**overrides) -> dict:
    values = dict(
        title="Senior ML Engineer",
        description="x" * 200,
        required_skills=["Python"],
        employment_type="full-time",
        salary_range={"min": 120000, "max": 160000},
        location="Remote",
        industry="AI",
        application_deadline="2030-01-31",
        qualifications={"education": "BSc", "experience_level": "senior"},
        company_info={
            "name": "Acme",
            "website": "https://acme.example.com",
            "contact_email": "jobs@acme.example.com",
        },
        terms_accepted=True,
    )
    values.update(overrides)
    return values


class TestJobCreate:
    def test_valid(self):
        body = JobCreate(**job_form())
        assert body.benefits == []
        assert body.qualifications.certifications == []

    def test_terms_must_be_accepted(self):
        with pytest.raises(ValidationError) as exc_info:
            JobCreate(**job_form(terms_accepted=False))
        assert "You must accept the terms and conditions" in messages(exc_info)

    def test_description_minimum_length(self):
        with pytest.raises(ValidationError):
            JobCreate(**job_form(description="x" * 199))

    def test_invalid_website(self):
        with pytest.raises(ValidationError):
            JobCreate(**job_form(company_info={
                "name": "Acme",
                "website": "not a url",
                "contact_email": "jobs@acme.example.com",
            }))

    def test_negative_salary(self):
        with pytest.raises(ValidationError):
            JobCreate(**job_form(salary_range={"min": -1, "max": 10}))

    def test_repeated_skills_and_benefits_are_dropped(self):
        body = JobCreate(**job_form(
            required_skills=["Python", "PyTorch", "Python"],
            benefits=["Equity", "Equity"],
        ))
        assert body.required_skills == ["Python", "PyTorch"]
        assert body.benefits == ["Equity"]

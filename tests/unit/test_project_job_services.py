"""
Tests for posting projects and jobs and listing them back.
"""
from datetime import date, datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    JobNotFoundException,
    ListingUnavailableException,
    ProjectNotFoundException,
    SaveFailedException,
    UnknownTermException,
)
from app.schemas.job import JobCreate
from app.schemas.project import ProjectCreate
from app.services.job_service import JobService, salary_display
from app.services.project_service import ProjectService

from tests.support import make_session, make_user, term


def db_error() -> OperationalError:
    return OperationalError("INSERT", {}, Exception("connection lost"))


def project_row(**overrides):
    values = dict(
        id=uuid4(),
        title="Demand forecasting model",
        description="Forecast weekly demand",
        industry="Retail",
        budget_range="10000-25000",
        project_timing="short-term",
        location_preference=None,
        company_name="Acme",
        status="open",
        created_at=datetime.now(timezone.utc),
        services=[term("Machine Learning")],
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def job_row(**overrides):
    values = dict(
        id=uuid4(),
        title="Senior ML Engineer",
        description="x" * 200,
        employment_type="full-time",
        industry="AI",
        salary_min=120000,
        salary_max=160000,
        location="Remote",
        application_deadline=date(2030, 1, 31),
        education_required="BSc",
        experience_level="senior",
        certifications=None,
        company_name="Acme",
        company_website="https://acme.example.com/",
        status="published",
        created_at=datetime.now(timezone.utc),
        skills=[term("Python")],
        benefits=[],
    )
    values.update(overrides)
    return SimpleNamespace(**values)


# ── Projects ─────────────────────────────────────────────────────────────────

@pytest.fixture
def projects():
    svc = ProjectService()
    svc.project_repo = MagicMock()
    for name in ("create", "delete", "add_services", "get_with_services", "list_by_owner"):
        setattr(svc.project_repo, name, AsyncMock())
    svc.service_terms = MagicMock(ids_by_name=AsyncMock())
    return svc


def project_form(**overrides) -> ProjectCreate:
    values = dict(
        title="Demand forecasting model",
        description="We need a model that forecasts weekly demand for 400 retail stores.",
        required_services=["Machine Learning", "Data Analytics"],
        industry="Retail",
        budget_range="10000-25000",
        timing="short-term",
        company_details={"email": "ops@example.com", "company_name": "Acme", "phone": " "},
    )
    values.update(overrides)
    return ProjectCreate(**values)


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_open_project_with_services(self, projects):
        ids = {"Machine Learning": uuid4(), "Data Analytics": uuid4()}
        projects.service_terms.ids_by_name.return_value = ids
        row = project_row()
        projects.project_repo.create.return_value = row
        projects.project_repo.get_with_services.return_value = row
        db = make_session()
        user = make_user()

        response = await projects.create_project(db, user, project_form())

        values = projects.project_repo.create.await_args.kwargs
        assert values["status"] == "open"
        assert values["user_id"] == user.id
        assert values["project_timing"] == "short-term"
        assert values["contact_phone"] is None
        projects.project_repo.add_services.assert_awaited_once_with(
            db, row.id, [ids["Machine Learning"], ids["Data Analytics"]]
        )
        assert response.budget_label == "$10,000 - $25,000"
        assert response.status_label == "Open"

    @pytest.mark.asyncio
    async def test_repeated_service_links_once(self, projects):
        ml_id = uuid4()
        projects.service_terms.ids_by_name.return_value = {"Machine Learning": ml_id}
        row = project_row()
        projects.project_repo.create.return_value = row
        projects.project_repo.get_with_services.return_value = row
        db = make_session()

        await projects.create_project(
            db,
            make_user(),
            project_form(required_services=["Machine Learning", "Machine Learning"]),
        )

        projects.project_repo.add_services.assert_awaited_once_with(db, row.id, [ml_id])

    @pytest.mark.asyncio
    async def test_unknown_service(self, projects):
        projects.service_terms.ids_by_name.return_value = {"Machine Learning": uuid4()}

        with pytest.raises(UnknownTermException) as exc_info:
            await projects.create_project(make_session(), make_user(), project_form())

        assert '"Data Analytics"' in exc_info.value.message
        projects.project_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_link_failure(self, projects):
        projects.service_terms.ids_by_name.return_value = {
            "Machine Learning": uuid4(),
            "Data Analytics": uuid4(),
        }
        projects.project_repo.create.return_value = project_row()
        projects.project_repo.add_services.side_effect = db_error()

        with pytest.raises(SaveFailedException) as exc_info:
            await projects.create_project(make_session(), make_user(), project_form())

        assert exc_info.value.message == "Failed to post project. Please try again."
        projects.project_repo.delete.assert_awaited_once()


class TestProjectLookups:
    @pytest.mark.asyncio
    async def test_missing_project(self, projects):
        projects.project_repo.get_with_services.return_value = None
        with pytest.raises(ProjectNotFoundException):
            await projects.get_project(make_session(), uuid4())

    @pytest.mark.asyncio
    async def test_list_mine(self, projects):
        projects.project_repo.list_by_owner.return_value = [project_row(status="in-progress")]

        (response,) = await projects.list_my_projects(make_session(), make_user())
        assert response.status_label == "In Progress"
        assert response.services == ["Machine Learning"]

    @pytest.mark.asyncio
    async def test_list_failure(self, projects):
        projects.project_repo.list_by_owner.side_effect = db_error()
        with pytest.raises(ListingUnavailableException):
            await projects.list_my_projects(make_session(), make_user())


# ── Jobs ─────────────────────────────────────────────────────────────────────

class TestSalaryDisplay:
    def test_range(self):
        assert salary_display(50000, 80000) == "$50,000 - $80,000"

    def test_minimum_only(self):
        assert salary_display(50000, None) == "$50,000+"

    def test_maximum_only(self):
        assert salary_display(None, 80000) == "Up to $80,000"

    def test_unspecified(self):
        assert salary_display(0, 0) == "Salary not specified"


@pytest.fixture
def jobs():
    svc = JobService()
    svc.job_repo = MagicMock()
    for name in (
        "create",
        "delete",
        "add_skills",
        "add_benefits",
        "get_with_terms",
        "list_by_owner",
        "find_published",
    ):
        setattr(svc.job_repo, name, AsyncMock())
    svc.skill_terms = MagicMock(ids_by_name=AsyncMock())
    svc.benefit_terms = MagicMock(ids_by_name=AsyncMock(return_value={}))
    return svc


def job_form(**overrides) -> JobCreate:
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
        benefits=["Equity", "Free lunch"],
        terms_accepted=True,
    )
    values.update(overrides)
    return JobCreate(**values)


class TestCreateJob:
    @pytest.mark.asyncio
    async def test_published_job(self, jobs):
        python_id, equity_id = uuid4(), uuid4()
        jobs.skill_terms.ids_by_name.return_value = {"Python": python_id}
        jobs.benefit_terms.ids_by_name.return_value = {"Equity": equity_id}
        row = job_row()
        jobs.job_repo.create.return_value = row
        jobs.job_repo.get_with_terms.return_value = row
        db = make_session()

        response = await jobs.create_job(db, make_user(), job_form())

        values = jobs.job_repo.create.await_args.kwargs
        assert values["status"] == "published"
        assert values["salary_min"] == 120000
        assert values["experience_level"] == "senior"
        assert isinstance(values["company_website"], str)
        jobs.job_repo.add_skills.assert_awaited_once_with(db, row.id, [python_id])
        # unknown benefits are dropped rather than rejected
        jobs.job_repo.add_benefits.assert_awaited_once_with(db, row.id, [equity_id])
        assert response.salary_display == "$120,000 - $160,000"
        assert response.certifications == []

    @pytest.mark.asyncio
    async def test_no_known_benefits_skips_link_step(self, jobs):
        jobs.skill_terms.ids_by_name.return_value = {"Python": uuid4()}
        row = job_row()
        jobs.job_repo.create.return_value = row
        jobs.job_repo.get_with_terms.return_value = row

        await jobs.create_job(make_session(), make_user(), job_form())

        jobs.job_repo.add_benefits.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_skill(self, jobs):
        jobs.skill_terms.ids_by_name.return_value = {}

        with pytest.raises(UnknownTermException) as exc_info:
            await jobs.create_job(make_session(), make_user(), job_form())

        assert exc_info.value.message == 'Skill "Python" not found. Please refresh and try again.'
        jobs.job_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_link_failure(self, jobs):
        jobs.skill_terms.ids_by_name.return_value = {"Python": uuid4()}
        jobs.job_repo.create.return_value = job_row()
        jobs.job_repo.add_skills.side_effect = db_error()

        with pytest.raises(SaveFailedException) as exc_info:
            await jobs.create_job(make_session(), make_user(), job_form())

        assert exc_info.value.message == "Failed to post job. Please try again."
        jobs.job_repo.delete.assert_awaited_once()


class TestJobBoard:
    @pytest.mark.asyncio
    async def test_paginated(self, jobs):
        jobs.job_repo.find_published.return_value = ([job_row()], 11)

        page = await jobs.list_jobs(make_session(), search="ml", page=2, per_page=10)

        kwargs = jobs.job_repo.find_published.await_args.kwargs
        assert kwargs["offset"] == 10
        assert kwargs["search"] == "ml"
        assert page.pages == 2
        assert page.items[0].status_label == "Published"

    @pytest.mark.asyncio
    async def test_failure(self, jobs):
        jobs.job_repo.find_published.side_effect = db_error()
        with pytest.raises(ListingUnavailableException) as exc_info:
            await jobs.list_jobs(make_session())
        assert exc_info.value.message == "Failed to load jobs. Please try again later."

    @pytest.mark.asyncio
    async def test_missing_job(self, jobs):
        jobs.job_repo.get_with_terms.return_value = None
        with pytest.raises(JobNotFoundException):
            await jobs.get_job(make_session(), uuid4())

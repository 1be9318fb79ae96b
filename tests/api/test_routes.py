"""
HTTP-level tests: status codes, error shape and query/body validation.

The database session and the signed-in user are dependency overrides;
service calls that would reach a database are replaced per test.
"""
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_current_user
from app.api.routes import agencies as agencies_routes
from app.api.routes import events as events_routes
from app.core.database import get_db
from app.core.exceptions import AgencyNotFoundException
from app.main import app
from app.schemas.base import PaginatedResponse

from tests.support import make_session, make_user

API = "/api/v1"


def empty_page(limit: int) -> PaginatedResponse:
    return PaginatedResponse(items=[], total=0, page=1, limit=limit, pages=1)


@pytest.fixture
def session():
    return make_session()


@pytest.fixture
def client(session):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client):
    user = make_user(role="agency")
    app.dependency_overrides[get_current_user] = lambda: user
    return user


class TestErrorShape:
    def test_unknown_taxonomy(self, client):
        response = client.get(f"{API}/taxonomy/colors")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "UNKNOWN_TAXONOMY"
        assert "colors" in body["message"]
        assert body["details"] is None

    def test_authentication_required(self, client):
        response = client.get(f"{API}/agencies/me")
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    def test_bad_bearer_token(self, client):
        response = client.get(
            f"{API}/agencies/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    def test_logout(self, client):
        response = client.post(f"{API}/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}


class TestAgencyDirectory:
    def test_default_page_size(self, client, monkeypatch):
        listing = AsyncMock(return_value=empty_page(9))
        monkeypatch.setattr(agencies_routes.agency_service, "list_agencies", listing)

        response = client.get(f"{API}/agencies", params={"service": "Robotics", "search": ""})

        assert response.status_code == 200
        kwargs = listing.await_args.kwargs
        assert kwargs["per_page"] == 9
        assert kwargs["sort"] == "rating-desc"
        assert kwargs["filters"].service == "Robotics"
        assert kwargs["filters"].search is None

    def test_unsupported_page_size(self, client):
        response = client.get(f"{API}/agencies", params={"per_page": 10})
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAGE_SIZE"

    def test_rating_out_of_range(self, client):
        response = client.get(f"{API}/agencies", params={"rating": 6})
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_hidden_profile(self, client, monkeypatch):
        monkeypatch.setattr(
            agencies_routes.agency_service,
            "get_profile",
            AsyncMock(side_effect=AgencyNotFoundException()),
        )
        response = client.get(f"{API}/agencies/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == "AGENCY_NOT_FOUND"


class TestLogoUpload:
    def test_rejects_gif(self, client, signed_in, monkeypatch):
        monkeypatch.setattr(
            agencies_routes.agency_service.agency_repo,
            "get_by_owner",
            AsyncMock(return_value=None),
        )

        response = client.post(
            f"{API}/agencies/me/logo",
            files={"file": ("logo.gif", b"GIF89a", "image/gif")},
        )

        assert response.status_code == 415
        assert response.json()["error"] == "INVALID_FILE_TYPE"


class TestRegisterValidation:
    def test_password_mismatch_message(self, client):
        response = client.post(
            f"{API}/auth/register",
            json={
                "email": "new@example.com",
                "password": "password123",
                "confirm_password": "password321",
                "role": "business",
            },
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Passwords don't match"


class TestPostJob:
    def test_terms_must_be_accepted(self, client, signed_in):
        response = client.post(
            f"{API}/jobs",
            json={
                "title": "Senior ML Engineer",
                "description": "x" * 200,
                "required_skills": ["Python"],
                "employment_type": "full-time",
                "salary_range": {"min": 120000, "max": 160000},
                "location": "Remote",
                "industry": "AI",
                "application_deadline": "2030-01-31",
                "qualifications": {"education": "BSc", "experience_level": "senior"},
                "company_info": {
                    "name": "Acme",
                    "website": "https://acme.example.com",
                    "contact_email": "jobs@acme.example.com",
                },
                "terms_accepted": False,
            },
        )
        assert response.status_code == 422
        assert response.json()["message"] == "You must accept the terms and conditions"


class TestEvents:
    def test_filters_passed_through(self, client, monkeypatch):
        listing = AsyncMock(return_value=empty_page(9))
        monkeypatch.setattr(events_routes.event_service, "list_events", listing)

        response = client.get(
            f"{API}/events",
            params={"date_range": "this-week", "price": "free", "location": "virtual"},
        )

        assert response.status_code == 200
        filters = listing.await_args.kwargs["filters"]
        assert filters.date_range == "this-week"
        assert filters.price == "free"
        assert filters.location == "virtual"
        assert filters.event_type == "all"

    def test_unknown_date_range(self, client):
        response = client.get(f"{API}/events", params={"date_range": "someday"})
        assert response.status_code == 422

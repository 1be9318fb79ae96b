# Shared builders for service and API tests.
# They stand in for ORM rows and the async session so tests never need a database.

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4


def make_session() -> MagicMock:
    """AsyncSession stand-in: awaitable commit/rollback/execute, sync add."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    return session


def make_user(**overrides) -> SimpleNamespace:
    now = datetime.now(timezone.utc)
    values = dict(
        id=uuid4(),
        email="owner@example.com",
        full_name="owner",
        role="business",
        password_hash=None,
        magic_link_nonce=None,
        email_verified=False,
        is_active=True,
        last_seen_at=None,
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def term(name: str) -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), name=name)


def make_agency(**overrides) -> SimpleNamespace:
    values = dict(
        id=uuid4(),
        owner_user_id=uuid4(),
        name="Neural Forge",
        description=None,
        case_studies=None,
        certifications_awards=None,
        contact_email="hello@neuralforge.example.com",
        contact_phone=None,
        logo_url=None,
        logo_path=None,
        location_city=None,
        location_country=None,
        employee_range=None,
        rating_avg=None,
        review_count=0,
        status="approved",
        services=[],
        industries=[],
        technologies=[],
    )
    values.update(overrides)
    return SimpleNamespace(**values)

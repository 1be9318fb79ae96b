"""
Tests for registration, sign-in by password and magic link, and the
caller's own account.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from kombu.exceptions import OperationalError as BrokerError

from app.core.exceptions import (
    BadRequestException,
    EmailAlreadyExistsException,
    InvalidCredentialsException,
    InvalidMagicLinkException,
    InvalidTokenException,
    ServiceUnavailableException,
)
from app.core.security import (
    create_access_token,
    create_magic_link_token,
    create_refresh_token,
    decode_token,
)
from app.services import auth_service as auth_module
from app.services.auth_service import MAGIC_LINK_SENT, AuthService, magic_link_url
from app.services.user_service import UserService
from app.workers import tasks

from tests.support import make_session, make_user


@pytest.fixture
def auth(monkeypatch):
    monkeypatch.setattr(auth_module, "hash_password", lambda password: f"hashed:{password}")
    monkeypatch.setattr(
        auth_module,
        "verify_password",
        lambda plain, hashed: hashed == f"hashed:{plain}",
    )
    svc = AuthService()
    svc.user_repo = MagicMock()
    for name in ("email_exists", "create", "get_active_by_email", "get_active_by_id"):
        setattr(svc.user_repo, name, AsyncMock())
    return svc


@pytest.fixture
def outbox(monkeypatch):
    task = SimpleNamespace(delay=MagicMock())
    monkeypatch.setattr(tasks, "send_magic_link_email", task)
    return task


class TestRegister:
    @pytest.mark.asyncio
    async def test_new_account(self, auth):
        user = make_user(email="new@example.com")
        auth.user_repo.email_exists.return_value = False
        auth.user_repo.create.return_value = user

        tokens = await auth.register(
            make_session(), email="New@Example.com", password="password123", role="agency"
        )

        values = auth.user_repo.create.await_args.kwargs
        assert values["email"] == "new@example.com"
        assert values["full_name"] == "new"
        assert values["role"] == "agency"
        assert values["password_hash"] == "hashed:password123"
        assert decode_token(tokens.access_token)["sub"] == str(user.id)
        assert tokens.token_type == "bearer"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth):
        auth.user_repo.email_exists.return_value = True
        with pytest.raises(EmailAlreadyExistsException):
            await auth.register(
                make_session(), email="a@example.com", password="password123", role="business"
            )
        auth.user_repo.create.assert_not_awaited()


class TestLogin:
    @pytest.mark.asyncio
    async def test_correct_password(self, auth):
        user = make_user(password_hash="hashed:password123")
        auth.user_repo.get_active_by_email.return_value = user

        tokens = await auth.login(make_session(), email=user.email, password="password123")

        assert tokens.access_token
        assert user.last_seen_at is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth):
        auth.user_repo.get_active_by_email.return_value = make_user(password_hash="hashed:other")
        with pytest.raises(InvalidCredentialsException):
            await auth.login(make_session(), email="a@example.com", password="password123")

    @pytest.mark.asyncio
    async def test_magic_link_only_account(self, auth):
        auth.user_repo.get_active_by_email.return_value = make_user(password_hash=None)
        with pytest.raises(InvalidCredentialsException):
            await auth.login(make_session(), email="a@example.com", password="password123")

    @pytest.mark.asyncio
    async def test_unknown_email(self, auth):
        auth.user_repo.get_active_by_email.return_value = None
        with pytest.raises(InvalidCredentialsException):
            await auth.login(make_session(), email="a@example.com", password="password123")


class TestRequestMagicLink:
    @pytest.mark.asyncio
    async def test_sends_link(self, auth, outbox):
        user = make_user()
        auth.user_repo.get_active_by_email.return_value = user
        db = make_session()

        message = await auth.request_magic_link(db, email=user.email)

        assert message == MAGIC_LINK_SENT
        assert user.magic_link_nonce
        db.commit.assert_awaited_once()
        email, link = outbox.delay.call_args.args
        assert email == user.email
        assert link.startswith("http://frontend.test/auth/verify?token=")

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self, auth, outbox):
        auth.user_repo.get_active_by_email.return_value = None

        assert await auth.request_magic_link(make_session(), email="x@example.com") == MAGIC_LINK_SENT
        outbox.delay.assert_not_called()

    @pytest.mark.asyncio
    async def test_broker_down(self, auth, outbox):
        auth.user_repo.get_active_by_email.return_value = make_user()
        outbox.delay.side_effect = BrokerError("connection refused")

        with pytest.raises(ServiceUnavailableException) as exc_info:
            await auth.request_magic_link(make_session(), email="a@example.com")
        assert exc_info.value.message == "Failed to send magic link. Please try again."

    @pytest.mark.asyncio
    async def test_new_request_replaces_nonce(self, auth, outbox):
        user = make_user(magic_link_nonce="old")
        auth.user_repo.get_active_by_email.return_value = user

        await auth.request_magic_link(make_session(), email=user.email)
        assert user.magic_link_nonce != "old"


class TestVerifyMagicLink:
    @pytest.mark.asyncio
    async def test_valid_link(self, auth):
        user = make_user(magic_link_nonce="n1")
        auth.user_repo.get_active_by_id.return_value = user

        tokens = await auth.verify_magic_link(
            make_session(), token=create_magic_link_token(str(user.id), "n1")
        )

        assert decode_token(tokens.access_token)["sub"] == str(user.id)
        assert user.email_verified is True
        assert user.magic_link_nonce != "n1"
        assert auth.user_repo.get_active_by_id.await_args.args[1] == user.id

    @pytest.mark.asyncio
    async def test_link_works_once(self, auth):
        user = make_user(magic_link_nonce="n1")
        auth.user_repo.get_active_by_id.return_value = user
        token = create_magic_link_token(str(user.id), "n1")

        await auth.verify_magic_link(make_session(), token=token)
        with pytest.raises(InvalidMagicLinkException):
            await auth.verify_magic_link(make_session(), token=token)

    @pytest.mark.asyncio
    async def test_access_token_is_not_a_magic_link(self, auth):
        with pytest.raises(InvalidMagicLinkException):
            await auth.verify_magic_link(
                make_session(), token=create_access_token({"sub": str(uuid4())})
            )

    @pytest.mark.asyncio
    async def test_malformed_subject(self, auth):
        with pytest.raises(InvalidMagicLinkException):
            await auth.verify_magic_link(
                make_session(), token=create_magic_link_token("not-a-uuid", "n1")
            )

    @pytest.mark.asyncio
    async def test_garbage(self, auth):
        with pytest.raises(InvalidMagicLinkException):
            await auth.verify_magic_link(make_session(), token="garbage")


class TestRefresh:
    @pytest.mark.asyncio
    async def test_new_tokens(self, auth):
        user = make_user()
        auth.user_repo.get_active_by_id.return_value = user

        tokens = await auth.refresh(
            make_session(), refresh_token=create_refresh_token({"sub": str(user.id)})
        )
        assert decode_token(tokens.refresh_token)["type"] == "refresh"

    @pytest.mark.asyncio
    async def test_access_token_rejected(self, auth):
        with pytest.raises(InvalidTokenException):
            await auth.refresh(
                make_session(), refresh_token=create_access_token({"sub": str(uuid4())})
            )

    @pytest.mark.asyncio
    async def test_inactive_user(self, auth):
        auth.user_repo.get_active_by_id.return_value = None
        with pytest.raises(InvalidTokenException):
            await auth.refresh(
                make_session(), refresh_token=create_refresh_token({"sub": str(uuid4())})
            )


def test_magic_link_url_escapes_token():
    assert magic_link_url("a+b") == "http://frontend.test/auth/verify?token=a%2Bb"


# ── Account ──────────────────────────────────────────────────────────────────

@pytest.fixture
def users(monkeypatch):
    from app.services import user_service as user_module

    monkeypatch.setattr(user_module, "hash_password", lambda password: f"hashed:{password}")
    monkeypatch.setattr(
        user_module,
        "verify_password",
        lambda plain, hashed: hashed == f"hashed:{plain}",
    )
    svc = UserService()
    svc.user_repo = MagicMock(update=AsyncMock(side_effect=lambda db, user, **values: user))
    return svc


class TestAccount:
    def test_profile_reports_password(self, users):
        assert users.get_profile(make_user(password_hash="hashed:x")).has_password is True
        assert users.get_profile(make_user()).has_password is False

    @pytest.mark.asyncio
    async def test_update_name(self, users):
        db = make_session()
        user = make_user()

        await users.update_profile(db, user, full_name="Dana")

        assert users.user_repo.update.await_args.kwargs == {"full_name": "Dana"}
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_nothing_to_update(self, users):
        await users.update_profile(make_session(), make_user())
        users.user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_change_password(self, users):
        user = make_user(password_hash="hashed:old-password")

        await users.change_password(
            make_session(), user, current_password="old-password", new_password="new-password"
        )
        assert users.user_repo.update.await_args.kwargs == {"password_hash": "hashed:new-password"}

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, users):
        user = make_user(password_hash="hashed:old-password")
        with pytest.raises(BadRequestException):
            await users.change_password(
                make_session(), user, current_password="nope", new_password="new-password"
            )

    @pytest.mark.asyncio
    async def test_first_password_for_magic_link_account(self, users):
        await users.change_password(
            make_session(), make_user(), current_password="", new_password="new-password"
        )
        users.user_repo.update.assert_awaited_once()

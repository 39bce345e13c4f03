"""
VendorHub Backend — Vendor Service Tests
==========================================

What:  Registration, login and vendor lookups against a real (SQLite) session.
Why:   Email uniqueness must hold through the database constraint alone, and
       login must fail identically for unknown emails and wrong passwords.
"""

import asyncio
import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from vendorhub.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidIdError,
    NotFoundError,
)
from vendorhub.models import Vendor
from vendorhub.services.security import PasswordHasher
from vendorhub.services.vendor_service import VendorService, parse_id


@pytest.fixture
def service(token_service):
    return VendorService(hasher=PasswordHasher(rounds=4), tokens=token_service)


class TestParseId:

    def test_valid(self):
        raw = uuid.uuid4()
        assert parse_id(str(raw), "vendor") == raw
        assert parse_id(raw, "vendor") == raw

    def test_malformed(self):
        with pytest.raises(InvalidIdError) as exc_info:
            parse_id("12345", "firm")
        assert exc_info.value.status_code == 400


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_stores_hash(self, service, db_session):
        vendor = await service.register(db_session, "Asha", "asha@example.com", "pw-123")
        await db_session.commit()

        assert vendor.id is not None
        assert vendor.password != "pw-123"
        assert service.hasher.verify("pw-123", vendor.password)
        assert vendor.firms == []

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, db_session):
        await service.register(db_session, "Asha", "asha@example.com", "pw-123")
        await db_session.commit()

        with pytest.raises(DuplicateEmailError) as exc_info:
            await service.register(db_session, "Imposter", "asha@example.com", "other")
        assert exc_info.value.message == "Email already taken"

        count = await db_session.scalar(
            select(func.count()).select_from(Vendor).where(Vendor.email == "asha@example.com")
        )
        assert count == 1


    @pytest.mark.asyncio
    async def test_concurrent_registrations_create_one_vendor(self, service, db_session_factory):
        async def attempt(user_name):
            async with db_session_factory() as session:
                try:
                    await service.register(session, user_name, "race@example.com", "pw")
                    await session.commit()
                    return "ok"
                except DuplicateEmailError:
                    return "duplicate"

        outcomes = await asyncio.gather(attempt("First"), attempt("Second"))

        assert sorted(outcomes) == ["duplicate", "ok"]
        async with db_session_factory() as session:
            count = await session.scalar(
                select(func.count()).select_from(Vendor).where(Vendor.email == "race@example.com")
            )
        assert count == 1


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_issues_token_for_vendor(self, service, db_session):
        vendor = await service.register(db_session, "Asha", "asha@example.com", "pw-123")
        await db_session.commit()

        result = await service.login(db_session, "asha@example.com", "pw-123")

        assert result.success == "Login successful"
        assert result.vendor_id == vendor.id
        assert service.tokens.verify(result.token).vendor_id == vendor.id

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, service, db_session):
        await service.register(db_session, "Asha", "asha@example.com", "pw-123")
        await db_session.commit()

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await service.login(db_session, "asha@example.com", "nope")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await service.login(db_session, "ghost@example.com", "pw-123")

        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.error_code == unknown_email.value.error_code

    @pytest.mark.asyncio
    async def test_unknown_email_still_verifies_a_hash(self, service, mock_db_session):
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
        service.hasher.verify_async = AsyncMock(return_value=False)

        with pytest.raises(InvalidCredentialsError):
            await service.login(mock_db_session, "ghost@example.com", "pw")
        service.hasher.verify_async.assert_awaited_once()


class TestLookup:

    @pytest.mark.asyncio
    async def test_get_vendor_without_firms(self, service, db_session):
        vendor = await service.register(db_session, "Asha", "asha@example.com", "pw-123")
        await db_session.commit()

        result = await service.get_vendor(db_session, str(vendor.id))

        assert result.vendor_id == vendor.id
        assert result.vendor_firm_id is None
        assert result.vendor.firm == []

    @pytest.mark.asyncio
    async def test_get_vendor_not_found(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.get_vendor(db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_list_vendors_oldest_first(self, service, db_session):
        await service.register(db_session, "First", "first@example.com", "pw")
        await db_session.commit()
        await service.register(db_session, "Second", "second@example.com", "pw")
        await db_session.commit()

        result = await service.list_vendors(db_session)

        assert [v.user_name for v in result.vendor] == ["First", "Second"]

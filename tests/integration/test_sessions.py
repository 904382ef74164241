"""Integration tests for session issue, resolution and revocation."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import SessionInvalid
from managerh.core.security import create_session_token
from managerh.models import Company, RevokedSession
from managerh.services.session_service import SessionService

pytestmark = pytest.mark.integration


class TestSessionLifecycle:

    async def test_open_and_resolve(self, db: AsyncSession, company_a: Company):
        service = SessionService(db)
        token, opened = service.open_session(company_a)

        resolved = await service.resolve(token)

        assert resolved.company_id == company_a.id
        assert resolved.company_name == "Company A"
        assert resolved.jti == opened.jti

    async def test_closed_session_no_longer_resolves(self, db: AsyncSession, company_a: Company):
        service = SessionService(db)
        token, context = service.open_session(company_a)

        await service.close_session(context)

        with pytest.raises(SessionInvalid):
            await service.resolve(token)

    async def test_close_is_idempotent(self, db: AsyncSession, company_a: Company):
        service = SessionService(db)
        _, context = service.open_session(company_a)

        await service.close_session(context)
        await service.close_session(context)

        result = await db.execute(select(RevokedSession).where(RevokedSession.jti == context.jti))
        assert len(result.scalars().all()) == 1

    async def test_closing_one_session_keeps_the_other(
        self, db: AsyncSession, company_a: Company
    ):
        service = SessionService(db)
        first_token, first = service.open_session(company_a)
        second_token, _ = service.open_session(company_a)

        await service.close_session(first)

        with pytest.raises(SessionInvalid):
            await service.resolve(first_token)
        assert (await service.resolve(second_token)).company_id == company_a.id

    async def test_expired_revocations_are_purged(self, db: AsyncSession):
        db.add(
            RevokedSession(
                jti="stale",
                expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
            )
        )
        await db.flush()

        removed = await SessionService(db).purge_expired()

        assert removed == 1
        assert not await SessionService(db).is_revoked("stale")


class TestRejectedTokens:

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    async def test_malformed(self, db: AsyncSession, token: str):
        with pytest.raises(SessionInvalid) as exc_info:
            await SessionService(db).resolve(token)
        assert exc_info.value.code == "session_invalid"

    async def test_expired(self, db: AsyncSession):
        token, _, _ = create_session_token(
            "company-1", "Acme SAS", expires_delta=timedelta(minutes=-5)
        )
        with pytest.raises(SessionInvalid):
            await SessionService(db).resolve(token)

"""
services/session_service.py
---------------------------
Identity context for authenticated requests.

A session is a signed token carrying the company id and name; resolving it
needs no server-side state except the revocation list consulted for
explicitly closed sessions. The resolved SessionContext is an immutable
per-request value, never shared between requests.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from jose import JWTError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import SessionInvalid, StorageUnavailable
from managerh.core.logging import get_logger
from managerh.core.security import create_session_token, decode_session_token
from managerh.models.company import Company
from managerh.models.revoked_session import RevokedSession

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionContext:
    company_id: str
    company_name: str
    jti: str
    expires_at: datetime


class SessionService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def open_session(self, company: Company) -> tuple[str, SessionContext]:
        token, jti, expires_at = create_session_token(company.id, company.name)
        logger.info("Session opened", company_id=company.id)
        return token, SessionContext(
            company_id=company.id,
            company_name=company.name,
            jti=jti,
            expires_at=expires_at,
        )

    async def resolve(self, token: str) -> SessionContext:
        """
        Turn a bearer token into a SessionContext.
        Raises SessionInvalid if the token is malformed, expired, or revoked.
        """
        try:
            payload = decode_session_token(token)
        except JWTError as exc:
            logger.warning("Session token rejected", error=str(exc))
            raise SessionInvalid()

        company_id = payload.get("sub")
        jti = payload.get("jti")
        exp = payload.get("exp")
        if not company_id or not jti or exp is None:
            raise SessionInvalid()

        if await self.is_revoked(jti):
            logger.info("Revoked session presented", company_id=company_id)
            raise SessionInvalid()

        return SessionContext(
            company_id=company_id,
            company_name=payload.get("name", ""),
            jti=jti,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )

    async def is_revoked(self, jti: str) -> bool:
        try:
            result = await self.db.execute(
                select(RevokedSession.id).where(RevokedSession.jti == jti)
            )
        except SQLAlchemyError as exc:
            logger.error("Revocation lookup failed", error=type(exc).__name__, exc_info=True)
            raise StorageUnavailable() from exc
        return result.first() is not None

    async def close_session(self, context: SessionContext) -> None:
        """Explicitly terminate a session before its natural expiry."""
        if await self.is_revoked(context.jti):
            return
        self.db.add(RevokedSession(jti=context.jti, expires_at=context.expires_at))
        try:
            await self.purge_expired()
            await self.db.flush()
        except IntegrityError:
            # Same token logged out twice concurrently; already revoked
            await self.db.rollback()
        except SQLAlchemyError as exc:
            logger.error("Session revocation failed", error=type(exc).__name__, exc_info=True)
            raise StorageUnavailable() from exc
        logger.info("Session closed", company_id=context.company_id)

    async def purge_expired(self) -> int:
        result = await self.db.execute(
            delete(RevokedSession)
            .where(RevokedSession.expires_at < datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

"""
services/credential_service.py
------------------------------
Company registration and authentication.

Service layer is responsible for:
  - Enforcing business rules (SIRET format, password strength, unique SIRET)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)

Authentication never reveals whether the SIRET or the password was wrong:
both cases raise the same AuthFailed, and an unknown SIRET still costs one
bcrypt verification so response time does not leak it either.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import AuthFailed, DuplicateIdentifier, StorageUnavailable
from managerh.core.logging import get_logger
from managerh.core.security import dummy_verify, hash_password, verify_password
from managerh.core.validators import validate_password_strength, validate_siret
from managerh.models.company import Company
from managerh.schemas.company import CompanyRegister

logger = get_logger(__name__)


class CredentialService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_company_by_siret(self, siret: str) -> Optional[Company]:
        try:
            result = await self.db.execute(select(Company).where(Company.siret == siret))
        except SQLAlchemyError as exc:
            logger.error("Company lookup failed", error=type(exc).__name__, exc_info=True)
            raise StorageUnavailable() from exc
        return result.scalar_one_or_none()

    async def get_company(self, company_id: str) -> Optional[Company]:
        try:
            return await self.db.get(Company, company_id)
        except SQLAlchemyError as exc:
            logger.error("Company lookup failed", error=type(exc).__name__, exc_info=True)
            raise StorageUnavailable() from exc

    async def register_company(self, data: CompanyRegister) -> Company:
        """
        Create a new company.
        Raises ValidationError on a malformed SIRET / weak password and
        DuplicateIdentifier if the SIRET is already registered.
        """
        validate_siret(data.siret)
        validate_password_strength(data.password)

        if await self.find_company_by_siret(data.siret) is not None:
            raise DuplicateIdentifier(data.siret)

        company = Company(
            siret=data.siret,
            name=data.name,
            director_name=data.director_name,
            hashed_password=hash_password(data.password),
        )
        self.db.add(company)
        try:
            await self.db.flush()  # Trigger DB constraints before commit
        except IntegrityError:
            # Concurrent registration with the same SIRET won the race
            await self.db.rollback()
            raise DuplicateIdentifier(data.siret)
        except SQLAlchemyError as exc:
            logger.error("Company insert failed", error=type(exc).__name__, exc_info=True)
            raise StorageUnavailable() from exc

        await self.db.refresh(company)
        logger.info("Company registered", company_id=company.id)
        return company

    async def authenticate(self, siret: str, password: str) -> Company:
        """
        Verify credentials and return the Company.
        Raises AuthFailed for unknown SIRET and for wrong password alike.
        """
        company = await self.find_company_by_siret(siret)
        if company is None:
            dummy_verify()
            logger.info("Login failed")
            raise AuthFailed()
        if not verify_password(password, company.hashed_password):
            logger.info("Login failed")
            raise AuthFailed()
        logger.info("Login succeeded", company_id=company.id)
        return company

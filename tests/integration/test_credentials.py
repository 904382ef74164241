"""Integration tests for company registration and authentication."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import AuthFailed, DuplicateIdentifier, ValidationError
from managerh.core.security import verify_password
from managerh.schemas.company import CompanyRegister
from managerh.services.credential_service import CredentialService

pytestmark = pytest.mark.integration


def registration(siret: str = "12345678901234", password: str = "Password1", name: str = "Acme SAS"):
    return CompanyRegister(name=name, siret=siret, password=password)


class TestRegistration:

    async def test_register_stores_hash_not_password(self, db: AsyncSession):
        service = CredentialService(db)
        company = await service.register_company(registration())

        assert company.id is not None
        assert company.siret == "12345678901234"
        assert company.hashed_password != "Password1"
        assert verify_password("Password1", company.hashed_password)

    async def test_duplicate_siret_rejected_and_first_unchanged(self, db: AsyncSession):
        service = CredentialService(db)
        first = await service.register_company(registration(name="First"))
        first_hash = first.hashed_password

        with pytest.raises(DuplicateIdentifier) as exc_info:
            await service.register_company(
                registration(name="Second", password="Other1234")
            )
        assert exc_info.value.code == "duplicate_siret"

        stored = await service.find_company_by_siret("12345678901234")
        assert stored.id == first.id
        assert stored.name == "First"
        assert stored.hashed_password == first_hash

    async def test_invalid_siret_rejected_before_storage(self, db: AsyncSession):
        service = CredentialService(db)
        with pytest.raises(ValidationError) as exc_info:
            await service.register_company(registration(siret="123"))
        assert exc_info.value.code == "siret.format"
        assert await service.find_company_by_siret("123") is None

    async def test_weak_password_rejected(self, db: AsyncSession):
        service = CredentialService(db)
        with pytest.raises(ValidationError) as exc_info:
            await service.register_company(registration(password="password"))
        assert exc_info.value.code == "password.missing_digit"


class TestAuthenticate:

    async def test_valid_credentials(self, db: AsyncSession):
        service = CredentialService(db)
        company = await service.register_company(registration())

        authenticated = await service.authenticate("12345678901234", "Password1")
        assert authenticated.id == company.id

    async def test_unknown_siret_and_wrong_password_are_indistinguishable(
        self, db: AsyncSession
    ):
        service = CredentialService(db)
        await service.register_company(registration())

        with pytest.raises(AuthFailed) as unknown:
            await service.authenticate("00000000000000", "anything")
        with pytest.raises(AuthFailed) as wrong:
            await service.authenticate("12345678901234", "wrongSecret1")

        assert unknown.value.code == wrong.value.code == "auth_failed"
        assert unknown.value.message == wrong.value.message
        assert unknown.value.details == wrong.value.details

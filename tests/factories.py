"""Helpers that persist test companies, employees and computers."""

from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.security import hash_password
from managerh.models import Company, Computer, Employee

DEFAULT_PASSWORD = "Password1"


async def make_company(db: AsyncSession, siret: str, name: str) -> Company:
    company = Company(siret=siret, name=name, hashed_password=hash_password(DEFAULT_PASSWORD))
    db.add(company)
    await db.flush()
    return company


async def make_employee(
    db: AsyncSession,
    company: Company,
    last_name: str = "Martin",
    first_name: str = "Alice",
) -> Employee:
    employee = Employee(
        last_name=last_name,
        first_name=first_name,
        email=f"{first_name.lower()}.{last_name.lower()}@example.com",
        hashed_password="not-a-real-hash",
        company_id=company.id,
    )
    db.add(employee)
    await db.flush()
    return employee


async def make_computer(
    db: AsyncSession,
    company: Company,
    mac_address: str = "AA:BB:CC:DD:EE:01",
) -> Computer:
    computer = Computer(mac_address=mac_address, status="available", company_id=company.id)
    db.add(computer)
    await db.flush()
    return computer

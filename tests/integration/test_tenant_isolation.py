"""Integration tests for tenant isolation in the repositories.

A row owned by one company must be invisible to every other company, for
reads and for writes, and the failure must look exactly like "not found".
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import NotFound
from managerh.models import Company
from managerh.services.assignment_service import AssignmentService
from managerh.services.repository import ComputerRepository, EmployeeRepository
from tests.factories import make_computer, make_employee

pytestmark = pytest.mark.integration


class TestTenantIsolation:

    async def test_get_by_id_is_tenant_scoped(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        employee = await make_employee(db, company_a)
        computer = await make_computer(db, company_a)

        employees = EmployeeRepository(db)
        computers = ComputerRepository(db)

        assert (await employees.get_by_id_for_tenant(employee.id, company_a.id)).id == employee.id
        assert await employees.get_by_id_for_tenant(employee.id, company_b.id) is None
        assert (await computers.get_by_id_for_tenant(computer.id, company_a.id)).id == computer.id
        assert await computers.get_by_id_for_tenant(computer.id, company_b.id) is None

    async def test_listing_is_tenant_scoped_and_sorted(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        await make_employee(db, company_a, last_name="Zola", first_name="Emile")
        await make_employee(db, company_a, last_name="Balzac", first_name="Honore")
        await make_employee(db, company_b, last_name="Hugo", first_name="Victor")
        await make_computer(db, company_a, "CC:00:00:00:00:01")
        await make_computer(db, company_a, "AA:00:00:00:00:01")
        await make_computer(db, company_b, "BB:00:00:00:00:01")

        employees = await EmployeeRepository(db).list_by_tenant(company_a.id)
        computers = await ComputerRepository(db).list_by_tenant(company_a.id)

        assert [e.last_name for e in employees] == ["Balzac", "Zola"]
        assert [c.mac_address for c in computers] == ["AA:00:00:00:00:01", "CC:00:00:00:00:01"]

    async def test_update_from_other_tenant_is_not_found(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        employee = await make_employee(db, company_a)
        repo = EmployeeRepository(db)

        with pytest.raises(NotFound) as exc_info:
            await repo.update_for_tenant(employee.id, {"first_name": "Mallory"}, company_b.id)
        assert exc_info.value.code == "employee_not_found"

        stored = await repo.get_by_id_for_tenant(employee.id, company_a.id)
        assert stored.first_name == "Alice"

    async def test_delete_from_other_tenant_is_not_found(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        computer = await make_computer(db, company_a)
        engine = AssignmentService(db)

        with pytest.raises(NotFound):
            await engine.delete_computer(computer.id, company_b.id)
        with pytest.raises(NotFound):
            await engine.delete_employee(computer.id, company_b.id)

        assert await ComputerRepository(db).get_by_id_for_tenant(computer.id, company_a.id)

    async def test_create_ignores_company_id_in_payload(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        computer = await ComputerRepository(db).create(
            {"mac_address": "AA:BB:CC:DD:EE:FF", "company_id": company_b.id},
            company_a.id,
        )
        assert computer.company_id == company_a.id

    async def test_cannot_assign_employee_of_another_tenant(
        self, db: AsyncSession, company_a: Company, company_b: Company
    ):
        computer = await make_computer(db, company_a)
        outsider = await make_employee(db, company_b)

        with pytest.raises(NotFound) as exc_info:
            await AssignmentService(db).reassign_computer(computer.id, outsider.id, company_a.id)
        assert exc_info.value.code == "employee_not_found"
        assert computer.employee_id is None

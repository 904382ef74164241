"""
services/employee_service.py
----------------------------
Business logic for employee records.

All queries are scoped by the company id taken from the caller's session
(never from the request body). Deletion goes through AssignmentService so
the employee's computer is unassigned in the same transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.logging import get_logger
from managerh.core.security import hash_password
from managerh.core.validators import validate_age, validate_password_strength
from managerh.models.employee import Employee
from managerh.schemas.employee import EmployeeCreate, EmployeeUpdate
from managerh.services.assignment_service import AssignmentService
from managerh.services.repository import EmployeeRepository

logger = get_logger(__name__)


class EmployeeService:

    def __init__(self, db: AsyncSession) -> None:
        self.repo = EmployeeRepository(db)
        self.assignments = AssignmentService(db)

    async def list_employees(self, tenant_id: str) -> list[Employee]:
        return await self.repo.list_by_tenant(tenant_id)

    async def get_employee(self, employee_id: str, tenant_id: str) -> Employee:
        return await self.repo.get_or_404(employee_id, tenant_id)

    async def create_employee(self, data: EmployeeCreate, tenant_id: str) -> Employee:
        validate_age(data.age)
        validate_password_strength(data.password)

        employee = await self.repo.create(
            {
                "last_name": data.last_name,
                "first_name": data.first_name,
                "email": data.email.lower(),
                "age": data.age,
                "gender": data.gender or None,
                "hashed_password": hash_password(data.password),
            },
            tenant_id,
        )
        logger.info("Employee created", employee_id=employee.id, tenant_id=tenant_id)
        return employee

    async def update_employee(
        self, employee_id: str, data: EmployeeUpdate, tenant_id: str
    ) -> Employee:
        validate_age(data.age)
        values = {
            "last_name": data.last_name,
            "first_name": data.first_name,
            "email": data.email.lower(),
            "age": data.age,
            "gender": data.gender or None,
        }
        # Empty password means "keep the current one"
        if data.password:
            validate_password_strength(data.password)
            values["hashed_password"] = hash_password(data.password)

        employee = await self.repo.update_for_tenant(employee_id, values, tenant_id)
        logger.info("Employee updated", employee_id=employee.id, tenant_id=tenant_id)
        return employee

    async def delete_employee(self, employee_id: str, tenant_id: str) -> Employee:
        return await self.assignments.delete_employee(employee_id, tenant_id)

"""
services/assignment_service.py
------------------------------
Keeps the employee ↔ computer relationship one-to-one within a company.

Rules enforced here:
  - An employee is the holder of at most one computer per company.
  - Unassigning always succeeds and is idempotent.
  - Re-assigning the current holder without an explicit status changes
    nothing, status included.
  - A computer whose holder is cleared cannot stay 'assigned'; it becomes
    'available'.
  - Deleting an employee first clears the holder of their computer, then
    deletes the employee, in the same transaction.

Concurrency:
  Two requests may both pass the "is this employee free?" check before
  either writes. The target computer row is locked (SELECT ... FOR UPDATE on
  PostgreSQL), and the uq_computers_company_holder constraint rejects the
  second write; that IntegrityError is translated into AlreadyAssigned after
  rolling the session back. Exactly one of two racing calls succeeds.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import AlreadyAssigned
from managerh.core.logging import get_logger
from managerh.core.validators import validate_status_holder
from managerh.models.computer import Computer, ComputerStatus
from managerh.models.employee import Employee
from managerh.services.repository import ComputerRepository, EmployeeRepository

logger = get_logger(__name__)


class AssignmentService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.computers = ComputerRepository(db)
        self.employees = EmployeeRepository(db)

    @staticmethod
    def _clear_holder(computer: Computer) -> None:
        computer.employee_id = None
        if computer.status == ComputerStatus.assigned.value:
            computer.status = ComputerStatus.available.value

    async def reassign_computer(
        self,
        computer_id: str,
        new_holder_id: Optional[str],
        tenant_id: str,
        status: Optional[ComputerStatus] = None,
    ) -> Computer:
        """
        Point computer_id at new_holder_id (or at nobody when None).

        status, when given, is written in the same flush as the holder so the
        'assigned implies holder' check constraint never sees a half-applied
        change.

        Raises:
            ValidationError: status 'assigned' requested without a holder.
            NotFound: computer (or new holder) not in this company.
            AlreadyAssigned: another computer of the company holds new_holder_id.
        """
        if status is not None:
            validate_status_holder(status.value, new_holder_id)

        computer = await self.computers.get_or_404(computer_id, tenant_id, for_update=True)
        previous_holder = computer.employee_id

        if new_holder_id is None:
            self._clear_holder(computer)
        elif new_holder_id != previous_holder:
            # The holder must belong to the same company
            await self.employees.get_or_404(new_holder_id, tenant_id)

            other = await self.computers.find_by_holder(
                new_holder_id, tenant_id, exclude_id=computer.id
            )
            if other is not None:
                logger.info(
                    "Assignment rejected: employee already holds a computer",
                    computer_id=computer.id,
                    employee_id=new_holder_id,
                    held_computer_id=other.id,
                    tenant_id=tenant_id,
                )
                raise AlreadyAssigned(new_holder_id)
            computer.employee_id = new_holder_id

        holder_changed = computer.employee_id != previous_holder
        if status is not None:
            computer.status = status.value
        elif (
            holder_changed
            and computer.employee_id is not None
            and computer.status == ComputerStatus.available.value
        ):
            computer.status = ComputerStatus.assigned.value

        try:
            await self.computers.flush()
        except IntegrityError:
            # Lost a race: another transaction gave this employee a computer
            # between our check and our write.
            await self.db.rollback()
            logger.warning(
                "Assignment conflict detected by storage constraint",
                computer_id=computer_id,
                employee_id=new_holder_id,
                tenant_id=tenant_id,
            )
            raise AlreadyAssigned(new_holder_id or "")

        computer = await self.computers.reload(computer_id, tenant_id)
        if holder_changed:
            logger.info(
                "Computer reassigned",
                computer_id=computer.id,
                previous_holder=previous_holder,
                holder=computer.employee_id,
                tenant_id=tenant_id,
            )
        return computer

    async def delete_employee(self, employee_id: str, tenant_id: str) -> Employee:
        """
        Delete an employee, clearing the holder of their computer first.
        Both writes belong to the caller's transaction: either both are
        committed or neither is.
        """
        employee = await self.employees.get_or_404(employee_id, tenant_id)

        held = await self.computers.find_by_holder(employee.id, tenant_id)
        if held is not None:
            self._clear_holder(held)
            await self.computers.flush()
            logger.info(
                "Computer unassigned before employee deletion",
                computer_id=held.id,
                employee_id=employee.id,
                tenant_id=tenant_id,
            )

        await self.db.delete(employee)
        await self.employees.flush()
        logger.info("Employee deleted", employee_id=employee.id, tenant_id=tenant_id)
        return employee

    async def delete_computer(self, computer_id: str, tenant_id: str) -> Computer:
        """No cascade: deleting a computer cannot leave an employee dangling."""
        computer = await self.computers.delete_for_tenant(computer_id, tenant_id)
        logger.info("Computer deleted", computer_id=computer.id, tenant_id=tenant_id)
        return computer

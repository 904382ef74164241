"""
services/computer_service.py
----------------------------
Business logic for computers.

Edge validation (MAC format, status/holder coherence) happens here, before
any repository call. Holder changes are delegated to AssignmentService,
which owns the one-computer-per-employee rule.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.logging import get_logger
from managerh.core.validators import validate_mac_address, validate_status_holder
from managerh.models.computer import Computer, ComputerStatus
from managerh.schemas.computer import ComputerCreate, ComputerUpdate
from managerh.services.assignment_service import AssignmentService
from managerh.services.repository import ComputerRepository

logger = get_logger(__name__)


class ComputerService:

    def __init__(self, db: AsyncSession) -> None:
        self.repo = ComputerRepository(db)
        self.assignments = AssignmentService(db)

    async def list_computers(self, tenant_id: str) -> list[Computer]:
        return await self.repo.list_by_tenant(tenant_id)

    async def get_computer(self, computer_id: str, tenant_id: str) -> Computer:
        return await self.repo.get_or_404(computer_id, tenant_id)

    async def create_computer(self, data: ComputerCreate, tenant_id: str) -> Computer:
        mac_address = validate_mac_address(data.mac_address)
        computer = await self.repo.create(
            {"mac_address": mac_address, "status": ComputerStatus.available.value},
            tenant_id,
        )
        logger.info("Computer created", computer_id=computer.id, tenant_id=tenant_id)
        return computer

    async def update_computer(
        self, computer_id: str, data: ComputerUpdate, tenant_id: str
    ) -> Computer:
        """
        Edit MAC address, status and holder in one go.

        An employee_id left out of the request keeps the current holder;
        an explicit null or "" unassigns.
        """
        mac_address = validate_mac_address(data.mac_address)
        computer = await self.repo.get_or_404(computer_id, tenant_id)

        if "employee_id" in data.model_fields_set:
            holder_id = data.employee_id
        else:
            holder_id = computer.employee_id

        status: Optional[ComputerStatus] = None
        if data.status is not None:
            status = validate_status_holder(data.status, holder_id)

        await self.repo.update_for_tenant(computer.id, {"mac_address": mac_address}, tenant_id)
        return await self.assignments.reassign_computer(
            computer.id, holder_id, tenant_id, status=status
        )

    async def reassign(
        self, computer_id: str, employee_id: Optional[str], tenant_id: str
    ) -> Computer:
        return await self.assignments.reassign_computer(computer_id, employee_id, tenant_id)

    async def delete_computer(self, computer_id: str, tenant_id: str) -> Computer:
        return await self.assignments.delete_computer(computer_id, tenant_id)

"""
api/routes/dashboard.py
-----------------------
GET /dashboard — company name plus its employees and computers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from managerh.dependencies import (
    CurrentSession,
    get_computer_service,
    get_employee_service,
)
from managerh.schemas.computer import ComputerRead
from managerh.schemas.dashboard import DashboardRead
from managerh.schemas.employee import EmployeeRead
from managerh.services.computer_service import ComputerService
from managerh.services.employee_service import EmployeeService

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardRead, summary="Company overview")
async def dashboard(
    session: CurrentSession,
    employees: Annotated[EmployeeService, Depends(get_employee_service)],
    computers: Annotated[ComputerService, Depends(get_computer_service)],
) -> DashboardRead:
    return DashboardRead(
        company_name=session.company_name,
        employees=[
            EmployeeRead.model_validate(e)
            for e in await employees.list_employees(session.company_id)
        ],
        computers=[
            ComputerRead.model_validate(c)
            for c in await computers.list_computers(session.company_id)
        ],
    )

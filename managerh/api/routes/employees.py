"""
api/routes/employees.py
-----------------------
Employee endpoints, all scoped to the session's company.

GET    /employees       — List employees (sorted by name)
POST   /employees       — Create an employee
GET    /employees/{id}  — Read one employee
PUT    /employees/{id}  — Update an employee
DELETE /employees/{id}  — Delete an employee (their computer is unassigned)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from managerh.dependencies import CurrentSession, get_employee_service
from managerh.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from managerh.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])

Employees = Annotated[EmployeeService, Depends(get_employee_service)]


@router.get("", response_model=list[EmployeeRead], summary="List employees")
async def list_employees(session: CurrentSession, service: Employees) -> list[EmployeeRead]:
    employees = await service.list_employees(session.company_id)
    return [EmployeeRead.model_validate(e) for e in employees]


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
)
async def create_employee(
    body: EmployeeCreate, session: CurrentSession, service: Employees
) -> EmployeeRead:
    employee = await service.create_employee(body, session.company_id)
    return EmployeeRead.model_validate(employee)


@router.get("/{employee_id}", response_model=EmployeeRead, summary="Read an employee")
async def get_employee(
    employee_id: str, session: CurrentSession, service: Employees
) -> EmployeeRead:
    employee = await service.get_employee(employee_id, session.company_id)
    return EmployeeRead.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeRead, summary="Update an employee")
async def update_employee(
    employee_id: str, body: EmployeeUpdate, session: CurrentSession, service: Employees
) -> EmployeeRead:
    employee = await service.update_employee(employee_id, body, session.company_id)
    return EmployeeRead.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: str, session: CurrentSession, service: Employees
) -> Response:
    await service.delete_employee(employee_id, session.company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

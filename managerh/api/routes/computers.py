"""
api/routes/computers.py
-----------------------
Computer endpoints, all scoped to the session's company.

GET    /computers              — List computers (sorted by MAC address)
POST   /computers              — Register a computer
GET    /computers/{id}         — Read one computer
PUT    /computers/{id}         — Update MAC address, status and holder
PUT    /computers/{id}/holder  — Assign to an employee, or unassign with null
DELETE /computers/{id}         — Delete a computer
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from managerh.dependencies import CurrentSession, get_computer_service
from managerh.schemas.computer import (
    ComputerCreate,
    ComputerRead,
    ComputerUpdate,
    HolderUpdate,
)
from managerh.services.computer_service import ComputerService

router = APIRouter(prefix="/computers", tags=["Computers"])

Computers = Annotated[ComputerService, Depends(get_computer_service)]


@router.get("", response_model=list[ComputerRead], summary="List computers")
async def list_computers(session: CurrentSession, service: Computers) -> list[ComputerRead]:
    computers = await service.list_computers(session.company_id)
    return [ComputerRead.model_validate(c) for c in computers]


@router.post(
    "",
    response_model=ComputerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a computer",
)
async def create_computer(
    body: ComputerCreate, session: CurrentSession, service: Computers
) -> ComputerRead:
    computer = await service.create_computer(body, session.company_id)
    return ComputerRead.model_validate(computer)


@router.get("/{computer_id}", response_model=ComputerRead, summary="Read a computer")
async def get_computer(
    computer_id: str, session: CurrentSession, service: Computers
) -> ComputerRead:
    computer = await service.get_computer(computer_id, session.company_id)
    return ComputerRead.model_validate(computer)


@router.put("/{computer_id}", response_model=ComputerRead, summary="Update a computer")
async def update_computer(
    computer_id: str, body: ComputerUpdate, session: CurrentSession, service: Computers
) -> ComputerRead:
    """
    Fails with employee_already_assigned (409) if the chosen employee already
    holds another computer, and with employee_id.required_when_assigned (422)
    if status is 'assigned' without an employee.
    """
    computer = await service.update_computer(computer_id, body, session.company_id)
    return ComputerRead.model_validate(computer)


@router.put(
    "/{computer_id}/holder",
    response_model=ComputerRead,
    summary="Assign or unassign a computer",
)
async def reassign_computer(
    computer_id: str, body: HolderUpdate, session: CurrentSession, service: Computers
) -> ComputerRead:
    computer = await service.reassign(computer_id, body.employee_id, session.company_id)
    return ComputerRead.model_validate(computer)


@router.delete(
    "/{computer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a computer",
)
async def delete_computer(
    computer_id: str, session: CurrentSession, service: Computers
) -> Response:
    await service.delete_computer(computer_id, session.company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

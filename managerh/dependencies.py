"""
dependencies.py
---------------
FastAPI dependency injection functions for the identity context and services.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. SessionService.resolve validates the token and checks it was not revoked.
  3. get_current_session confirms the company still exists and returns an
     immutable SessionContext.

The company_id in the SessionContext is the only tenant id any service ever
receives; request bodies cannot choose the tenant.

Services are constructed per request around the request's database session.
There are no module-level service instances.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from managerh.core.errors import SessionInvalid
from managerh.core.logging import bind_request_context, get_logger
from managerh.db.session import get_db
from managerh.services.computer_service import ComputerService
from managerh.services.credential_service import CredentialService
from managerh.services.employee_service import EmployeeService
from managerh.services.session_service import SessionContext, SessionService

logger = get_logger(__name__)

# tokenUrl must match the login endpoint path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login", auto_error=False)

DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_credential_service(db: DBSession) -> CredentialService:
    return CredentialService(db)


def get_session_service(db: DBSession) -> SessionService:
    return SessionService(db)


def get_employee_service(db: DBSession) -> EmployeeService:
    return EmployeeService(db)


def get_computer_service(db: DBSession) -> ComputerService:
    return ComputerService(db)


async def get_current_session(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> SessionContext:
    """
    Resolve the bearer token into the caller's SessionContext.
    Raises SessionInvalid (401) if absent, invalid, revoked, or if the
    company no longer exists.
    """
    if not token:
        raise SessionInvalid()

    context = await sessions.resolve(token)
    bind_request_context(company_id=context.company_id)

    if await credentials.get_company(context.company_id) is None:
        logger.warning("Company from valid session not found", company_id=context.company_id)
        raise SessionInvalid()

    return context


CurrentSession = Annotated[SessionContext, Depends(get_current_session)]

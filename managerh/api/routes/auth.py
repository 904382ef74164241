"""
api/routes/auth.py
------------------
Company registration and session endpoints.

POST /register  — Register a new company (SIRET + password).
POST /login     — Exchange SIRET + password for a session token.
                  Accepts OAuth2 form data; "username" carries the SIRET.
POST /logout    — Terminate the current session.
GET  /me        — Return the current session's identity.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from managerh.core.config import settings
from managerh.dependencies import (
    CurrentSession,
    get_credential_service,
    get_session_service,
)
from managerh.schemas.company import CompanyRead, CompanyRegister, SessionRead, TokenResponse
from managerh.services.credential_service import CredentialService
from managerh.services.session_service import SessionService

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new company",
)
async def register(
    body: CompanyRegister,
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> CompanyRead:
    """
    Public endpoint. Fails with siret.format, password.too_short,
    password.missing_digit or duplicate_siret.
    """
    company = await credentials.register_company(body)
    return CompanyRead.model_validate(company)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive a session token",
)
async def login(
    # OAuth2PasswordRequestForm sends username + password as form data.
    # Swagger's Authorize popup uses this format automatically.
    # The "username" field contains the SIRET.
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> TokenResponse:
    """
    Via curl: send as form data (not JSON):
        -d "username=12345678901234&password=yourpassword"
    """
    company = await credentials.authenticate(form_data.username.strip(), form_data.password)
    token, _ = sessions.open_session(company)

    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.SESSION_EXPIRE_MINUTES * 60,
        company=CompanyRead.model_validate(company),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Terminate the current session",
)
async def logout(
    session: CurrentSession,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> Response:
    await sessions.close_session(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=SessionRead,
    summary="Get the current session's company",
)
async def get_me(session: CurrentSession) -> SessionRead:
    return SessionRead(
        company_id=session.company_id,
        company_name=session.company_name,
        expires_at=session.expires_at,
    )

"""
schemas/company.py
------------------
Pydantic request/response models for Company registration and sessions.

Naming convention:
  CompanyRegister → inbound request body
  CompanyRead     → outbound response body (never exposes hashed_password)

Format rules (SIRET, password strength) are checked by
managerh.core.validators in the service layer, so the same codes are
returned whether the service is called over HTTP or directly.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator


class CompanyRegister(BaseModel):
    name: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ] = Field(
        ...,
        examples=["Acme SAS"],
        description="Company name (raison sociale)",
    )
    siret: str = Field(..., examples=["12345678901234"], description="14-digit SIRET")
    password: str = Field(..., max_length=128)
    director_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("siret")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("director_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class CompanyRead(BaseModel):
    id: str
    siret: str
    name: str
    director_name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SessionRead(BaseModel):
    company_id: str
    company_name: str
    expires_at: datetime


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    company: CompanyRead

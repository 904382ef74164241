"""
schemas/computer.py
-------------------
Pydantic models for computers and holder assignment.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ComputerCreate(BaseModel):
    mac_address: str = Field(..., examples=["AA:BB:CC:DD:EE:FF"])

    @field_validator("mac_address")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class ComputerUpdate(BaseModel):
    mac_address: str = Field(..., examples=["AA:BB:CC:DD:EE:FF"])
    status: Optional[str] = Field(
        default=None,
        description="available | assigned | broken; omitted means derived from the holder",
    )
    employee_id: Optional[str] = Field(
        default=None,
        description="Holder to assign; null or empty to unassign, omitted to keep",
    )

    @field_validator("mac_address")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("employee_id")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        # HTML forms send "" for "no employee selected"
        return v or None


class HolderUpdate(BaseModel):
    # Required, but may be null to unassign
    employee_id: Optional[str]

    @field_validator("employee_id")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class HolderSummary(BaseModel):
    id: str
    last_name: str
    first_name: str

    model_config = {"from_attributes": True}


class ComputerRead(BaseModel):
    id: str
    mac_address: str
    status: str
    employee_id: Optional[str] = None
    holder: Optional[HolderSummary] = None
    company_id: str
    created_at: datetime

    model_config = {"from_attributes": True}

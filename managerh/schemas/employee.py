"""
schemas/employee.py
-------------------
Pydantic models for employee creation, update and responses.

hashed_password is NEVER included in any response schema.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field, StringConstraints

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class EmployeeBase(BaseModel):
    last_name: Name
    first_name: Name
    email: EmailStr
    age: Optional[int] = None
    gender: Optional[str] = Field(default=None, max_length=50)


class EmployeeCreate(EmployeeBase):
    password: str = Field(..., max_length=128)


class EmployeeUpdate(EmployeeBase):
    """Full replacement of the editable fields. Empty password keeps the old one."""
    password: Optional[str] = Field(default=None, max_length=128)


class ComputerSummary(BaseModel):
    id: str
    mac_address: str
    status: str

    model_config = {"from_attributes": True}


class EmployeeRead(BaseModel):
    id: str
    last_name: str
    first_name: str
    email: str
    age: Optional[int] = None
    gender: Optional[str] = None
    computer: Optional[ComputerSummary] = None
    company_id: str
    created_at: datetime

    model_config = {"from_attributes": True}

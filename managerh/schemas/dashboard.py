"""
schemas/dashboard.py
--------------------
Everything the dashboard page needs in one response.
"""

from pydantic import BaseModel

from managerh.schemas.computer import ComputerRead
from managerh.schemas.employee import EmployeeRead


class DashboardRead(BaseModel):
    company_name: str
    employees: list[EmployeeRead]
    computers: list[ComputerRead]

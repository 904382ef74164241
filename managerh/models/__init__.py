"""
models/__init__.py
------------------
Re-export all models so schema creation can discover all tables via a
single import:

    from managerh.models import Base
"""

from managerh.db.base import Base
from managerh.models.company import Company
from managerh.models.employee import Employee
from managerh.models.computer import Computer, ComputerStatus
from managerh.models.revoked_session import RevokedSession

__all__ = ["Base", "Company", "Employee", "Computer", "ComputerStatus", "RevokedSession"]

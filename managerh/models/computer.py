"""
models/computer.py
------------------
Computer ORM model and its status enum.

Storage-level guards for the assignment invariants:
  - uq_computers_company_holder: an employee is the holder of at most one
    computer per company. NULL holders are distinct, so any number of
    computers may be unassigned. This is what makes two racing
    reassignments to the same employee fail for one of them.
  - ck_computers_assigned_has_holder: status 'assigned' implies a holder.

The FK's ON DELETE SET NULL is only a backstop; AssignmentService clears
the holder explicitly before deleting an employee.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from managerh.db.base import Base, TimestampMixin, generate_uuid


class ComputerStatus(str, PyEnum):
    available = "available"
    assigned = "assigned"
    broken = "broken"


class Computer(Base, TimestampMixin):
    __tablename__ = "computers"
    __table_args__ = (
        UniqueConstraint("company_id", "employee_id", name="uq_computers_company_holder"),
        CheckConstraint(
            "status <> 'assigned' OR employee_id IS NOT NULL",
            name="ck_computers_assigned_has_holder",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    mac_address: Mapped[str] = mapped_column(String(17), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ComputerStatus.available.value
    )

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    employee_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="computers")  # noqa: F821
    holder: Mapped[Optional["Employee"]] = relationship(  # noqa: F821
        "Employee", back_populates="computer"
    )

    @property
    def is_assigned(self) -> bool:
        return self.employee_id is not None

    def __repr__(self) -> str:
        return (
            f"<Computer id={self.id} mac={self.mac_address} "
            f"status={self.status} employee_id={self.employee_id}>"
        )

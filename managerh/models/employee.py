"""
models/employee.py
------------------
Employee ORM model.

An employee belongs to exactly one company for its whole life. The computer
relationship is the backward side of Computer.employee_id: it is never the
source of truth for assignment, and it is never used to delete anything.

hashed_password stores bcrypt hashes only.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from managerh.db.base import Base, TimestampMixin, generate_uuid


class Employee(Base, TimestampMixin):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="employees")  # noqa: F821
    computer: Mapped[Optional["Computer"]] = relationship(  # noqa: F821
        "Computer", back_populates="holder", uselist=False, passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Employee id={self.id} company_id={self.company_id}>"

"""
models/company.py
-----------------
Company (tenant) ORM model.

Each company is an isolated organisational unit, identified to the outside
world by its SIRET. All employee and computer rows are scoped by company_id
at the query level; always include company_id in WHERE clauses.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from managerh.db.base import Base, TimestampMixin, generate_uuid


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    siret: Mapped[str] = mapped_column(String(14), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    director_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Relationships
    employees: Mapped[list["Employee"]] = relationship(  # noqa: F821
        "Employee", back_populates="company", cascade="all, delete-orphan"
    )
    computers: Mapped[list["Computer"]] = relationship(  # noqa: F821
        "Computer", back_populates="company", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} siret={self.siret}>"

"""
services/repository.py
----------------------
Tenant-scoped data access for employees and computers.

Critical security invariant:
  Every query MUST include company_id in the WHERE clause. get_by_id_for_tenant
  is the single point where that is enforced for single-row access; update and
  delete go through it. A row owned by another company is reported exactly
  like a row that does not exist.

Database failures other than integrity violations are logged and re-raised
as StorageUnavailable. IntegrityError is left to the caller, which knows
which business rule a constraint stands for.

Related rows shown in responses (a computer's holder, an employee's computer)
are eager-loaded by every query: lazy loading is not available under
AsyncSession. Writes end with reload(), which re-reads the row and its
relations with populate_existing.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from managerh.core.errors import NotFound, StorageUnavailable
from managerh.core.logging import get_logger
from managerh.db.base import Base
from managerh.models.computer import Computer
from managerh.models.employee import Employee

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class TenantScopedRepository(Generic[ModelT]):
    model: Type[ModelT]
    entity_kind: str

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ── Query construction ────────────────────────────────────────────────────

    def _order_by(self) -> tuple:
        raise NotImplementedError

    def _load_options(self) -> tuple:
        return ()

    def _scoped(self, tenant_id: str) -> Select:
        return (
            select(self.model)
            .where(self.model.company_id == tenant_id)
            .options(*self._load_options())
        )

    # ── Storage access ────────────────────────────────────────────────────────

    async def _execute(self, stmt):
        try:
            return await self.db.execute(stmt)
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.error(
                "Storage query failed",
                entity=self.entity_kind,
                error=type(exc).__name__,
                exc_info=True,
            )
            raise StorageUnavailable() from exc

    async def flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.error(
                "Storage write failed",
                entity=self.entity_kind,
                error=type(exc).__name__,
                exc_info=True,
            )
            raise StorageUnavailable() from exc

    # ── Contract ──────────────────────────────────────────────────────────────

    async def list_by_tenant(self, tenant_id: str) -> list[ModelT]:
        result = await self._execute(self._scoped(tenant_id).order_by(*self._order_by()))
        return list(result.scalars().all())

    async def get_by_id_for_tenant(
        self,
        entity_id: str,
        tenant_id: str,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        stmt = self._scoped(tenant_id).where(self.model.id == entity_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(
        self,
        entity_id: str,
        tenant_id: str,
        for_update: bool = False,
    ) -> ModelT:
        entity = await self.get_by_id_for_tenant(entity_id, tenant_id, for_update=for_update)
        if entity is None:
            raise NotFound(self.entity_kind, entity_id)
        return entity

    async def reload(self, entity_id: str, tenant_id: str) -> ModelT:
        """Re-read a row this session just wrote, overwriting stale attributes."""
        stmt = (
            self._scoped(tenant_id)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one()

    async def create(self, data: dict[str, Any], tenant_id: str) -> ModelT:
        """
        Insert a new row owned by tenant_id.
        Any company_id in data is ignored: ownership comes from the session.
        """
        values = {k: v for k, v in data.items() if k != "company_id"}
        entity = self.model(**values, company_id=tenant_id)
        self.db.add(entity)
        await self.flush()
        return await self.reload(entity.id, tenant_id)

    async def update_for_tenant(
        self, entity_id: str, data: dict[str, Any], tenant_id: str
    ) -> ModelT:
        entity = await self.get_or_404(entity_id, tenant_id)
        for key, value in data.items():
            if key in ("id", "company_id"):
                continue
            setattr(entity, key, value)
        await self.flush()
        return await self.reload(entity.id, tenant_id)

    async def delete_for_tenant(self, entity_id: str, tenant_id: str) -> ModelT:
        entity = await self.get_or_404(entity_id, tenant_id)
        await self.db.delete(entity)
        await self.flush()
        return entity


class EmployeeRepository(TenantScopedRepository[Employee]):
    model = Employee
    entity_kind = "employee"

    def _order_by(self) -> tuple:
        return (Employee.last_name, Employee.first_name, Employee.id)

    def _load_options(self) -> tuple:
        return (selectinload(Employee.computer),)


class ComputerRepository(TenantScopedRepository[Computer]):
    model = Computer
    entity_kind = "computer"

    def _order_by(self) -> tuple:
        return (Computer.mac_address, Computer.id)

    def _load_options(self) -> tuple:
        return (selectinload(Computer.holder),)

    async def find_by_holder(
        self,
        employee_id: str,
        tenant_id: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Computer]:
        """The computer currently held by employee_id, optionally ignoring one computer."""
        stmt = self._scoped(tenant_id).where(Computer.employee_id == employee_id)
        if exclude_id is not None:
            stmt = stmt.where(Computer.id != exclude_id)
        result = await self._execute(stmt.limit(1))
        return result.scalar_one_or_none()

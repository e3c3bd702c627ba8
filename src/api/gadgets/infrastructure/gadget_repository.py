"""PostgreSQL implementation of IGadgetRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus
from gadgets.infrastructure.models import GadgetModel
from gadgets.infrastructure.observability import (
    DefaultGadgetRepositoryProbe,
    GadgetRepositoryProbe,
)
from gadgets.ports.exceptions import DuplicateCodenameError
from gadgets.ports.repositories import IGadgetRepository


class GadgetRepository(IGadgetRepository):
    """PostgreSQL-backed repository for Gadget aggregates.

    Each method runs in its own transaction. A mutation loads the row and
    writes it within one transaction, but any check a caller made on an
    earlier ``get_by_id`` ran in a separate transaction. No row lock or
    version column is taken, so concurrent writers to the same gadget are
    last-write-wins.
    """

    def __init__(
        self, session: AsyncSession, probe: GadgetRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGadgetRepositoryProbe()

    async def create(self, gadget: Gadget) -> Gadget:
        model = GadgetModel(
            id=gadget.id.value,
            name=gadget.name,
            codename=gadget.codename,
            status=gadget.status,
            decommissioned_at=gadget.decommissioned_at,
        )
        try:
            async with self._session.begin():
                self._session.add(model)
        except IntegrityError as e:
            self._probe.duplicate_codename(gadget.codename)
            raise DuplicateCodenameError(
                f"Codename '{gadget.codename}' is already assigned"
            ) from e

        self._probe.gadget_created(gadget.id.value, gadget.codename)
        return self._to_domain(model)

    async def list(self, status: GadgetStatus | None = None) -> list[Gadget]:
        stmt = select(GadgetModel).order_by(GadgetModel.created_at)
        if status is not None:
            stmt = stmt.where(GadgetModel.status == status)

        async with self._session.begin():
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        self._probe.gadgets_listed(
            count=len(models), status=status.value if status else None
        )
        return [self._to_domain(model) for model in models]

    async def get_by_id(self, gadget_id: GadgetId) -> Gadget | None:
        async with self._session.begin():
            model = await self._load(gadget_id)

        if model is None:
            self._probe.gadget_not_found(gadget_id.value)
            return None
        return self._to_domain(model)

    async def update(
        self, gadget_id: GadgetId, changes: GadgetChanges
    ) -> Gadget | None:
        values = changes.as_dict()
        return await self._modify(gadget_id, values)

    async def decommission(
        self, gadget_id: GadgetId, decommissioned_at: datetime
    ) -> Gadget | None:
        return await self._modify(
            gadget_id,
            {
                "status": GadgetStatus.DECOMMISSIONED,
                "decommissioned_at": decommissioned_at,
            },
        )

    async def mark_destroyed(self, gadget_id: GadgetId) -> Gadget | None:
        return await self._modify(gadget_id, {"status": GadgetStatus.DESTROYED})

    async def _modify(
        self, gadget_id: GadgetId, values: dict[str, object]
    ) -> Gadget | None:
        async with self._session.begin():
            model = await self._load(gadget_id)
            if model is None:
                self._probe.gadget_not_found(gadget_id.value)
                return None
            for field_name, value in values.items():
                setattr(model, field_name, value)

        self._probe.gadget_updated(gadget_id.value, sorted(values))
        return self._to_domain(model)

    async def _load(self, gadget_id: GadgetId) -> GadgetModel | None:
        stmt = select(GadgetModel).where(GadgetModel.id == gadget_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: GadgetModel) -> Gadget:
        return Gadget(
            id=GadgetId(value=model.id),
            name=model.name,
            codename=model.codename,
            status=GadgetStatus(model.status),
            decommissioned_at=model.decommissioned_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

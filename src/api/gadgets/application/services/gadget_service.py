"""Gadget lifecycle application service.

Creates gadgets, lists them with a derived success estimate, and applies
the three state changes: generic update, decommission and self-destruct.
Each state change checks that the gadget exists and that the transition
is not a no-op before writing. The check and the write are separate
repository calls, so two concurrent callers can both pass the check; the
later write wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from gadgets.application.codes import (
    format_success_probability,
    generate_confirmation_code,
    random_success_percentage,
)
from gadgets.application.observability import (
    DefaultGadgetServiceProbe,
    GadgetServiceProbe,
)
from gadgets.application.value_objects import GadgetView, SelfDestructResult
from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus
from gadgets.ports import CodenameGenerator, IGadgetRepository
from shared_kernel.errors import AppError

GADGET_NOT_FOUND_MESSAGE = "Gadget not found"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GadgetService:
    """Application service for the gadget lifecycle."""

    def __init__(
        self,
        gadget_repository: IGadgetRepository,
        codename_generator: CodenameGenerator,
        probe: GadgetServiceProbe | None = None,
        clock: Callable[[], datetime] = _utc_now,
        success_percentage: Callable[[], int] = random_success_percentage,
        confirmation_code: Callable[[], str] = generate_confirmation_code,
    ):
        """Initialize GadgetService with dependencies.

        Args:
            gadget_repository: Repository for gadget persistence
            codename_generator: Source of new codenames
            probe: Optional domain probe for observability
            clock: Source of the decommission timestamp
            success_percentage: Source of the listed success estimate
            confirmation_code: Source of self-destruct confirmation codes
        """
        self._gadget_repository = gadget_repository
        self._codename_generator = codename_generator
        self._probe = probe or DefaultGadgetServiceProbe()
        self._clock = clock
        self._success_percentage = success_percentage
        self._confirmation_code = confirmation_code

    @contextmanager
    def _observed(self, operation: str, gadget_id: str | None = None) -> Iterator[None]:
        """Log failures of ``operation`` at the level matching their kind."""
        try:
            yield
        except AppError as e:
            self._probe.operation_rejected(operation, gadget_id, reason=e.message)
            raise
        except Exception as e:
            self._probe.operation_failed(operation, gadget_id, error=str(e))
            raise

    async def create(self, name: str) -> Gadget:
        """Create a gadget with a fresh codename and status Available.

        Args:
            name: Human-readable gadget name

        Returns:
            The stored gadget

        Raises:
            DuplicateCodenameError: If the generated codename is taken
        """
        with self._observed("create"):
            gadget = Gadget(
                id=GadgetId.generate(),
                name=name,
                codename=self._codename_generator.generate(),
                status=GadgetStatus.AVAILABLE,
            )
            stored = await self._gadget_repository.create(gadget)

        self._probe.gadget_created(stored.id.value, stored.name, stored.codename)
        return stored

    async def list(self, status: GadgetStatus | None = None) -> list[GadgetView]:
        """List gadgets, each with a freshly computed success estimate.

        Args:
            status: Only return gadgets with this status

        Returns:
            One view per gadget
        """
        with self._observed("list"):
            gadgets = await self._gadget_repository.list(status)

        self._probe.gadgets_listed(
            count=len(gadgets), status=status.value if status else None
        )
        return [
            GadgetView(
                gadget=gadget,
                mission_success_probability=format_success_probability(
                    gadget.codename, self._success_percentage()
                ),
            )
            for gadget in gadgets
        ]

    async def update(self, gadget_id: GadgetId, changes: GadgetChanges) -> Gadget:
        """Apply a partial update.

        Args:
            gadget_id: Gadget to update
            changes: Fields to change; unset fields are left alone

        Returns:
            The updated gadget

        Raises:
            AppError: NOT_FOUND if the gadget does not exist, BAD_REQUEST if
                no field is supplied or the status would not change
        """
        with self._observed("update", gadget_id.value):
            if changes.is_empty:
                raise AppError.bad_request("No fields supplied to update")

            current = await self._require(gadget_id)
            if changes.status is not None and changes.status == current.status:
                raise AppError.bad_request(
                    f"Gadget is already {current.status.value}. No update necessary"
                )

            updated = await self._gadget_repository.update(gadget_id, changes)
            if updated is None:
                raise AppError.not_found(GADGET_NOT_FOUND_MESSAGE)

        self._probe.gadget_updated(gadget_id.value, sorted(changes.as_dict()))
        return updated

    async def decommission(self, gadget_id: GadgetId) -> Gadget:
        """Mark a gadget Decommissioned and record when.

        Raises:
            AppError: NOT_FOUND if the gadget does not exist, BAD_REQUEST if
                it is already decommissioned
        """
        with self._observed("decommission", gadget_id.value):
            current = await self._require(gadget_id)
            if current.is_decommissioned:
                raise AppError.bad_request("Gadget is already decommissioned")

            updated = await self._gadget_repository.decommission(
                gadget_id, self._clock()
            )
            if updated is None:
                raise AppError.not_found(GADGET_NOT_FOUND_MESSAGE)

        self._probe.gadget_decommissioned(gadget_id.value)
        return updated

    async def self_destruct(self, gadget_id: GadgetId) -> SelfDestructResult:
        """Destroy a gadget and hand back a confirmation code.

        Raises:
            AppError: NOT_FOUND if the gadget does not exist, BAD_REQUEST if
                it is already destroyed
        """
        with self._observed("self_destruct", gadget_id.value):
            current = await self._require(gadget_id)
            if current.is_destroyed:
                raise AppError.bad_request("Gadget has already been destroyed")

            code = self._confirmation_code()
            updated = await self._gadget_repository.mark_destroyed(gadget_id)
            if updated is None:
                raise AppError.not_found(GADGET_NOT_FOUND_MESSAGE)

        self._probe.gadget_self_destructed(gadget_id.value)
        return SelfDestructResult(gadget=updated, confirmation_code=code)

    async def _require(self, gadget_id: GadgetId) -> Gadget:
        gadget = await self._gadget_repository.get_by_id(gadget_id)
        if gadget is None:
            raise AppError.not_found(GADGET_NOT_FOUND_MESSAGE)
        return gadget

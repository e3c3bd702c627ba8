"""Unit tests for GadgetService.

The repository is an in-memory fake so transitions can be applied twice
and observed end to end. Random sources are injected where a test needs
a fixed value; the listing tests only check the shape of the estimate.
"""

from __future__ import annotations

import asyncio
import re
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from gadgets.application.observability import GadgetServiceProbe
from gadgets.application.services import GadgetService
from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus
from gadgets.ports import CodenameGenerator, IGadgetRepository
from shared_kernel.errors import AppError, ErrorKind

PROBABILITY_PATTERN = re.compile(
    r"^(?P<codename>.+) - (?P<pct>\d{1,3})% success probability$"
)
FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


class InMemoryGadgetRepository:
    """Dict-backed stand-in for IGadgetRepository."""

    def __init__(self) -> None:
        self.gadgets: dict[str, Gadget] = {}

    async def create(self, gadget: Gadget) -> Gadget:
        self.gadgets[gadget.id.value] = gadget
        return gadget

    async def list(self, status: GadgetStatus | None = None) -> list[Gadget]:
        return [g for g in self.gadgets.values() if status is None or g.status == status]

    async def get_by_id(self, gadget_id: GadgetId) -> Gadget | None:
        return self.gadgets.get(gadget_id.value)

    async def _replace(self, gadget_id: GadgetId, **values) -> Gadget | None:
        current = self.gadgets.get(gadget_id.value)
        if current is None:
            return None
        fields = {
            "id": current.id,
            "name": current.name,
            "codename": current.codename,
            "status": current.status,
            "decommissioned_at": current.decommissioned_at,
        }
        fields.update(values)
        self.gadgets[gadget_id.value] = Gadget(**fields)
        return self.gadgets[gadget_id.value]

    async def update(self, gadget_id: GadgetId, changes: GadgetChanges):
        return await self._replace(gadget_id, **changes.as_dict())

    async def decommission(self, gadget_id: GadgetId, decommissioned_at: datetime):
        return await self._replace(
            gadget_id,
            status=GadgetStatus.DECOMMISSIONED,
            decommissioned_at=decommissioned_at,
        )

    async def mark_destroyed(self, gadget_id: GadgetId):
        return await self._replace(gadget_id, status=GadgetStatus.DESTROYED)


@pytest.fixture
def repository() -> InMemoryGadgetRepository:
    return InMemoryGadgetRepository()


@pytest.fixture
def mock_codename_generator() -> MagicMock:
    generator = MagicMock(spec=CodenameGenerator)
    generator.generate.return_value = "The Silent Falcon"
    return generator


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=GadgetServiceProbe)


@pytest.fixture
def gadget_service(repository, mock_codename_generator, mock_probe) -> GadgetService:
    return GadgetService(
        gadget_repository=repository,
        codename_generator=mock_codename_generator,
        probe=mock_probe,
        clock=lambda: FIXED_NOW,
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_new_gadget_is_available_with_codename(
        self, gadget_service, repository, mock_probe
    ):
        gadget = await gadget_service.create("Exploding Pen")

        assert gadget.name == "Exploding Pen"
        assert gadget.codename == "The Silent Falcon"
        assert gadget.status is GadgetStatus.AVAILABLE
        assert gadget.decommissioned_at is None
        assert repository.gadgets[gadget.id.value] == gadget
        mock_probe.gadget_created.assert_called_once_with(
            gadget.id.value, "Exploding Pen", "The Silent Falcon"
        )

    @pytest.mark.asyncio
    async def test_each_gadget_gets_its_own_id(self, gadget_service):
        first = await gadget_service.create("Pen")
        second = await gadget_service.create("Watch")

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_repository_failure_is_reported_and_propagated(
        self, mock_codename_generator, mock_probe
    ):
        repository = create_autospec(IGadgetRepository, instance=True)
        repository.create = AsyncMock(side_effect=ConnectionError("db down"))
        service = GadgetService(repository, mock_codename_generator, probe=mock_probe)

        with pytest.raises(ConnectionError):
            await service.create("Pen")

        mock_probe.operation_failed.assert_called_once()


class TestList:
    @pytest.mark.asyncio
    async def test_empty_inventory(self, gadget_service):
        assert await gadget_service.list() == []

    @pytest.mark.asyncio
    async def test_every_item_has_probability_for_its_codename(
        self, gadget_service, mock_codename_generator
    ):
        mock_codename_generator.generate.side_effect = ["The Red Fox", "The Blue Owl"]
        await gadget_service.create("Pen")
        await gadget_service.create("Watch")

        views = await gadget_service.list()

        assert len(views) == 2
        for view in views:
            match = PROBABILITY_PATTERN.match(view.mission_success_probability)
            assert match is not None
            assert match.group("codename") == view.gadget.codename
            assert 0 <= int(match.group("pct")) <= 100

    @pytest.mark.asyncio
    async def test_uses_injected_percentage(self, repository, mock_codename_generator):
        service = GadgetService(
            repository, mock_codename_generator, success_percentage=lambda: 42
        )
        await service.create("Pen")

        views = await service.list()

        assert views[0].mission_success_probability == (
            "The Silent Falcon - 42% success probability"
        )

    @pytest.mark.asyncio
    async def test_filters_by_status(self, gadget_service, mock_codename_generator):
        mock_codename_generator.generate.side_effect = ["The Red Fox", "The Blue Owl"]
        keep = await gadget_service.create("Pen")
        gone = await gadget_service.create("Watch")
        await gadget_service.decommission(gone.id)

        views = await gadget_service.list(GadgetStatus.AVAILABLE)

        assert [view.gadget.id for view in views] == [keep.id]


class TestUpdate:
    @pytest.mark.asyncio
    async def test_applies_supplied_fields_only(self, gadget_service):
        gadget = await gadget_service.create("Pen")

        updated = await gadget_service.update(
            gadget.id, GadgetChanges(status=GadgetStatus.DEPLOYED)
        )

        assert updated.status is GadgetStatus.DEPLOYED
        assert updated.name == "Pen"
        assert updated.codename == gadget.codename

    @pytest.mark.asyncio
    async def test_rename(self, gadget_service):
        gadget = await gadget_service.create("Pen")

        updated = await gadget_service.update(gadget.id, GadgetChanges(name="Laser Pen"))

        assert updated.name == "Laser Pen"
        assert updated.status is GadgetStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_unknown_gadget_is_not_found(self, gadget_service):
        with pytest.raises(AppError) as exc_info:
            await gadget_service.update(
                GadgetId.generate(), GadgetChanges(status=GadgetStatus.DEPLOYED)
            )

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_same_status_is_bad_request(self, gadget_service, mock_probe):
        gadget = await gadget_service.create("Pen")

        with pytest.raises(AppError) as exc_info:
            await gadget_service.update(
                gadget.id, GadgetChanges(status=GadgetStatus.AVAILABLE)
            )

        assert exc_info.value.kind is ErrorKind.BAD_REQUEST
        assert exc_info.value.message == (
            "Gadget is already Available. No update necessary"
        )
        mock_probe.operation_rejected.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_changes_is_bad_request(self, gadget_service):
        gadget = await gadget_service.create("Pen")

        with pytest.raises(AppError) as exc_info:
            await gadget_service.update(gadget.id, GadgetChanges())

        assert exc_info.value.kind is ErrorKind.BAD_REQUEST


class TestDecommission:
    @pytest.mark.asyncio
    async def test_sets_status_and_timestamp_together(self, gadget_service):
        gadget = await gadget_service.create("Pen")

        updated = await gadget_service.decommission(gadget.id)

        assert updated.status is GadgetStatus.DECOMMISSIONED
        assert updated.decommissioned_at == FIXED_NOW

    @pytest.mark.asyncio
    async def test_second_decommission_is_bad_request(self, gadget_service):
        gadget = await gadget_service.create("Pen")
        await gadget_service.decommission(gadget.id)

        with pytest.raises(AppError) as exc_info:
            await gadget_service.decommission(gadget.id)

        assert exc_info.value.kind is ErrorKind.BAD_REQUEST
        assert exc_info.value.message == "Gadget is already decommissioned"

    @pytest.mark.asyncio
    async def test_unknown_gadget_is_not_found(self, gadget_service):
        with pytest.raises(AppError) as exc_info:
            await gadget_service.decommission(GadgetId.generate())

        assert exc_info.value.kind is ErrorKind.NOT_FOUND


class TestSelfDestruct:
    @pytest.mark.asyncio
    async def test_returns_six_digit_code_and_destroys(self, gadget_service, repository):
        gadget = await gadget_service.create("Pen")

        result = await gadget_service.self_destruct(gadget.id)

        assert re.fullmatch(r"\d{6}", result.confirmation_code)
        assert result.gadget.status is GadgetStatus.DESTROYED
        assert repository.gadgets[gadget.id.value].status is GadgetStatus.DESTROYED

    @pytest.mark.asyncio
    async def test_second_self_destruct_is_bad_request(self, gadget_service):
        gadget = await gadget_service.create("Pen")
        await gadget_service.self_destruct(gadget.id)

        with pytest.raises(AppError) as exc_info:
            await gadget_service.self_destruct(gadget.id)

        assert exc_info.value.kind is ErrorKind.BAD_REQUEST
        assert exc_info.value.message == "Gadget has already been destroyed"

    @pytest.mark.asyncio
    async def test_unknown_gadget_is_not_found(self, gadget_service):
        with pytest.raises(AppError) as exc_info:
            await gadget_service.self_destruct(GadgetId.generate())

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_decommissioned_gadget_can_still_be_destroyed(self, gadget_service):
        gadget = await gadget_service.create("Pen")
        await gadget_service.decommission(gadget.id)

        result = await gadget_service.self_destruct(gadget.id)

        assert result.gadget.status is GadgetStatus.DESTROYED


class InterleavingGadgetRepository(InMemoryGadgetRepository):
    """Yields to the event loop after every read, like a real database."""

    async def get_by_id(self, gadget_id: GadgetId) -> Gadget | None:
        gadget = await super().get_by_id(gadget_id)
        await asyncio.sleep(0)
        return gadget


class TestConcurrentWriters:
    """The existence and no-op checks are not atomic with the write."""

    @pytest.mark.asyncio
    async def test_racing_self_destructs_both_pass_the_check(
        self, mock_codename_generator, mock_probe
    ):
        repository = InterleavingGadgetRepository()
        service = GadgetService(
            gadget_repository=repository,
            codename_generator=mock_codename_generator,
            probe=mock_probe,
        )
        gadget = await service.create("Exploding Pen")

        first, second = await asyncio.gather(
            service.self_destruct(gadget.id), service.self_destruct(gadget.id)
        )

        assert first.gadget.status is GadgetStatus.DESTROYED
        assert second.gadget.status is GadgetStatus.DESTROYED
        assert repository.gadgets[gadget.id.value].status is GadgetStatus.DESTROYED

    @pytest.mark.asyncio
    async def test_later_update_wins(self, mock_codename_generator, mock_probe):
        repository = InterleavingGadgetRepository()
        service = GadgetService(
            gadget_repository=repository,
            codename_generator=mock_codename_generator,
            probe=mock_probe,
        )
        gadget = await service.create("Exploding Pen")

        await asyncio.gather(
            service.update(gadget.id, GadgetChanges(name="Pen Mk II")),
            service.update(gadget.id, GadgetChanges(name="Pen Mk III")),
        )

        assert repository.gadgets[gadget.id.value].name == "Pen Mk III"

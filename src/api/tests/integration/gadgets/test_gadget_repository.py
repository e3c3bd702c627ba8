"""Integration tests for GadgetRepository and GadgetService.

These tests require a database (SQLite by default, see conftest).
They verify gadget persistence, the status enum mapping, the codename
unique constraint and the full lifecycle through the service.
"""

from datetime import UTC, datetime

import pytest

from gadgets.application.services import GadgetService
from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus
from gadgets.infrastructure.codename_generator import WordListCodenameGenerator
from gadgets.infrastructure.gadget_repository import GadgetRepository
from gadgets.ports.exceptions import DuplicateCodenameError
from infrastructure.database.connection import Database
from shared_kernel.errors import AppError, ErrorKind

pytestmark = pytest.mark.integration


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive UTC datetimes, PostgreSQL aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def new_gadget(
    codename: str = "The Silent Falcon",
    status: GadgetStatus = GadgetStatus.AVAILABLE,
) -> Gadget:
    return Gadget(
        id=GadgetId.generate(),
        name="Exploding Pen",
        codename=codename,
        status=status,
    )


@pytest.fixture
def gadget_repository(async_session) -> GadgetRepository:
    return GadgetRepository(async_session)


async def read_back(database: Database, gadget_id: GadgetId) -> Gadget | None:
    """Load a gadget through a fresh session, bypassing the identity map."""
    async with database.session() as session:
        return await GadgetRepository(session).get_by_id(gadget_id)


class TestGadgetRoundTrip:
    """Tests for create and retrieve operations."""

    @pytest.mark.asyncio
    async def test_creates_and_retrieves_gadget(
        self, gadget_repository: GadgetRepository, database: Database
    ):
        gadget = new_gadget()

        await gadget_repository.create(gadget)
        retrieved = await read_back(database, gadget.id)

        assert retrieved is not None
        assert retrieved.name == "Exploding Pen"
        assert retrieved.codename == "The Silent Falcon"
        assert retrieved.status is GadgetStatus.AVAILABLE
        assert retrieved.decommissioned_at is None
        assert retrieved.created_at is not None
        assert retrieved.updated_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", list(GadgetStatus))
    async def test_status_is_stored_by_value(
        self,
        gadget_repository: GadgetRepository,
        database: Database,
        status: GadgetStatus,
    ):
        gadget = new_gadget(status=status)

        await gadget_repository.create(gadget)
        retrieved = await read_back(database, gadget.id)

        assert retrieved is not None
        assert retrieved.status is status

    @pytest.mark.asyncio
    async def test_returns_none_for_unknown_id(
        self, gadget_repository: GadgetRepository
    ):
        assert await gadget_repository.get_by_id(GadgetId.generate()) is None


class TestListGadgets:
    @pytest.mark.asyncio
    async def test_lists_all_or_by_status(self, gadget_repository: GadgetRepository):
        available = new_gadget("The Silent Falcon", GadgetStatus.AVAILABLE)
        deployed = new_gadget("The Amber Lynx", GadgetStatus.DEPLOYED)
        destroyed = new_gadget("The Iron Heron", GadgetStatus.DESTROYED)
        for gadget in (available, deployed, destroyed):
            await gadget_repository.create(gadget)

        everything = await gadget_repository.list()
        only_deployed = await gadget_repository.list(GadgetStatus.DEPLOYED)
        none_decommissioned = await gadget_repository.list(
            GadgetStatus.DECOMMISSIONED
        )

        assert {g.codename for g in everything} == {
            "The Silent Falcon",
            "The Amber Lynx",
            "The Iron Heron",
        }
        assert [g.id for g in only_deployed] == [deployed.id]
        assert none_decommissioned == []


class TestCodenameUniqueness:
    @pytest.mark.asyncio
    async def test_duplicate_codename_is_rejected(
        self, gadget_repository: GadgetRepository
    ):
        await gadget_repository.create(new_gadget("The Silent Falcon"))

        with pytest.raises(DuplicateCodenameError):
            await gadget_repository.create(new_gadget("The Silent Falcon"))

        # The failed insert was rolled back and the session is still usable
        assert len(await gadget_repository.list()) == 1


class TestTransitions:
    @pytest.mark.asyncio
    async def test_update_changes_name_and_keeps_codename(
        self, gadget_repository: GadgetRepository, database: Database
    ):
        gadget = new_gadget()
        await gadget_repository.create(gadget)

        await gadget_repository.update(gadget.id, GadgetChanges(name="Pen Mk II"))
        retrieved = await read_back(database, gadget.id)

        assert retrieved is not None
        assert retrieved.name == "Pen Mk II"
        assert retrieved.codename == "The Silent Falcon"
        assert as_utc(retrieved.updated_at) >= as_utc(retrieved.created_at)

    @pytest.mark.asyncio
    async def test_decommission_records_timestamp(
        self, gadget_repository: GadgetRepository, database: Database
    ):
        gadget = new_gadget()
        await gadget_repository.create(gadget)
        when = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)

        await gadget_repository.decommission(gadget.id, when)
        retrieved = await read_back(database, gadget.id)

        assert retrieved is not None
        assert retrieved.status is GadgetStatus.DECOMMISSIONED
        assert as_utc(retrieved.decommissioned_at) == when

    @pytest.mark.asyncio
    async def test_mark_destroyed(
        self, gadget_repository: GadgetRepository, database: Database
    ):
        gadget = new_gadget()
        await gadget_repository.create(gadget)

        await gadget_repository.mark_destroyed(gadget.id)
        retrieved = await read_back(database, gadget.id)

        assert retrieved is not None
        assert retrieved.status is GadgetStatus.DESTROYED
        assert retrieved.decommissioned_at is None

    @pytest.mark.asyncio
    async def test_transitions_on_unknown_id_return_none(
        self, gadget_repository: GadgetRepository
    ):
        missing = GadgetId.generate()

        assert await gadget_repository.update(missing, GadgetChanges(name="x")) is None
        assert (
            await gadget_repository.decommission(missing, datetime.now(UTC)) is None
        )
        assert await gadget_repository.mark_destroyed(missing) is None


class TestGadgetServiceAgainstDatabase:
    """The lifecycle end to end with the real repository."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(
        self, gadget_repository: GadgetRepository, database: Database
    ):
        service = GadgetService(
            gadget_repository=gadget_repository,
            codename_generator=WordListCodenameGenerator(),
        )

        created = await service.create("Exploding Pen")
        await service.update(created.id, GadgetChanges(status=GadgetStatus.DEPLOYED))
        listed = await service.list(GadgetStatus.DEPLOYED)
        result = await service.self_destruct(created.id)

        assert created.codename.startswith("The ")
        assert [view.gadget.id for view in listed] == [created.id]
        assert listed[0].mission_success_probability.startswith(created.codename)
        assert result.gadget.status is GadgetStatus.DESTROYED
        assert len(result.confirmation_code) == 6

        with pytest.raises(AppError) as exc_info:
            await service.self_destruct(created.id)
        assert exc_info.value.kind is ErrorKind.BAD_REQUEST

        retrieved = await read_back(database, created.id)
        assert retrieved is not None
        assert retrieved.status is GadgetStatus.DESTROYED

    @pytest.mark.asyncio
    async def test_decommission_twice_is_rejected(
        self, gadget_repository: GadgetRepository
    ):
        service = GadgetService(
            gadget_repository=gadget_repository,
            codename_generator=WordListCodenameGenerator(),
        )
        created = await service.create("Exploding Pen")

        decommissioned = await service.decommission(created.id)
        with pytest.raises(AppError) as exc_info:
            await service.decommission(created.id)

        assert decommissioned.decommissioned_at is not None
        assert exc_info.value.kind is ErrorKind.BAD_REQUEST

    @pytest.mark.asyncio
    async def test_codename_collision_surfaces_from_create(
        self, gadget_repository: GadgetRepository
    ):
        service = GadgetService(
            gadget_repository=gadget_repository,
            codename_generator=WordListCodenameGenerator(choice=lambda words: words[0]),
        )
        await service.create("Exploding Pen")

        with pytest.raises(DuplicateCodenameError):
            await service.create("Laser Watch")

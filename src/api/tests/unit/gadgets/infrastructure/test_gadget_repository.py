"""Unit tests for GadgetRepository with a mocked session."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus
from gadgets.infrastructure.gadget_repository import GadgetRepository
from gadgets.infrastructure.models import GadgetModel
from gadgets.infrastructure.observability import GadgetRepositoryProbe
from gadgets.ports import DuplicateCodenameError, IGadgetRepository


@pytest.fixture
def mock_probe():
    return MagicMock(spec=GadgetRepositoryProbe)


@pytest.fixture
def repository(mock_session, mock_probe):
    return GadgetRepository(session=mock_session, probe=mock_probe)


def _model(status: GadgetStatus = GadgetStatus.AVAILABLE, **overrides) -> GadgetModel:
    values = {
        "id": GadgetId.generate().value,
        "name": "Exploding Pen",
        "codename": "The Silent Falcon",
        "status": status,
        "decommissioned_at": None,
    }
    values.update(overrides)
    return GadgetModel(**values)


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IGadgetRepository)


class TestCreate:
    @pytest.mark.asyncio
    async def test_adds_model_in_transaction(self, repository, mock_session):
        gadget = Gadget(
            id=GadgetId.generate(), name="Exploding Pen", codename="The Silent Falcon"
        )

        result = await repository.create(gadget)

        mock_session.begin.assert_called_once()
        added = mock_session.add.call_args[0][0]
        assert isinstance(added, GadgetModel)
        assert added.id == gadget.id.value
        assert added.codename == "The Silent Falcon"
        assert added.status is GadgetStatus.AVAILABLE
        assert result == gadget
        assert result.status is GadgetStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_integrity_error_raises_duplicate_codename(
        self, repository, mock_session, mock_probe
    ):
        mock_session.begin.return_value.__aexit__.side_effect = IntegrityError(
            "INSERT", {}, Exception("duplicate key")
        )
        gadget = Gadget(
            id=GadgetId.generate(), name="Exploding Pen", codename="The Silent Falcon"
        )

        with pytest.raises(DuplicateCodenameError):
            await repository.create(gadget)

        mock_probe.duplicate_codename.assert_called_once_with("The Silent Falcon")


class TestList:
    @pytest.mark.asyncio
    async def test_returns_all_gadgets(
        self, repository, mock_session, mock_probe, query_result
    ):
        models = [_model(), _model(codename="The Red Fox")]
        mock_session.execute.return_value = query_result(many=models)

        result = await repository.list()

        assert [g.codename for g in result] == ["The Silent Falcon", "The Red Fox"]
        mock_probe.gadgets_listed.assert_called_once_with(count=2, status=None)

    @pytest.mark.asyncio
    async def test_status_filter_is_applied_to_query(
        self, repository, mock_session, query_result
    ):
        mock_session.execute.return_value = query_result(many=[])

        await repository.list(GadgetStatus.DEPLOYED)

        stmt = mock_session.execute.call_args[0][0]
        assert "WHERE" in str(stmt)
        assert "gadgets.status" in str(stmt)

    @pytest.mark.asyncio
    async def test_no_filter_without_status(
        self, repository, mock_session, query_result
    ):
        mock_session.execute.return_value = query_result(many=[])

        await repository.list()

        stmt = mock_session.execute.call_args[0][0]
        assert "WHERE" not in str(stmt)


class TestGetById:
    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, repository, mock_session, mock_probe, query_result
    ):
        gadget_id = GadgetId.generate()
        mock_session.execute.return_value = query_result(single=None)

        assert await repository.get_by_id(gadget_id) is None
        mock_probe.gadget_not_found.assert_called_once_with(gadget_id.value)

    @pytest.mark.asyncio
    async def test_maps_model_to_domain(self, repository, mock_session, query_result):
        model = _model(status=GadgetStatus.DEPLOYED)
        mock_session.execute.return_value = query_result(single=model)

        gadget = await repository.get_by_id(GadgetId(value=model.id))

        assert gadget is not None
        assert gadget.id.value == model.id
        assert gadget.status is GadgetStatus.DEPLOYED


class TestMutations:
    @pytest.mark.asyncio
    async def test_update_sets_only_supplied_fields(
        self, repository, mock_session, query_result
    ):
        model = _model()
        mock_session.execute.return_value = query_result(single=model)

        result = await repository.update(
            GadgetId(value=model.id), GadgetChanges(status=GadgetStatus.DEPLOYED)
        )

        assert model.status is GadgetStatus.DEPLOYED
        assert model.name == "Exploding Pen"
        assert result.status is GadgetStatus.DEPLOYED

    @pytest.mark.asyncio
    async def test_decommission_sets_status_and_timestamp(
        self, repository, mock_session, query_result
    ):
        model = _model()
        mock_session.execute.return_value = query_result(single=model)
        when = datetime(2026, 3, 1, tzinfo=UTC)

        result = await repository.decommission(GadgetId(value=model.id), when)

        assert model.status is GadgetStatus.DECOMMISSIONED
        assert model.decommissioned_at == when
        assert result.decommissioned_at == when
        # Load and write happen in the same transaction
        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_mark_destroyed(self, repository, mock_session, query_result):
        model = _model()
        mock_session.execute.return_value = query_result(single=model)

        result = await repository.mark_destroyed(GadgetId(value=model.id))

        assert result.status is GadgetStatus.DESTROYED

    @pytest.mark.asyncio
    async def test_missing_gadget_returns_none(
        self, repository, mock_session, mock_probe, query_result
    ):
        mock_session.execute.return_value = query_result(single=None)

        result = await repository.mark_destroyed(GadgetId.generate())

        assert result is None
        mock_probe.gadget_updated.assert_not_called()

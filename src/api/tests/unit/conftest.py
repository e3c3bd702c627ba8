"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

TEST_JWT_SECRET = "unit-test-secret-with-at-least-32-characters"


@pytest.fixture
def mock_session():
    """Provide a mocked AsyncSession.

    ``session.begin()`` returns an async context manager so repositories can
    use ``async with session.begin()``. Tests that need a failing commit set
    a side effect on ``session.begin.return_value.__aexit__``.
    """
    session = AsyncMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=transaction)
    session.add = MagicMock()
    return session


@pytest.fixture
def query_result():
    """Build an execute() result returning the given rows."""

    def _build(single=None, many=None):
        result = MagicMock()
        result.scalar_one_or_none.return_value = single
        result.scalars.return_value.all.return_value = many or []
        return result

    return _build

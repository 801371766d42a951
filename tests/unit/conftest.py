import pytest
from unittest.mock import AsyncMock, MagicMock

from campus_auth.app.services.token_codec import ResetTokenCodec, SessionTokenCodec

TEST_SECRET = "unit-test-secret"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()
    uow.users.set_reset_token = AsyncMock()
    uow.users.consume_reset_token = AsyncMock()
    return uow


@pytest.fixture
def session_codec():
    return SessionTokenCodec(TEST_SECRET)


@pytest.fixture
def reset_codec():
    return ResetTokenCodec(TEST_SECRET)

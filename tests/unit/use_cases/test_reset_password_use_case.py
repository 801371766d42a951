import pytest
from sqlalchemy.exc import OperationalError

from campus_auth.app.services.password_hasher import verify_password
from campus_auth.app.use_cases.auth import ResetPasswordUseCase
from campus_auth.app.use_cases.auth import reset_password_use_case
from campus_auth.domain.entities import User

INVALID = "Invalid or expired token."


def _user(reset_token, used=False):
    return User(
        id=3,
        email="a@x.com",
        password_hash="old_hash",
        reset_token=reset_token,
        reset_token_used=used,
    )


@pytest.mark.asyncio
async def test_successful_reset(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token)
    mock_uow.users.consume_reset_token.return_value = True

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.is_ok()
    assert result.value.message == "Password reset successful."

    user_id, consumed_token, password_hash = (
        mock_uow.users.consume_reset_token.call_args.args
    )
    assert user_id == 3
    assert consumed_token == token
    assert verify_password("newpass1", password_hash)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token(mock_uow, reset_codec, token):
    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert result.error.message == INVALID
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_used_token_rejected_with_generic_message(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token, used=True)

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert result.error.message == INVALID
    mock_uow.users.consume_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_rejected(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token)
    # Another request consumed the token between the read and the update
    mock_uow.users.consume_reset_token.return_value = False

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.error.message == INVALID
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_short_password_rejected(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token)

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "abc")

    assert result.error.code == "PASSWORD_TOO_SHORT"
    mock_uow.users.consume_reset_token.assert_not_called()


@pytest.mark.asyncio
async def test_long_password_rejected_without_hashing(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token)

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "a" * 80)

    assert result.is_err()
    assert result.error.code == "PASSWORD_TOO_LONG"
    assert result.error.message == "Password must be at most 72 bytes long"
    mock_uow.users.consume_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_token_reported_before_password_length(mock_uow, reset_codec):
    mock_uow.users.get_by_id.return_value = None

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(
        reset_codec.issue(3), "abc"
    )

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert result.error.message == INVALID


@pytest.mark.asyncio
async def test_hashing_failure_returns_generic_message(mock_uow, reset_codec, monkeypatch):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.return_value = _user(token)

    def _refuse(plaintext):
        raise ValueError("password cannot be longer than 72 bytes")

    monkeypatch.setattr(reset_password_use_case, "hash_password", _refuse)

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.error.code == "INVALID_RESET_TOKEN"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_failure_returns_generic_message(mock_uow, reset_codec):
    token = reset_codec.issue(3)
    mock_uow.users.get_by_id.side_effect = OperationalError("SELECT", {}, Exception("down"))

    result = await ResetPasswordUseCase(mock_uow, reset_codec).execute(token, "newpass1")

    assert result.error.message == INVALID

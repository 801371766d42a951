import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from campus_auth.app.services.password_hasher import verify_password
from campus_auth.app.use_cases.auth import RegisterCommand, RegisterUseCase
from campus_auth.domain.entities import User, UserRole


def _created_user(user):
    user.id = 1
    return user


@pytest.mark.asyncio
async def test_successful_registration(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.create.side_effect = _created_user

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="secret1", confirm_password="secret1")
    )

    assert result.is_ok()
    assert result.value.user_id == 1
    assert result.value.redirect_to == "/login"

    created = mock_uow.users.create.call_args.args[0]
    assert created.email == "a@x.com"
    assert created.role == UserRole.USER
    assert created.reset_token is None
    assert created.reset_token_used is False
    assert created.password_hash != "secret1"
    assert verify_password("secret1", created.password_hash)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_password_mismatch(mock_uow):
    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="secret1", confirm_password="secret2")
    )

    assert result.is_err()
    assert result.error.code == "PASSWORD_MISMATCH"
    assert result.error.message == "Passwords do not match"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_mismatch_checked_before_length(mock_uow):
    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="abc", confirm_password="abd")
    )

    assert result.error.code == "PASSWORD_MISMATCH"


@pytest.mark.asyncio
async def test_password_too_short(mock_uow):
    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="abc12", confirm_password="abc12")
    )

    assert result.is_err()
    assert result.error.code == "PASSWORD_TOO_SHORT"
    assert result.error.message == "Password must be at least 6 characters long"
    mock_uow.users.get_by_email.assert_not_called()
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_six_character_password_accepted(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.create.side_effect = _created_user

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="abc123", confirm_password="abc123")
    )

    assert result.is_ok()


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["a" * 80, "\u00e9" * 40])
async def test_password_over_72_bytes_rejected(mock_uow, password):
    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password=password, confirm_password=password)
    )

    assert result.is_err()
    assert result.error.code == "PASSWORD_TOO_LONG"
    assert result.error.message == "Password must be at most 72 bytes long"
    mock_uow.users.get_by_email.assert_not_called()
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_72_byte_password_accepted(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.create.side_effect = _created_user
    password = "a" * 72

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password=password, confirm_password=password)
    )

    assert result.is_ok()
    created = mock_uow.users.create.call_args.args[0]
    assert verify_password(password, created.password_hash)


@pytest.mark.asyncio
async def test_email_taken(mock_uow):
    mock_uow.users.get_by_email.return_value = User(
        id=1, email="a@x.com", password_hash="hash"
    )

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="secret1", confirm_password="secret1")
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_TAKEN"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unique_constraint_race_reported_as_email_taken(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.create.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="secret1", confirm_password="secret1")
    )

    assert result.error.code == "EMAIL_TAKEN"


@pytest.mark.asyncio
async def test_store_failure_is_internal_error(mock_uow):
    mock_uow.users.get_by_email.side_effect = OperationalError("SELECT", {}, Exception("down"))

    use_case = RegisterUseCase(mock_uow)
    result = await use_case.execute(
        RegisterCommand(email="a@x.com", password="secret1", confirm_password="secret1")
    )

    assert result.error.code == "INTERNAL_ERROR"

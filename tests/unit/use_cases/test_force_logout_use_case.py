from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.use_cases.sessions import ForceLogoutUseCase
from src.domain.entities import User


def make_user(tenant_id):
    return User(
        id=uuid4(), tenant_id=tenant_id, name="U", email=f"{uuid4()}@acme.com", password_hash="x"
    )


@pytest.fixture
def session_manager():
    manager = AsyncMock()
    manager.deactivate_all_for_user.return_value = 1
    return manager


@pytest.mark.asyncio
async def test_force_logout_same_tenant(mock_uow, session_manager):
    # Arrange
    tenant_id = uuid4()
    actor, target = make_user(tenant_id), make_user(tenant_id)
    mock_uow.users.get_by_id.side_effect = lambda user_id: {
        actor.id: actor,
        target.id: target,
    }.get(user_id)

    # Act
    result = await ForceLogoutUseCase(mock_uow, session_manager).execute(actor.id, target.id)

    # Assert
    assert result.is_ok()
    assert result.value.sessions_deactivated == 1
    assert result.value.message == "User logged out successfully"
    session_manager.deactivate_all_for_user.assert_awaited_once_with(target.id)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_force_logout_other_tenant(mock_uow, session_manager):
    # Arrange
    actor, target = make_user(uuid4()), make_user(uuid4())
    mock_uow.users.get_by_id.side_effect = lambda user_id: {
        actor.id: actor,
        target.id: target,
    }.get(user_id)

    # Act
    result = await ForceLogoutUseCase(mock_uow, session_manager).execute(actor.id, target.id)

    # Assert
    assert result.error.code == "FORBIDDEN"
    session_manager.deactivate_all_for_user.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_force_logout_unknown_target(mock_uow, session_manager):
    mock_uow.users.get_by_id.return_value = None

    result = await ForceLogoutUseCase(mock_uow, session_manager).execute(uuid4(), uuid4())

    assert result.error.code == "USER_NOT_FOUND"

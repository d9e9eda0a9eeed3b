from datetime import timedelta
from uuid import uuid4

import pytest

from src.api.utils.jwt import generate_jwt, verify_jwt
from src.app.services.session_manager import SessionManager
from src.domain.base import utcnow
from src.domain.entities import Tenant, User, UserRole, UserSession


def make_tenant(license_limit=2):
    return Tenant(id=uuid4(), name="Acme Legal", license_limit=license_limit)


def make_user(tenant_id, email="alice@acme.com"):
    return User(
        id=uuid4(),
        tenant_id=tenant_id,
        name="Alice",
        email=email,
        password_hash="x" * 60,
        role=UserRole.lawyer,
    )


def make_session(user, expires_in=timedelta(hours=1)):
    return UserSession(id=uuid4(), user_id=user.id, expires_at=utcnow() + expires_in)


def credential_for(user, session):
    return generate_jwt(
        {"sub": str(user.id), "email": user.email, "session_id": str(session.id)}
    )


@pytest.mark.asyncio
async def test_create_session_refused_while_live_session_exists(mock_uow):
    # Arrange
    tenant = make_tenant()
    user = make_user(tenant.id)
    mock_uow.sessions.get_active_by_user_id.return_value = [make_session(user)]

    # Act
    result = await SessionManager(mock_uow).create_session(user)

    # Assert
    assert result.is_err()
    assert result.error.code == "ACTIVE_SESSION_EXISTS"
    mock_uow.sessions.create.assert_not_awaited()
    mock_uow.tenants.recount_license_used.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_session_retires_expired_leftovers(mock_uow):
    # Arrange
    tenant = make_tenant()
    user = make_user(tenant.id)
    stale = make_session(user, expires_in=timedelta(minutes=-5))
    mock_uow.sessions.get_active_by_user_id.return_value = [stale]
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.tenants.recount_license_used.side_effect = [0, 1]
    mock_uow.sessions.create.side_effect = lambda session: session

    # Act
    result = await SessionManager(mock_uow).create_session(user, ip_address="10.0.0.1")

    # Assert
    assert result.is_ok()
    issued = result.value
    assert issued.license_used == 1
    assert len(issued.session_token) == 64
    stale_ids, _ = mock_uow.sessions.deactivate_expired.await_args.args
    assert stale_ids == [stale.id]
    mock_uow.users.clear_current_sessions.assert_awaited_once_with([stale.id])
    mock_uow.users.set_current_session.assert_awaited_once_with(user.id, issued.session_id)

    created = mock_uow.sessions.create.await_args.args[0]
    assert created.ip_address == "10.0.0.1"
    assert created.is_active is True
    assert created.expires_at > utcnow() + timedelta(hours=23)


@pytest.mark.asyncio
async def test_create_session_refused_at_license_limit(mock_uow):
    # Arrange
    tenant = make_tenant(license_limit=2)
    user = make_user(tenant.id)
    mock_uow.sessions.get_active_by_user_id.return_value = []
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.tenants.recount_license_used.return_value = 2

    # Act
    result = await SessionManager(mock_uow).create_session(user)

    # Assert
    assert result.is_err()
    assert result.error.code == "LICENSE_LIMIT_REACHED"
    assert "2 licenses" in result.error.message
    mock_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_session_without_tenant(mock_uow):
    # Arrange
    user = make_user(uuid4())
    mock_uow.sessions.get_active_by_user_id.return_value = []
    mock_uow.tenants.get_by_id_for_update.return_value = None

    # Act
    result = await SessionManager(mock_uow).create_session(user)

    # Assert
    assert result.is_err()
    assert result.error.code == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_issued_credential_names_the_session(mock_uow):
    # Arrange
    tenant = make_tenant()
    user = make_user(tenant.id)
    mock_uow.sessions.get_active_by_user_id.return_value = []
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.tenants.recount_license_used.side_effect = [0, 1]
    mock_uow.sessions.create.side_effect = lambda session: session

    # Act
    issued = (await SessionManager(mock_uow).create_session(user)).value
    claims = verify_jwt(issued.access_token).value

    # Assert
    assert claims["sub"] == str(user.id)
    assert claims["session_id"] == str(issued.session_id)
    assert claims["tenant_id"] == str(tenant.id)
    assert claims["role"] == "lawyer"
    assert claims["exp"] > claims["iat"]


@pytest.mark.asyncio
async def test_validate_rejects_malformed_credential(mock_uow):
    result = await SessionManager(mock_uow).validate_by_credential("not-a-jwt")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.get_active_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_rejects_inactive_session(mock_uow):
    # Arrange
    user = make_user(uuid4())
    session = make_session(user)
    mock_uow.sessions.get_active_by_id.return_value = None

    # Act
    result = await SessionManager(mock_uow).validate_by_credential(
        credential_for(user, session)
    )

    # Assert
    assert result.error.code == "SESSION_INACTIVE"


@pytest.mark.asyncio
async def test_validate_deactivates_expired_session(mock_uow):
    # Arrange
    tenant_id = uuid4()
    user = make_user(tenant_id)
    session = make_session(user, expires_in=timedelta(seconds=-1))
    mock_uow.sessions.get_active_by_id.return_value = (session, user)
    mock_uow.sessions.get_by_id.return_value = session
    mock_uow.sessions.deactivate_by_id.return_value = True
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.recount_license_used.return_value = 0

    # Act
    result = await SessionManager(mock_uow).validate_by_credential(
        credential_for(user, session)
    )

    # Assert
    assert result.error.code == "SESSION_EXPIRED"
    mock_uow.sessions.deactivate_by_id.assert_awaited_once_with(session.id)
    mock_uow.users.clear_current_session.assert_awaited_once_with(user.id, session.id)
    mock_uow.tenants.recount_license_used.assert_awaited_once_with(tenant_id)
    mock_uow.sessions.touch.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_rejects_subject_mismatch(mock_uow):
    # Arrange
    owner = make_user(uuid4())
    intruder = make_user(owner.tenant_id, email="eve@acme.com")
    session = make_session(owner)
    mock_uow.sessions.get_active_by_id.return_value = (session, owner)

    # Act
    result = await SessionManager(mock_uow).validate_by_credential(
        credential_for(intruder, session)
    )

    # Assert
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.touch.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_touches_live_session(mock_uow):
    # Arrange
    user = make_user(uuid4())
    session = make_session(user)
    mock_uow.sessions.get_active_by_id.return_value = (session, user)

    # Act
    result = await SessionManager(mock_uow).validate_by_credential(
        credential_for(user, session)
    )

    # Assert
    assert result.is_ok()
    identity = result.value
    assert identity.user_id == user.id
    assert identity.session_id == session.id
    assert identity.tenant_id == user.tenant_id
    assert mock_uow.sessions.touch.await_args.args[0] == session.id


@pytest.mark.asyncio
async def test_deactivate_unknown_session_is_noop(mock_uow):
    mock_uow.sessions.get_by_id.return_value = None

    flipped = await SessionManager(mock_uow).deactivate(uuid4())

    assert flipped is False
    mock_uow.sessions.deactivate_by_id.assert_not_awaited()
    mock_uow.tenants.recount_license_used.assert_not_awaited()


@pytest.mark.asyncio
async def test_deactivate_all_for_user_recounts_tenant(mock_uow):
    # Arrange
    tenant_id = uuid4()
    user = make_user(tenant_id)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.deactivate_all_by_user_id.return_value = [uuid4(), uuid4()]

    # Act
    count = await SessionManager(mock_uow).deactivate_all_for_user(user.id)

    # Assert
    assert count == 2
    mock_uow.users.clear_current_session.assert_awaited_once_with(user.id)
    mock_uow.tenants.recount_license_used.assert_awaited_once_with(tenant_id)


@pytest.mark.asyncio
async def test_sweep_recounts_each_tenant_once(mock_uow):
    # Arrange
    acme, other = uuid4(), uuid4()
    s1, s2, s3 = uuid4(), uuid4(), uuid4()
    mock_uow.sessions.find_expired_active.return_value = [
        (s1, acme),
        (s2, acme),
        (s3, other),
    ]
    mock_uow.sessions.deactivate_expired.return_value = 3

    # Act
    report = await SessionManager(mock_uow).sweep_expired()

    # Assert
    assert report.sessions_deactivated == 3
    assert report.tenants_recounted == 2
    recounted = {call.args[0] for call in mock_uow.tenants.recount_license_used.await_args_list}
    assert recounted == {acme, other}
    assert mock_uow.tenants.recount_license_used.await_count == 2
    mock_uow.users.clear_current_sessions.assert_awaited_once_with([s1, s2, s3])


@pytest.mark.asyncio
async def test_sweep_with_nothing_expired(mock_uow):
    mock_uow.sessions.find_expired_active.return_value = []

    report = await SessionManager(mock_uow).sweep_expired()

    assert report.sessions_deactivated == 0
    assert report.tenants_recounted == 0
    mock_uow.sessions.deactivate_expired.assert_not_awaited()

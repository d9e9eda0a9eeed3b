from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.fixtures.factories import (
    bearer,
    create_tenant,
    create_user,
    get_tenant,
    get_user,
    login,
)


@pytest.mark.asyncio
async def test_force_logout_frees_slot_for_colleague(client: AsyncClient, db_session):
    """Force logout inside a full tenant

    Given a tenant with license_limit=2 where A and B are logged in
    When A force-logs-out B
    Then B's sessions are deactivated and B's credential stops working
    And C can now log in
    """
    # Arrange
    tenant_id = await create_tenant(db_session, license_limit=2)
    await create_user(db_session, tenant_id, "a@acme.com")
    b_id = await create_user(db_session, tenant_id, "b@acme.com")
    await create_user(db_session, tenant_id, "c@acme.com")
    a = (await login(client, "a@acme.com")).json()
    b = (await login(client, "b@acme.com")).json()

    # Act
    response = await client.delete(
        f"/auth/force-logout/{b_id}", headers=bearer(a["access_token"])
    )

    # Assert
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User logged out successfully"
    assert data["user_id"] == str(b_id)
    assert data["sessions_deactivated"] == 1

    rejected = await client.get("/auth/profile", headers=bearer(b["access_token"]))
    assert rejected.status_code == 401

    user = await get_user(db_session, b_id)
    assert user.current_session_id is None
    assert (await login(client, "c@acme.com")).status_code == 200
    tenant = await get_tenant(db_session, tenant_id)
    assert tenant.license_used == 2


@pytest.mark.asyncio
async def test_force_logout_across_tenants_is_forbidden(client: AsyncClient, db_session):
    # Arrange
    acme_id = await create_tenant(db_session, name="Acme Legal")
    other_id = await create_tenant(db_session, name="Other Firm")
    await create_user(db_session, acme_id, "a@acme.com")
    outsider_id = await create_user(db_session, other_id, "x@other.com")
    a = (await login(client, "a@acme.com")).json()
    await login(client, "x@other.com")

    # Act
    response = await client.delete(
        f"/auth/force-logout/{outsider_id}", headers=bearer(a["access_token"])
    )

    # Assert
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    other = await get_tenant(db_session, other_id)
    assert other.license_used == 1


@pytest.mark.asyncio
async def test_force_logout_unknown_user(client: AsyncClient, db_session):
    # Arrange
    tenant_id = await create_tenant(db_session)
    await create_user(db_session, tenant_id, "a@acme.com")
    a = (await login(client, "a@acme.com")).json()

    # Act
    response = await client.delete(
        f"/auth/force-logout/{uuid4()}", headers=bearer(a["access_token"])
    )

    # Assert
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_force_logout_user_without_session(client: AsyncClient, db_session):
    # Arrange
    tenant_id = await create_tenant(db_session)
    await create_user(db_session, tenant_id, "a@acme.com")
    idle_id = await create_user(db_session, tenant_id, "idle@acme.com")
    a = (await login(client, "a@acme.com")).json()

    # Act
    response = await client.delete(
        f"/auth/force-logout/{idle_id}", headers=bearer(a["access_token"])
    )

    # Assert
    assert response.status_code == 200
    assert response.json()["sessions_deactivated"] == 0
    tenant = await get_tenant(db_session, tenant_id)
    assert tenant.license_used == 1


@pytest.mark.asyncio
async def test_force_logout_requires_credential(client: AsyncClient):
    response = await client.delete(f"/auth/force-logout/{uuid4()}")

    assert response.status_code == 401

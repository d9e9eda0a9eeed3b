from datetime import datetime
from uuid import UUID

import pytest
from httpx import AsyncClient

from tests.fixtures.factories import (
    bearer,
    create_tenant,
    create_user,
    login,
    set_last_activity,
)


@pytest.mark.asyncio
async def test_license_info_lists_slot_holders(client: AsyncClient, db_session):
    """License info

    Given a tenant with license_limit=3 where two users are logged in
    When one of them asks for license info
    Then they see the pool totals and both sessions, most recent first
    """
    # Arrange
    tenant_id = await create_tenant(db_session, license_limit=3)
    await create_user(db_session, tenant_id, "a@acme.com")
    await create_user(db_session, tenant_id, "b@acme.com")
    a = (await login(client, "a@acme.com")).json()
    b = (await login(client, "b@acme.com")).json()
    await set_last_activity(db_session, UUID(a["session_id"]), datetime(2020, 1, 1))
    await set_last_activity(db_session, UUID(b["session_id"]), datetime(2021, 1, 1))

    # Act
    response = await client.get("/auth/license-info", headers=bearer(b["access_token"]))

    # Assert
    assert response.status_code == 200
    data = response.json()
    assert data["license_limit"] == 3
    assert data["license_used"] == 2
    assert data["available"] == 1
    sessions = data["active_sessions"]
    assert [s["user"]["email"] for s in sessions] == ["b@acme.com", "a@acme.com"]
    assert sessions[0]["session_id"] == b["session_id"]
    assert sessions[0]["user"]["name"] == "B"


@pytest.mark.asyncio
async def test_license_info_is_scoped_to_callers_tenant(client: AsyncClient, db_session):
    # Arrange
    acme_id = await create_tenant(db_session, name="Acme Legal", license_limit=2)
    other_id = await create_tenant(db_session, name="Other Firm", license_limit=4)
    await create_user(db_session, acme_id, "a@acme.com")
    await create_user(db_session, other_id, "x@other.com")
    a = (await login(client, "a@acme.com")).json()
    await login(client, "x@other.com")

    # Act
    response = await client.get("/auth/license-info", headers=bearer(a["access_token"]))

    # Assert
    data = response.json()
    assert data["license_limit"] == 2
    assert [s["user"]["email"] for s in data["active_sessions"]] == ["a@acme.com"]


@pytest.mark.asyncio
async def test_license_info_requires_credential(client: AsyncClient):
    response = await client.get("/auth/license-info")

    assert response.status_code == 401

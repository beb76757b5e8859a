"""
File: tests/integration/test_auth_router.py
Description: 认证接口集成测试 (登录 / 刷新 / 登出)

Author: jinmozhe
Created: 2026-03-02
"""

import pytest
from httpx import AsyncClient

from app.core.config import settings

API = settings.API_V1_STR


@pytest.mark.asyncio
async def test_login_refresh_logout(client: AsyncClient, make_account) -> None:
    await make_account("alice@example.com")

    response = await client.post(
        f"{API}/auth/login", json={"email": "Alice@example.com", "password": "abc12345"}
    )
    assert response.status_code == 200
    token = response.json()["data"]
    assert token["token_type"] == "bearer"

    response = await client.post(
        f"{API}/auth/refresh", json={"refresh_token": token["refresh_token"]}
    )
    assert response.status_code == 200
    rotated = response.json()["data"]
    assert rotated["refresh_token"] != token["refresh_token"]

    response = await client.post(
        f"{API}/auth/refresh", json={"refresh_token": token["refresh_token"]}
    )
    assert response.status_code == 401

    response = await client.post(
        f"{API}/auth/logout", json={"refresh_token": rotated["refresh_token"]}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, make_account) -> None:
    await make_account("alice@example.com")

    response = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": "wrong1234"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "auth.invalid_credentials"


@pytest.mark.asyncio
async def test_protected_route_rejects_bad_token(client: AsyncClient) -> None:
    response = await client.get(
        f"{API}/profiles/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_reports_session_state(
    client: AsyncClient, make_account, make_profile, auth_header
) -> None:
    limbo = await make_account("limbo@example.com")
    alice = await make_profile("alice_1")

    response = await client.get(f"{API}/auth/me", headers=auth_header(limbo.id))
    assert response.json()["data"] == {
        "account_id": str(limbo.id),
        "email": "limbo@example.com",
        "has_profile": False,
    }

    response = await client.get(f"{API}/auth/me", headers=auth_header(alice.account_id))
    assert response.json()["data"]["has_profile"] is True

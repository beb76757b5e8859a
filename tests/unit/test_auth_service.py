"""
File: tests/unit/test_auth_service.py
Description: 认证服务单元测试

1. 密码策略：至少 8 位且同时包含英字与数字
2. 创建账号：邮箱规整、哈希存储、重复邮箱 409
3. 登录 / 刷新 / 登出

Author: jinmozhe
Created: 2025-11-26
Updated: 2026-03-02 (Email credentials)
"""

import pytest

from app.core.exceptions import AppException
from app.core.security import verify_password
from app.domains.auth.constants import AuthError
from app.domains.auth.schemas import LoginRequest, check_password_policy
from app.domains.auth.service import AuthService


@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("abc12345", None),
        ("Passw0rd!", None),
        ("abc1234", AuthError.PASSWORD_TOO_SHORT),
        ("abcdefgh", AuthError.PASSWORD_NO_DIGIT),
        ("12345678", AuthError.PASSWORD_NO_LETTER),
        ("abcdefg１", AuthError.PASSWORD_NO_DIGIT),
        ("", AuthError.PASSWORD_TOO_SHORT),
    ],
)
def test_password_policy(password: str, expected: AuthError | None) -> None:
    assert check_password_policy(password) == expected


@pytest.mark.asyncio
async def test_create_account_normalizes_email_and_hashes(auth_service: AuthService) -> None:
    account = await auth_service.create_account("  Alice@Example.com ", "abc12345")

    assert account.id is not None
    assert account.email == "alice@example.com"
    assert account.hashed_password != "abc12345"
    assert verify_password("abc12345", account.hashed_password)
    assert account.is_active is True


@pytest.mark.asyncio
async def test_create_account_rejects_weak_password_before_write(
    auth_service: AuthService,
) -> None:
    with pytest.raises(AppException) as exc:
        await auth_service.create_account("bob@example.com", "password")

    assert exc.value.error == AuthError.PASSWORD_NO_DIGIT
    assert await auth_service.account_repo.get_by_email("bob@example.com") is None


@pytest.mark.asyncio
async def test_create_account_duplicate_email(auth_service: AuthService) -> None:
    await auth_service.create_account("carol@example.com", "abc12345")

    with pytest.raises(AppException) as exc:
        await auth_service.create_account("CAROL@example.com", "xyz98765")

    assert exc.value.error == AuthError.ALREADY_REGISTERED
    assert exc.value.http_status == 409


@pytest.mark.asyncio
async def test_login_and_refresh_rotation(auth_service: AuthService, fake_redis) -> None:
    account = await auth_service.create_account("dave@example.com", "abc12345")

    token = await auth_service.login(
        LoginRequest(email="dave@example.com", password="abc12345")
    )
    assert token.access_token
    assert fake_redis.store[f"refresh_token:{token.refresh_token}"] == str(account.id)

    rotated = await auth_service.refresh_token(token.refresh_token)
    assert rotated.refresh_token != token.refresh_token
    assert f"refresh_token:{token.refresh_token}" not in fake_redis.store

    # 旧 Token 只能使用一次
    with pytest.raises(AppException) as exc:
        await auth_service.refresh_token(token.refresh_token)
    assert exc.value.http_status == 401

    await auth_service.logout(rotated.refresh_token)
    assert f"refresh_token:{rotated.refresh_token}" not in fake_redis.store


@pytest.mark.asyncio
async def test_login_wrong_password(auth_service: AuthService) -> None:
    await auth_service.create_account("erin@example.com", "abc12345")

    with pytest.raises(AppException) as exc:
        await auth_service.login(LoginRequest(email="erin@example.com", password="abc99999"))

    assert exc.value.error == AuthError.INVALID_CREDENTIALS


@pytest.mark.asyncio
async def test_login_inactive_account(auth_service: AuthService) -> None:
    account = await auth_service.create_account("frank@example.com", "abc12345")
    account.is_active = False
    await auth_service.account_repo.session.commit()

    with pytest.raises(AppException) as exc:
        await auth_service.login(LoginRequest(email="frank@example.com", password="abc12345"))

    assert exc.value.error == AuthError.ACCOUNT_LOCKED

"""
File: app/domains/auth/service.py
Description: 认证领域服务 (Service)

本模块封装认证核心业务逻辑：
1. 创建账号: 密码策略校验、Argon2 哈希、邮箱唯一性 (AlreadyRegistered)。
2. 登录校验: 验证邮箱与密码，签发双 Token。
3. 刷新令牌: 验证 Redis 中的 Refresh Token，执行旋转策略 (Rotation)。
4. 用户登出: 销毁 Refresh Token。
5. 依赖注入: 依赖 AccountRepository (查账号) 和 Redis (存 Token)。

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (Email account creation)
"""

import secrets
from datetime import timedelta
from uuid import UUID

from redis.asyncio import Redis
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.error_code import SystemErrorCode
from app.core.exceptions import AppException
from app.core.logging import logger
from app.core.security import (
    create_access_token,
    get_password_hash_async,
    verify_password_async,
)
from app.db.models.account import Account
from app.domains.auth.constants import AuthError
from app.domains.auth.repository import AccountRepository
from app.domains.auth.schemas import LoginRequest, Token, check_password_policy
from app.utils.masking import mask_email

REFRESH_TOKEN_KEY = "refresh_token:{token}"


class AuthService:
    """
    认证服务类。
    """

    def __init__(self, account_repo: AccountRepository, redis: Redis):
        self.account_repo = account_repo
        self.redis = redis

    async def create_account(self, email: str, password: str) -> Account:
        """
        创建账号 (注册凭证步骤)。

        流程:
        1. 密码策略校验 (写入前拒绝)
        2. 邮箱唯一性预检 (Fail Fast)
        3. 密码哈希 (异步) 并写入，唯一约束兜底并发注册
        """
        if error := check_password_policy(password):
            raise AppException(error)

        normalized_email = email.strip().lower()
        if await self.account_repo.get_by_email(normalized_email):
            raise AppException(AuthError.ALREADY_REGISTERED)

        hashed_password = await get_password_hash_async(password)

        session = self.account_repo.session
        try:
            account = await self.account_repo.add(
                Account(email=normalized_email, hashed_password=hashed_password)
            )
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise AppException(AuthError.ALREADY_REGISTERED) from None

        logger.bind(account_id=str(account.id), email=mask_email(normalized_email)).info(
            "Account created"
        )
        return account

    async def login(self, login_data: LoginRequest) -> Token:
        """
        用户登录流程。

        流程:
        1. 查库获取账号 (Fail Fast)
        2. 验证密码哈希 (异步)
        3. 检查账号激活状态
        4. 生成 Access Token (JWT) + Refresh Token (Redis)
        """
        account = await self.account_repo.get_by_email(login_data.email)

        # 账号不存在与密码错误返回相同的通用凭证错误
        if not account:
            raise AppException(AuthError.INVALID_CREDENTIALS)

        if not await verify_password_async(login_data.password, account.hashed_password):
            raise AppException(AuthError.INVALID_CREDENTIALS)

        if not account.is_active:
            raise AppException(AuthError.ACCOUNT_LOCKED)

        logger.bind(account_id=str(account.id)).info("Account signed in")
        return await self.issue_tokens(account.id)

    async def refresh_token(self, refresh_token: str) -> Token:
        """
        使用 Refresh Token 换取新 Token (Token Rotation)。

        流程:
        1. 查 Redis 确认 token 有效性
        2. 若无效/过期，或账号已被停用，抛出 401
        3. 销毁旧 Token (防重放)
        4. 签发全新的一对 Access + Refresh Token
        """
        redis_key = REFRESH_TOKEN_KEY.format(token=refresh_token)
        account_id = await self.redis.get(redis_key)

        if not account_id:
            raise AppException(
                SystemErrorCode.UNAUTHORIZED, message="Refresh token 无效或已过期"
            )

        # 销毁旧 Token (一次性使用策略)
        await self.redis.delete(redis_key)

        account = await self.account_repo.get(UUID(account_id))
        if account is None or not account.is_active:
            raise AppException(SystemErrorCode.UNAUTHORIZED)

        return await self.issue_tokens(account.id)

    async def logout(self, refresh_token: str) -> None:
        """
        用户登出。
        直接从 Redis 删除对应的 Refresh Token。
        """
        await self.redis.delete(REFRESH_TOKEN_KEY.format(token=refresh_token))

    async def issue_tokens(self, account_id: UUID) -> Token:
        """
        构造 Token 响应并持久化 Refresh Token。
        注册凭证步骤创建账号后也通过这里直接登录。
        """
        access_token = create_access_token(subject=str(account_id))

        # 高熵随机串 (32 字节, 约 43 字符)
        refresh_token = secrets.token_urlsafe(32)

        # Key: refresh_token:xyz... -> Value: account_id
        await self.redis.setex(
            REFRESH_TOKEN_KEY.format(token=refresh_token),
            timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
            str(account_id),
        )

        return Token(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            token_type="bearer",
        )

"""
File: app/domains/auth/dependencies.py
Description: 认证领域依赖注入 (DI)

依赖链：
DBSession → AccountRepository ─┐
Redis ─────────────────────────┴→ AuthService → AuthServiceDep

注册流程 (signup) 复用 AuthServiceDep 创建账号并签发 Token。

Author: jinmozhe
Created: 2025-11-26
Updated: 2026-03-02 (Account repository)
"""

from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis

from app.api.deps import DBSession
from app.core.redis import get_redis
from app.db.models.account import Account
from app.domains.auth.repository import AccountRepository
from app.domains.auth.service import AuthService

RedisDep = Annotated[Redis, Depends(get_redis)]


async def get_account_repository(session: DBSession) -> AccountRepository:
    """获取账号仓储实例。"""
    return AccountRepository(model=Account, session=session)


AccountRepoDep = Annotated[AccountRepository, Depends(get_account_repository)]


async def get_auth_service(repo: AccountRepoDep, redis: RedisDep) -> AuthService:
    """
    构造 AuthService 实例。
    自动注入数据库会话 (Session) 和 Redis 客户端。
    """
    return AuthService(account_repo=repo, redis=redis)


# Router 中只需写: service: AuthServiceDep
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]

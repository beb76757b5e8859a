"""
File: app/api/deps.py
Description: 全局依赖注入定义 (DB Session + Authentication)

本模块负责：
1. 数据库会话管理 (get_db / DBSession) 与图片存储 (MediaVaultDep)
2. JWT 鉴权与账号身份提取 (get_current_account / CurrentAccount)
3. 可选身份 (OptionalAccount)：时间线等公开读接口，登录时附带 "我的反应"
4. 资料与权限控制 (CurrentProfile / AdminProfile)

注意：
账号 (Account) 与资料 (Profile) 分离。注册流程中存在 "已登录但未建资料" 的中间态，
因此需要资料的接口使用 CurrentProfile，仅需登录的接口使用 CurrentAccount。

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (Account / Profile split)
"""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import PermissionException, UnauthorizedException
from app.core.security import decode_access_token
from app.core.storage import MediaVault, get_media_vault
from app.db.models.account import Account
from app.db.models.profile import Profile
from app.db.session import AsyncSessionLocal

# ------------------------------------------------------------------------------
# 1. Database Dependencies
# ------------------------------------------------------------------------------


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    获取异步数据库会话依赖。
    使用 async with 确保请求结束时自动关闭 session。
    """
    async with AsyncSessionLocal() as session:
        yield session


# 数据库会话依赖类型别名
DBSession = Annotated[AsyncSession, Depends(get_db)]

# 图片存储依赖 (测试中 override 到临时目录)
MediaVaultDep = Annotated[MediaVault, Depends(get_media_vault)]


# ------------------------------------------------------------------------------
# 2. Authentication Dependencies (JWT 鉴权)
# ------------------------------------------------------------------------------


def _parse_bearer(authorization: str) -> str:
    """
    解析 Bearer Token。
    格式要求: Authorization: Bearer <token>
    """
    scheme, _, param = authorization.partition(" ")
    if scheme.lower() != "bearer" or not param:
        raise UnauthorizedException(message="Invalid Authentication Scheme")
    return param


async def _load_account(token: str, session: AsyncSession) -> Account:
    """
    解析 JWT 并查库确认账号状态。
    即使 Token 未过期，如果账号被停用，也应拒绝访问。
    """
    account_id = decode_access_token(token)
    if account_id is None:
        raise UnauthorizedException(message="Invalid Token or Expired")

    try:
        account_uuid = UUID(account_id)
    except ValueError:
        raise UnauthorizedException(message="Invalid Token: malformed sub") from None

    account = await session.get(Account, account_uuid)

    if not account:
        raise UnauthorizedException(message="Account not found")

    if not account.is_active:
        raise UnauthorizedException(message="Account is inactive")

    return account


async def get_token_from_header(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """从 Authorization Header 提取 Bearer Token (必需)。"""
    if not authorization:
        raise UnauthorizedException()
    return _parse_bearer(authorization)


async def get_current_account(
    token: Annotated[str, Depends(get_token_from_header)],
    session: DBSession,
) -> Account:
    """获取当前登录账号 (必需登录)。"""
    return await _load_account(token, session)


async def get_optional_account(
    session: DBSession,
    authorization: Annotated[str | None, Header()] = None,
) -> Account | None:
    """
    获取当前账号 (可选)。
    未携带 Authorization 时视为匿名访客；携带了但无效时仍然返回 401，
    避免客户端在 Token 过期后静默退化为匿名视图。
    """
    if not authorization:
        return None
    return await _load_account(_parse_bearer(authorization), session)


# 已登录账号依赖
# 用法: async def endpoint(account: CurrentAccount): ...
CurrentAccount = Annotated[Account, Depends(get_current_account)]

# 可选登录依赖 (公开读接口)
OptionalAccount = Annotated[Account | None, Depends(get_optional_account)]


# ------------------------------------------------------------------------------
# 3. Profile & Permission Dependencies (资料与权限控制)
# ------------------------------------------------------------------------------


async def get_current_profile(account: CurrentAccount, session: DBSession) -> Profile:
    """
    获取当前账号的资料。
    注册流程尚未完成 (无资料) 的账号不能投稿、关注或反应。
    """
    result = await session.execute(
        select(Profile).where(Profile.account_id == account.id)
    )
    profile = result.scalar_one_or_none()
    if profile is None:
        raise PermissionException(message="プロフィールの登録を完了してください")
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


async def get_admin_profile(profile: CurrentProfile) -> Profile:
    """
    管理员权限校验。
    """
    if not profile.is_admin:
        raise PermissionException(message="Not enough privileges")
    return profile


# 管理员依赖
AdminProfile = Annotated[Profile, Depends(get_admin_profile)]

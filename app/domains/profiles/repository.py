"""
File: app/domains/profiles/repository.py
Description: 资料仓储层 (Repository)

扩展功能：
1. get_by_account / get_by_username: 按账号或用户名查询
2. username_exists: 用户名可用性探测 (仅作提示)
3. get_many_by_accounts: 批量加载作者摘要 (时间线)
4. count_posts: 个人主页投稿数

Author: jinmozhe
Created: 2026-03-02
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select

from app.db.models.post import Post
from app.db.models.profile import Profile
from app.db.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """资料仓储类。"""

    async def get_by_account(self, account_id: UUID) -> Profile | None:
        stmt = select(Profile).where(Profile.account_id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Profile | None:
        stmt = select(Profile).where(Profile.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        stmt = select(Profile.id).where(Profile.username == username).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_many_by_accounts(
        self, account_ids: Iterable[UUID]
    ) -> dict[UUID, Profile]:
        ids = set(account_ids)
        if not ids:
            return {}
        stmt = select(Profile).where(Profile.account_id.in_(ids))
        result = await self.session.execute(stmt)
        return {profile.account_id: profile for profile in result.scalars().all()}

    async def count_posts(self, account_id: UUID) -> int:
        stmt = select(func.count()).select_from(Post).where(Post.author_id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

"""
File: app/domains/follows/repository.py
Description: 关注关系仓储层 (Repository)

关注边的写入全部是单条原子语句：
- follow: INSERT ... ON CONFLICT DO NOTHING (幂等)
- unfollow: 条件 DELETE (幂等)
- toggle: 先条件 DELETE，未删除任何行时再冲突安全 INSERT

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from sqlalchemy import delete, select

from app.db.models.follow import Follow
from app.db.repositories.base import BaseRepository


class FollowRepository(BaseRepository[Follow]):
    """关注关系仓储类。"""

    async def is_following(self, follower_id: UUID, following_id: UUID) -> bool:
        stmt = select(Follow.follower_id).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def follow(self, follower_id: UUID, following_id: UUID) -> bool:
        """建立关注边，返回是否新插入。"""
        inserted = await self.insert_ignore(
            [{"follower_id": follower_id, "following_id": following_id}],
            conflict_columns=["follower_id", "following_id"],
        )
        return inserted > 0

    async def unfollow(self, follower_id: UUID, following_id: UUID) -> bool:
        """删除关注边，返回是否确实删除了一行。"""
        stmt = delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def toggle(self, follower_id: UUID, following_id: UUID) -> bool:
        """切换关注状态，返回切换后是否处于关注中。"""
        if await self.unfollow(follower_id, following_id):
            return False
        await self.follow(follower_id, following_id)
        return True

    async def follower_count(self, account_id: UUID) -> int:
        return await self.count(Follow.following_id == account_id)

    async def following_count(self, account_id: UUID) -> int:
        return await self.count(Follow.follower_id == account_id)

    async def following_ids(self, follower_id: UUID) -> list[UUID]:
        """获取某账号关注的全部账号 ID (时间线 "仅关注" 过滤使用)。"""
        stmt = select(Follow.following_id).where(Follow.follower_id == follower_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

"""
File: app/domains/reactions/repository.py
Description: 反应仓储层 (Repository)

1. ReactionRepository: 反应目录 (管理员维护)
2. PostReactionRepository: 投稿反应成员关系
   - toggle: 条件 DELETE，未删除任何行时再 INSERT ... ON CONFLICT DO NOTHING
     同一 (post, user, reaction) 并发双击也不会出现第二行
   - counts_for_posts / reacted_by: 时间线批量聚合，避免逐条查询

Author: jinmozhe
Created: 2026-03-02
"""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select

from app.db.models.reaction import PostReaction, Reaction
from app.db.repositories.base import BaseRepository


class ReactionRepository(BaseRepository[Reaction]):
    """反应目录仓储类。"""

    async def list_ordered(self) -> list[Reaction]:
        stmt = select(Reaction).order_by(Reaction.sort_order, Reaction.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Reaction | None:
        result = await self.session.execute(select(Reaction).where(Reaction.name == name))
        return result.scalar_one_or_none()


class PostReactionRepository(BaseRepository[PostReaction]):
    """投稿反应仓储类。"""

    async def remove(self, post_id: UUID, user_id: UUID, reaction_id: UUID) -> bool:
        stmt = delete(PostReaction).where(
            PostReaction.post_id == post_id,
            PostReaction.user_id == user_id,
            PostReaction.reaction_id == reaction_id,
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def toggle(self, post_id: UUID, user_id: UUID, reaction_id: UUID) -> bool:
        """切换反应，返回切换后是否处于 "已反应" 状态。"""
        if await self.remove(post_id, user_id, reaction_id):
            return False
        await self.insert_ignore(
            [{"post_id": post_id, "user_id": user_id, "reaction_id": reaction_id}],
            conflict_columns=["post_id", "user_id", "reaction_id"],
        )
        return True

    async def counts_for_posts(
        self, post_ids: Sequence[UUID]
    ) -> dict[UUID, dict[UUID, int]]:
        """{post_id: {reaction_id: count}}，没有反应的投稿不出现在结果中。"""
        if not post_ids:
            return {}
        stmt = (
            select(PostReaction.post_id, PostReaction.reaction_id, func.count())
            .where(PostReaction.post_id.in_(post_ids))
            .group_by(PostReaction.post_id, PostReaction.reaction_id)
        )
        result = await self.session.execute(stmt)

        counts: dict[UUID, dict[UUID, int]] = defaultdict(dict)
        for post_id, reaction_id, count in result.all():
            counts[post_id][reaction_id] = count
        return dict(counts)

    async def reacted_by(
        self, post_ids: Sequence[UUID], user_id: UUID
    ) -> dict[UUID, list[UUID]]:
        """{post_id: [reaction_id, ...]}，某用户在这些投稿上已添加的反应。"""
        if not post_ids:
            return {}
        stmt = select(PostReaction.post_id, PostReaction.reaction_id).where(
            PostReaction.post_id.in_(post_ids),
            PostReaction.user_id == user_id,
        )
        result = await self.session.execute(stmt)

        reacted: dict[UUID, list[UUID]] = defaultdict(list)
        for post_id, reaction_id in result.all():
            reacted[post_id].append(reaction_id)
        return dict(reacted)


"""
File: app/domains/posts/repository.py
Description: 投稿仓储层 (Repository)

扩展功能：
1. replace_tags: 编辑时整体替换标签关联 (先全部删除再重新插入)
2. tag_names_for: 批量读取投稿的标签名 (按提交顺序)
3. delete_with_associations: 同一事务内显式删除 post_tags / post_reactions 后删除投稿
   (外键同样配置了 ON DELETE CASCADE，二者互为兜底)

Author: jinmozhe
Created: 2026-03-02
"""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select

from app.db.models.post import Post, PostTag
from app.db.models.reaction import PostReaction
from app.db.models.tag import Tag
from app.db.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """投稿仓储类。"""

    async def add_tags(self, post_id: UUID, tag_ids: Sequence[UUID]) -> None:
        """按提交顺序关联标签，已存在的关联静默跳过。"""
        await self.insert_ignore(
            [
                {"post_id": post_id, "tag_id": tag_id, "position": position}
                for position, tag_id in enumerate(tag_ids)
            ],
            conflict_columns=["post_id", "tag_id"],
            model=PostTag,
        )

    async def clear_tags(self, post_id: UUID) -> None:
        await self.session.execute(delete(PostTag).where(PostTag.post_id == post_id))

    async def replace_tags(self, post_id: UUID, tag_ids: Sequence[UUID]) -> None:
        await self.clear_tags(post_id)
        await self.add_tags(post_id, tag_ids)

    async def tag_names_for(self, post_ids: Sequence[UUID]) -> dict[UUID, list[str]]:
        if not post_ids:
            return {}
        stmt = (
            select(PostTag.post_id, Tag.name)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(PostTag.post_id.in_(post_ids))
            .order_by(PostTag.position, Tag.name)
        )
        result = await self.session.execute(stmt)

        names: dict[UUID, list[str]] = defaultdict(list)
        for post_id, name in result.all():
            names[post_id].append(name)
        return dict(names)

    async def delete_with_associations(self, post: Post) -> None:
        await self.clear_tags(post.id)
        await self.session.execute(
            delete(PostReaction).where(PostReaction.post_id == post.id)
        )
        await self.delete(post)

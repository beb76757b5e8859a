"""
File: app/domains/tags/repository.py
Description: 标签仓储层 (Repository)

标签的 get-or-create 必须是原子的：
1. 一条 INSERT ... ON CONFLICT (name) DO NOTHING 插入所有缺失的名称
2. 再按名称一次性查回全部行

两个并发投稿同时引入同一个新标签时，只会有一个 INSERT 生效，
另一个静默跳过并在第 2 步读到同一行，不会产生重复标签。

Author: jinmozhe
Created: 2026-03-02
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func, select
from uuid6 import uuid7

from app.db.models.post import PostTag
from app.db.models.tag import Tag
from app.db.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """标签仓储类。"""

    async def get_or_create_many(self, names: Sequence[str]) -> list[Tag]:
        """
        批量 get-or-create，按传入顺序返回标签。
        names 需已完成去重与空白处理。
        """
        if not names:
            return []

        await self.insert_ignore(
            [{"id": uuid7(), "name": name} for name in names],
            conflict_columns=["name"],
        )

        result = await self.session.execute(select(Tag).where(Tag.name.in_(names)))
        by_name = {tag.name: tag for tag in result.scalars().all()}
        return [by_name[name] for name in names]

    async def get_or_create(self, name: str) -> Tag:
        tags = await self.get_or_create_many([name])
        return tags[0]

    async def get_by_name(self, name: str) -> Tag | None:
        result = await self.session.execute(select(Tag).where(Tag.name == name))
        return result.scalar_one_or_none()

    async def list_popular(self, limit: int) -> list[tuple[Tag, int]]:
        """按关联投稿数倒序列出标签 (未被引用的标签计数为 0，同样可见)。"""
        usage = func.count(PostTag.post_id)
        stmt = (
            select(Tag, usage)
            .outerjoin(PostTag, PostTag.tag_id == Tag.id)
            .group_by(Tag.id)
            .order_by(usage.desc(), Tag.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(tag, count) for tag, count in result.all()]

    async def post_ids_with_tag(self, name: str) -> set[UUID]:
        """携带某标签的全部投稿 ID (时间线标签过滤的取交集步骤)。"""
        stmt = (
            select(PostTag.post_id)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(Tag.name == name)
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

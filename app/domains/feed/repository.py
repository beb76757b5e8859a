"""
File: app/domains/feed/repository.py
Description: 时间线仓储层 (Repository)

只负责投稿主表的过滤与排序；作者摘要、标签名与反应计数
由 PostService.present 批量补齐。

Author: jinmozhe
Created: 2026-03-02
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import or_, select

from app.db.models.post import Post
from app.db.repositories.base import BaseRepository
from app.domains.feed.constants import LIKE_ESCAPE


def escape_like(term: str) -> str:
    """转义 LIKE 通配符，让用户输入的 % 与 _ 按字面匹配。"""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class FeedRepository(BaseRepository[Post]):
    """时间线仓储类。"""

    async def list_posts(
        self,
        author_ids: Sequence[UUID] | None = None,
        region: str | None = None,
        search: str | None = None,
    ) -> list[Post]:
        """
        按条件读取投稿，按 created_at 倒序 (同一时刻按 id 倒序保证稳定)。
        author_ids 为 None 表示不限作者。
        """
        stmt = select(Post)

        if author_ids is not None:
            stmt = stmt.where(Post.author_id.in_(author_ids))
        if region:
            stmt = stmt.where(Post.region == region)
        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

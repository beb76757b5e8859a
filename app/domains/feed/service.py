"""
File: app/domains/feed/service.py
Description: 时间线查询引擎 (业务逻辑层)

查询步骤：
1. 互斥校验：author_id 与 following_only 不能同时指定
2. 作者范围：指定作者 → [作者]；只看关注 → 关注列表 (为空时直接返回 [])
3. 主表过滤：地域等值 + 标题/说明的不区分大小写子串搜索
4. 标签过滤：与携带该标签的投稿 ID 集合取交集 (读取之后进行)
5. 组装卡片：作者摘要 / 标签名 / 反应计数 / 观察者的反应

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from app.core.exceptions import AppException
from app.core.logging import logger
from app.core.response import ListData
from app.domains.feed.constants import FeedError
from app.domains.feed.repository import FeedRepository
from app.domains.feed.schemas import FeedFilters
from app.domains.follows.repository import FollowRepository
from app.domains.posts.schemas import PostRead
from app.domains.posts.service import PostService
from app.domains.tags.repository import TagRepository


class FeedService:
    def __init__(
        self,
        repo: FeedRepository,
        follow_repo: FollowRepository,
        tag_repo: TagRepository,
        post_service: PostService,
    ):
        self.repo = repo
        self.follow_repo = follow_repo
        self.tag_repo = tag_repo
        self.post_service = post_service

    async def _author_scope(
        self, filters: FeedFilters, viewer_id: UUID | None
    ) -> list[UUID] | None:
        if filters.author_id is not None:
            return [filters.author_id]
        if filters.following_only:
            if viewer_id is None:
                raise AppException(FeedError.LOGIN_REQUIRED)
            return await self.follow_repo.following_ids(viewer_id)
        return None

    async def query_feed(
        self, filters: FeedFilters, viewer_id: UUID | None = None
    ) -> ListData[PostRead]:
        if filters.author_id is not None and filters.following_only:
            raise AppException(FeedError.CONFLICTING_FILTERS)

        author_ids = await self._author_scope(filters, viewer_id)
        if author_ids is not None and not author_ids:
            # 没有关注任何人
            return ListData.of([])

        search = (filters.search or "").strip() or None
        posts = await self.repo.list_posts(
            author_ids=author_ids,
            region=filters.region or None,
            search=search,
        )

        tag = (filters.tag or "").strip()
        if tag and posts:
            tagged = await self.tag_repo.post_ids_with_tag(tag)
            posts = [post for post in posts if post.id in tagged]

        logger.bind(
            viewer_id=str(viewer_id) if viewer_id else None,
            following_only=filters.following_only,
            has_search=search is not None,
            tag=tag or None,
            count=len(posts),
        ).debug("Feed queried")

        return ListData.of(await self.post_service.present(posts, viewer_id))

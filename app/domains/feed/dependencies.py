"""
File: app/domains/feed/dependencies.py
Description: 时间线领域依赖注入 (DI)

依赖链：
DBSession → FeedRepository ─┐
FollowRepository ───────────┤
TagRepository ──────────────┤
PostService (卡片组装) ─────┴→ FeedService → FeedServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession
from app.db.models.post import Post
from app.domains.feed.repository import FeedRepository
from app.domains.feed.service import FeedService
from app.domains.follows.dependencies import FollowRepoDep
from app.domains.posts.dependencies import PostServiceDep
from app.domains.tags.dependencies import TagRepoDep


async def get_feed_repository(session: DBSession) -> FeedRepository:
    return FeedRepository(model=Post, session=session)


FeedRepoDep = Annotated[FeedRepository, Depends(get_feed_repository)]


async def get_feed_service(
    repo: FeedRepoDep,
    follow_repo: FollowRepoDep,
    tag_repo: TagRepoDep,
    post_service: PostServiceDep,
) -> FeedService:
    return FeedService(
        repo=repo, follow_repo=follow_repo, tag_repo=tag_repo, post_service=post_service
    )


FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]

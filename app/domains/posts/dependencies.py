"""
File: app/domains/posts/dependencies.py
Description: 投稿领域依赖注入 (DI)

依赖链：
DBSession → PostRepository ──────────┐
TagService (get-or-create) ──────────┤
ProfileRepository (作者摘要) ────────┤
PostReactionRepository (计数) ───────┤
MediaVault (投稿图片) ───────────────┴→ PostService → PostServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession, MediaVaultDep
from app.db.models.post import Post
from app.domains.posts.repository import PostRepository
from app.domains.posts.service import PostService
from app.domains.profiles.dependencies import ProfileRepoDep
from app.domains.reactions.dependencies import PostReactionRepoDep
from app.domains.tags.dependencies import TagServiceDep


async def get_post_repository(session: DBSession) -> PostRepository:
    return PostRepository(model=Post, session=session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


async def get_post_service(
    repo: PostRepoDep,
    tag_service: TagServiceDep,
    profile_repo: ProfileRepoDep,
    post_reaction_repo: PostReactionRepoDep,
    media_vault: MediaVaultDep,
) -> PostService:
    return PostService(
        repo=repo,
        tag_service=tag_service,
        profile_repo=profile_repo,
        post_reaction_repo=post_reaction_repo,
        media_vault=media_vault,
    )


PostServiceDep = Annotated[PostService, Depends(get_post_service)]

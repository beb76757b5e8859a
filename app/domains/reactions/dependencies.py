"""
File: app/domains/reactions/dependencies.py
Description: 反应领域依赖注入 (DI)

依赖链：
DBSession → ReactionRepository ─────┐
DBSession → PostReactionRepository ─┤
DBSession → PostRepository (存在性) ┴→ ReactionService → ReactionServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession
from app.db.models.post import Post
from app.db.models.reaction import PostReaction, Reaction
from app.domains.posts.repository import PostRepository
from app.domains.reactions.repository import PostReactionRepository, ReactionRepository
from app.domains.reactions.service import ReactionService


async def get_reaction_repository(session: DBSession) -> ReactionRepository:
    return ReactionRepository(model=Reaction, session=session)


async def get_post_reaction_repository(session: DBSession) -> PostReactionRepository:
    return PostReactionRepository(model=PostReaction, session=session)


ReactionRepoDep = Annotated[ReactionRepository, Depends(get_reaction_repository)]
PostReactionRepoDep = Annotated[
    PostReactionRepository, Depends(get_post_reaction_repository)
]


async def get_reaction_service(
    repo: ReactionRepoDep,
    post_reaction_repo: PostReactionRepoDep,
    session: DBSession,
) -> ReactionService:
    return ReactionService(
        repo=repo,
        post_reaction_repo=post_reaction_repo,
        post_repo=PostRepository(model=Post, session=session),
    )


ReactionServiceDep = Annotated[ReactionService, Depends(get_reaction_service)]

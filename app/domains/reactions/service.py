"""
File: app/domains/reactions/service.py
Description: 反应领域服务 (业务逻辑层)

本模块封装反应的业务规则：
1. 反应目录：按 sort_order 升序读取；只有管理员可以新增种类
2. 切换反应：存在则删除，不存在则插入；对同一 (投稿, 用户, 种类) 连续切换两次回到原状态
3. 计数：按种类聚合，附带观察者自己的反应

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import AppException
from app.core.logging import logger
from app.db.models.reaction import Reaction
from app.domains.posts.repository import PostRepository
from app.domains.reactions.constants import ReactionError
from app.domains.reactions.repository import PostReactionRepository, ReactionRepository
from app.domains.reactions.schemas import (
    ReactionCreate,
    ReactionRead,
    ReactionSummary,
    ReactionToggleResult,
)


class ReactionService:
    def __init__(
        self,
        repo: ReactionRepository,
        post_reaction_repo: PostReactionRepository,
        post_repo: PostRepository,
    ):
        self.repo = repo
        self.post_reaction_repo = post_reaction_repo
        self.post_repo = post_repo

    async def list_kinds(self) -> list[ReactionRead]:
        return [ReactionRead.model_validate(kind) for kind in await self.repo.list_ordered()]

    async def create_kind(self, data: ReactionCreate) -> Reaction:
        """新增反应种类 (管理员)。"""
        name = data.name.strip()
        if await self.repo.get_by_name(name):
            raise AppException(ReactionError.NAME_TAKEN)

        session = self.repo.session
        try:
            kind = await self.repo.add(
                Reaction(name=name, emoji=data.emoji.strip(), sort_order=data.sort_order)
            )
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise AppException(ReactionError.NAME_TAKEN) from None

        logger.bind(reaction_id=str(kind.id), name=name).info("Reaction kind created")
        return kind

    async def toggle(
        self, post_id: UUID, user_id: UUID, reaction_id: UUID
    ) -> ReactionToggleResult:
        if not await self.post_repo.exists(post_id):
            raise AppException(ReactionError.POST_NOT_FOUND)
        if not await self.repo.exists(reaction_id):
            raise AppException(ReactionError.KIND_NOT_FOUND)

        reacted = await self.post_reaction_repo.toggle(post_id, user_id, reaction_id)
        await self.post_reaction_repo.session.commit()

        logger.bind(
            post_id=str(post_id),
            user_id=str(user_id),
            reaction_id=str(reaction_id),
            reacted=reacted,
        ).debug("Reaction toggled")

        summary = await self.summary(post_id, user_id)
        return ReactionToggleResult(
            **summary.model_dump(), reaction_id=reaction_id, reacted=reacted
        )

    async def counts_by_kind(self, post_id: UUID) -> dict[UUID, int]:
        counts = await self.post_reaction_repo.counts_for_posts([post_id])
        return counts.get(post_id, {})

    async def summary(self, post_id: UUID, viewer_id: UUID | None = None) -> ReactionSummary:
        mine: list[UUID] = []
        if viewer_id is not None:
            reacted = await self.post_reaction_repo.reacted_by([post_id], viewer_id)
            mine = reacted.get(post_id, [])
        return ReactionSummary(
            post_id=post_id,
            counts=await self.counts_by_kind(post_id),
            my_reactions=mine,
        )

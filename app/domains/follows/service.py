"""
File: app/domains/follows/service.py
Description: 关注领域服务 (业务逻辑层)

本模块封装关注图的业务规则：
1. 关注 / 取消关注 / 切换：全部幂等，唯一性由复合主键保证
2. 禁止自我关注 (校验失败，写入前拒绝)
3. 目标账号必须存在 (写操作返回 404)
4. 关注数 / 粉丝数统计

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from app.core.exceptions import AppException
from app.core.logging import logger
from app.domains.auth.repository import AccountRepository
from app.domains.follows.constants import FollowError
from app.domains.follows.repository import FollowRepository
from app.domains.follows.schemas import FollowCounts, FollowStatus


class FollowService:
    def __init__(self, repo: FollowRepository, account_repo: AccountRepository):
        self.repo = repo
        self.account_repo = account_repo

    async def _check_target(self, follower_id: UUID, target_id: UUID) -> None:
        if follower_id == target_id:
            raise AppException(FollowError.SELF_FOLLOW)
        if not await self.account_repo.exists(target_id):
            raise AppException(FollowError.TARGET_NOT_FOUND)

    async def follow(self, follower_id: UUID, target_id: UUID) -> FollowStatus:
        await self._check_target(follower_id, target_id)

        created = await self.repo.follow(follower_id, target_id)
        await self.repo.session.commit()

        if created:
            logger.bind(follower_id=str(follower_id), following_id=str(target_id)).info(
                "Follow created"
            )
        return await self.status(follower_id, target_id)

    async def unfollow(self, follower_id: UUID, target_id: UUID) -> FollowStatus:
        await self._check_target(follower_id, target_id)

        removed = await self.repo.unfollow(follower_id, target_id)
        await self.repo.session.commit()

        if removed:
            logger.bind(follower_id=str(follower_id), following_id=str(target_id)).info(
                "Follow removed"
            )
        return await self.status(follower_id, target_id)

    async def toggle(self, follower_id: UUID, target_id: UUID) -> FollowStatus:
        await self._check_target(follower_id, target_id)

        await self.repo.toggle(follower_id, target_id)
        await self.repo.session.commit()

        return await self.status(follower_id, target_id)

    async def is_following(self, follower_id: UUID, target_id: UUID) -> bool:
        return await self.repo.is_following(follower_id, target_id)

    async def counts(self, account_id: UUID) -> FollowCounts:
        return FollowCounts(
            follower_count=await self.repo.follower_count(account_id),
            following_count=await self.repo.following_count(account_id),
        )

    async def status(self, viewer_id: UUID | None, target_id: UUID) -> FollowStatus:
        """
        读取观察者与目标之间的关注状态。
        匿名访客 (viewer_id 为 None) 或观察者即目标本人时 is_following 恒为 False。
        """
        following = False
        if viewer_id is not None and viewer_id != target_id:
            following = await self.repo.is_following(viewer_id, target_id)

        counts = await self.counts(target_id)
        return FollowStatus(
            target_id=target_id,
            is_following=following,
            follower_count=counts.follower_count,
            following_count=counts.following_count,
        )

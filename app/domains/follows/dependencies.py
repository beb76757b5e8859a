"""
File: app/domains/follows/dependencies.py
Description: 关注领域依赖注入 (DI)

依赖链：
DBSession → FollowRepository ─┐
DBSession → AccountRepository ┴→ FollowService → FollowServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession
from app.db.models.follow import Follow
from app.domains.auth.dependencies import AccountRepoDep
from app.domains.follows.repository import FollowRepository
from app.domains.follows.service import FollowService


async def get_follow_repository(session: DBSession) -> FollowRepository:
    return FollowRepository(model=Follow, session=session)


FollowRepoDep = Annotated[FollowRepository, Depends(get_follow_repository)]


async def get_follow_service(
    repo: FollowRepoDep, account_repo: AccountRepoDep
) -> FollowService:
    return FollowService(repo=repo, account_repo=account_repo)


FollowServiceDep = Annotated[FollowService, Depends(get_follow_service)]

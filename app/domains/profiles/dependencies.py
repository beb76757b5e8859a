"""
File: app/domains/profiles/dependencies.py
Description: 资料领域依赖注入 (DI)

依赖链：
DBSession → ProfileRepository ─┐
FollowRepository (计数) ───────┤
MediaVault (头像) ─────────────┴→ ProfileService → ProfileServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession, MediaVaultDep
from app.db.models.profile import Profile
from app.domains.follows.dependencies import FollowRepoDep
from app.domains.profiles.repository import ProfileRepository
from app.domains.profiles.service import ProfileService


async def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(model=Profile, session=session)


ProfileRepoDep = Annotated[ProfileRepository, Depends(get_profile_repository)]


async def get_profile_service(
    repo: ProfileRepoDep,
    follow_repo: FollowRepoDep,
    media_vault: MediaVaultDep,
) -> ProfileService:
    return ProfileService(repo=repo, follow_repo=follow_repo, media_vault=media_vault)


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]

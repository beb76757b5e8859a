"""
File: app/domains/signup/dependencies.py
Description: 注册流程依赖注入 (DI)

依赖链：
AuthService ────┐
ProfileService ─┤
Redis (草稿) ───┴→ SignupService → SignupServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.domains.auth.dependencies import AuthServiceDep, RedisDep
from app.domains.profiles.dependencies import ProfileServiceDep
from app.domains.signup.service import SignupService


async def get_signup_service(
    auth_service: AuthServiceDep,
    profile_service: ProfileServiceDep,
    redis: RedisDep,
) -> SignupService:
    return SignupService(
        auth_service=auth_service, profile_service=profile_service, redis=redis
    )


SignupServiceDep = Annotated[SignupService, Depends(get_signup_service)]

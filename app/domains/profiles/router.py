"""
File: app/domains/profiles/router.py
Description: 资料领域 HTTP 路由层

1. GET   /username-available: 用户名可用性 (公开，仅提示)
2. GET   /me: 我的资料 (已登录；注册未完成时 data 为 null，用于会话恢复)
3. PATCH /me/bio: 更新一言简介 (本人)
4. PUT   /me/avatar: 更新头像 (本人，multipart)
5. GET   /{account_id}: 个人主页资料 (公开；不存在时 data 为 null)

资料的创建属于注册流程，见 POST /signup/avatar。

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Query, Request, UploadFile

from app.api.deps import CurrentAccount, CurrentProfile, OptionalAccount
from app.core.response import ResponseModel
from app.core.storage import read_upload
from app.domains.profiles.constants import ProfileMsg
from app.domains.profiles.dependencies import ProfileServiceDep
from app.domains.profiles.schemas import (
    BioUpdate,
    ProfileDetail,
    ProfileRead,
    UsernameAvailability,
)

router = APIRouter()


@router.get(
    "/username-available",
    response_model=ResponseModel[UsernameAvailability],
    summary="用户名可用性",
    description="格式不合法或已被占用时返回 false。结果仅作提示，创建资料时以唯一约束为准。",
)
async def check_username(
    request: Request,
    username: Annotated[str, Query(max_length=64)],
    service: ProfileServiceDep,
) -> ResponseModel[UsernameAvailability]:
    available = await service.username_available(username)
    return ResponseModel.success(
        data=UsernameAvailability(username=username, available=available),
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/me",
    response_model=ResponseModel[ProfileDetail | None],
    summary="我的资料",
    description="已登录但尚未完成注册 (没有资料) 时返回 data=null。",
)
async def read_my_profile(
    request: Request,
    account: CurrentAccount,
    service: ProfileServiceDep,
) -> ResponseModel[ProfileDetail | None]:
    detail = await service.get_profile_detail(account.id, viewer_id=account.id)
    return ResponseModel.success(
        data=detail, request_id=getattr(request.state, "request_id", None)
    )


@router.patch(
    "/me/bio",
    response_model=ResponseModel[ProfileRead],
    summary="更新一言简介",
)
async def update_my_bio(
    request: Request,
    bio_in: BioUpdate,
    profile: CurrentProfile,
    service: ProfileServiceDep,
) -> ResponseModel[ProfileRead]:
    updated = await service.update_bio(profile, bio_in.bio)
    return ResponseModel.success(
        data=ProfileRead.model_validate(updated),
        message=ProfileMsg.BIO_UPDATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.put(
    "/me/avatar",
    response_model=ResponseModel[ProfileRead],
    summary="更新头像",
)
async def update_my_avatar(
    request: Request,
    profile: CurrentProfile,
    service: ProfileServiceDep,
    image: Annotated[UploadFile, File(description="头像图片")],
) -> ResponseModel[ProfileRead]:
    updated = await service.update_avatar(profile, await read_upload(image))
    return ResponseModel.success(
        data=ProfileRead.model_validate(updated),
        message=ProfileMsg.AVATAR_UPDATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/{account_id}",
    response_model=ResponseModel[ProfileDetail | None],
    summary="个人主页资料",
)
async def read_profile(
    request: Request,
    account_id: UUID,
    viewer: OptionalAccount,
    service: ProfileServiceDep,
) -> ResponseModel[ProfileDetail | None]:
    detail = await service.get_profile_detail(
        account_id, viewer_id=viewer.id if viewer else None
    )
    return ResponseModel.success(
        data=detail, request_id=getattr(request.state, "request_id", None)
    )

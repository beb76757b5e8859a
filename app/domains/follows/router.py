"""
File: app/domains/follows/router.py
Description: 关注领域 HTTP 路由层

1. GET    /{target_id}: 关注状态 + 计数 (公开，登录时附带 is_following)
2. PUT    /{target_id}: 关注 (幂等)
3. DELETE /{target_id}: 取消关注 (幂等)
4. POST   /{target_id}/toggle: 切换关注状态

关注边只能由关注者本人创建或删除，因此写接口的关注者固定为当前登录资料。

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from fastapi import APIRouter, Request

from app.api.deps import CurrentProfile, OptionalAccount
from app.core.response import ResponseModel
from app.domains.follows.constants import FollowMsg
from app.domains.follows.dependencies import FollowServiceDep
from app.domains.follows.schemas import FollowStatus

router = APIRouter()


@router.get(
    "/{target_id}",
    response_model=ResponseModel[FollowStatus],
    summary="关注状态",
)
async def read_follow_status(
    request: Request,
    target_id: UUID,
    viewer: OptionalAccount,
    service: FollowServiceDep,
) -> ResponseModel[FollowStatus]:
    status = await service.status(viewer.id if viewer else None, target_id)
    return ResponseModel.success(
        data=status, request_id=getattr(request.state, "request_id", None)
    )


@router.put(
    "/{target_id}",
    response_model=ResponseModel[FollowStatus],
    summary="关注",
    description="已关注时重复调用不会产生重复记录。不能关注自己。",
)
async def follow_account(
    request: Request,
    target_id: UUID,
    profile: CurrentProfile,
    service: FollowServiceDep,
) -> ResponseModel[FollowStatus]:
    status = await service.follow(profile.account_id, target_id)
    return ResponseModel.success(
        data=status,
        message=FollowMsg.FOLLOWED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.delete(
    "/{target_id}",
    response_model=ResponseModel[FollowStatus],
    summary="取消关注",
)
async def unfollow_account(
    request: Request,
    target_id: UUID,
    profile: CurrentProfile,
    service: FollowServiceDep,
) -> ResponseModel[FollowStatus]:
    status = await service.unfollow(profile.account_id, target_id)
    return ResponseModel.success(
        data=status,
        message=FollowMsg.UNFOLLOWED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.post(
    "/{target_id}/toggle",
    response_model=ResponseModel[FollowStatus],
    summary="切换关注状态",
)
async def toggle_follow(
    request: Request,
    target_id: UUID,
    profile: CurrentProfile,
    service: FollowServiceDep,
) -> ResponseModel[FollowStatus]:
    status = await service.toggle(profile.account_id, target_id)
    message = FollowMsg.FOLLOWED if status.is_following else FollowMsg.UNFOLLOWED
    return ResponseModel.success(
        data=status,
        message=message,
        request_id=getattr(request.state, "request_id", None),
    )

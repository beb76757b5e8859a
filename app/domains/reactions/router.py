"""
File: app/domains/reactions/router.py
Description: 反应领域 HTTP 路由层

1. GET  /: 反应目录 (公开，按 sort_order 升序)
2. POST /: 新增反应种类 (仅管理员)
3. GET  /posts/{post_id}: 投稿的反应计数 (公开，登录时附带我的反应)
4. POST /posts/{post_id}/{reaction_id}/toggle: 切换反应

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from fastapi import APIRouter, Request, status

from app.api.deps import AdminProfile, CurrentProfile, OptionalAccount
from app.core.response import ListData, ResponseModel
from app.domains.reactions.constants import ReactionMsg
from app.domains.reactions.dependencies import ReactionServiceDep
from app.domains.reactions.schemas import (
    ReactionCreate,
    ReactionRead,
    ReactionSummary,
    ReactionToggleResult,
)

router = APIRouter()


@router.get(
    "",
    response_model=ResponseModel[ListData[ReactionRead]],
    summary="反应目录",
)
async def list_reaction_kinds(
    request: Request, service: ReactionServiceDep
) -> ResponseModel[ListData[ReactionRead]]:
    kinds = await service.list_kinds()
    return ResponseModel.success(
        data=ListData.of(kinds), request_id=getattr(request.state, "request_id", None)
    )


@router.post(
    "",
    response_model=ResponseModel[ReactionRead],
    status_code=status.HTTP_201_CREATED,
    summary="新增反应种类 (管理员)",
)
async def create_reaction_kind(
    request: Request,
    data: ReactionCreate,
    admin: AdminProfile,
    service: ReactionServiceDep,
) -> ResponseModel[ReactionRead]:
    kind = await service.create_kind(data)
    return ResponseModel.success(
        data=ReactionRead.model_validate(kind),
        message=ReactionMsg.KIND_CREATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/posts/{post_id}",
    response_model=ResponseModel[ReactionSummary],
    summary="投稿的反应计数",
)
async def read_post_reactions(
    request: Request,
    post_id: UUID,
    viewer: OptionalAccount,
    service: ReactionServiceDep,
) -> ResponseModel[ReactionSummary]:
    summary = await service.summary(post_id, viewer.id if viewer else None)
    return ResponseModel.success(
        data=summary, request_id=getattr(request.state, "request_id", None)
    )


@router.post(
    "/posts/{post_id}/{reaction_id}/toggle",
    response_model=ResponseModel[ReactionToggleResult],
    summary="切换反应",
    description="已添加则移除，未添加则添加。投稿或反应种类不存在时返回 404。",
)
async def toggle_reaction(
    request: Request,
    post_id: UUID,
    reaction_id: UUID,
    profile: CurrentProfile,
    service: ReactionServiceDep,
) -> ResponseModel[ReactionToggleResult]:
    result = await service.toggle(post_id, profile.account_id, reaction_id)
    return ResponseModel.success(
        data=result, request_id=getattr(request.state, "request_id", None)
    )

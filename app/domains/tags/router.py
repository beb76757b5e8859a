"""
File: app/domains/tags/router.py
Description: 标签领域 HTTP 路由层

1. GET /: 常用标签列表 (按关联投稿数倒序，默认 20 条)

标签只在投稿创建 / 编辑时惰性创建，不提供单独的创建接口。

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from app.core.response import ListData, ResponseModel
from app.domains.tags.constants import POPULAR_TAGS_LIMIT, POPULAR_TAGS_MAX_LIMIT
from app.domains.tags.dependencies import TagServiceDep
from app.domains.tags.schemas import TagRead

router = APIRouter()


@router.get(
    "",
    response_model=ResponseModel[ListData[TagRead]],
    summary="常用标签",
)
async def list_tags(
    request: Request,
    service: TagServiceDep,
    limit: Annotated[int, Query(ge=1, le=POPULAR_TAGS_MAX_LIMIT)] = POPULAR_TAGS_LIMIT,
) -> ResponseModel[ListData[TagRead]]:
    tags = await service.list_popular(limit)
    return ResponseModel.success(
        data=ListData.of(tags), request_id=getattr(request.state, "request_id", None)
    )

"""
File: app/domains/feed/router.py
Description: 时间线 HTTP 路由层

1. GET /: 时间线 (可匿名；following_only 需要登录)

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from app.api.deps import OptionalAccount
from app.core.response import ListData, ResponseModel
from app.domains.feed.dependencies import FeedServiceDep
from app.domains.feed.schemas import FeedFilters
from app.domains.posts.schemas import PostRead

router = APIRouter()


@router.get(
    "",
    response_model=ResponseModel[ListData[PostRead]],
    summary="时间线",
    description="按创建时间倒序返回投稿。author_id 与 following_only 不能同时指定。",
)
async def query_feed(
    request: Request,
    filters: Annotated[FeedFilters, Query()],
    account: OptionalAccount,
    service: FeedServiceDep,
) -> ResponseModel[ListData[PostRead]]:
    feed = await service.query_feed(filters, viewer_id=account.id if account else None)
    return ResponseModel.success(
        data=feed, request_id=getattr(request.state, "request_id", None)
    )

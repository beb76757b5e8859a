"""
File: app/domains/posts/router.py
Description: 投稿领域 HTTP 路由层

1. POST   /: 创建投稿 (multipart：图片 + 表单字段，标签以逗号分隔)
2. GET    /regions: 地域选项
3. GET    /{post_id}: 投稿详情 (公开；不存在时 data 为 null)
4. PUT    /{post_id}: 编辑投稿 (仅作者；图片可选替换；标签整体替换)
5. DELETE /{post_id}: 删除投稿 (作者或管理员)

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from app.api.deps import CurrentProfile, OptionalAccount
from app.core.response import ResponseModel
from app.core.storage import read_upload
from app.domains.posts.constants import REGIONS, URL_MAX_LENGTH, PostMsg
from app.domains.posts.dependencies import PostServiceDep
from app.domains.posts.schemas import PostCreate, PostRead, PostUpdate

router = APIRouter()

# 表单字段 (创建与编辑共用)
TitleForm = Annotated[str, Form()]
DescriptionForm = Annotated[str, Form()]
RegionForm = Annotated[str | None, Form()]
UrlForm = Annotated[str | None, Form(max_length=URL_MAX_LENGTH)]
TagsForm = Annotated[str, Form(description="逗号分隔的标签，如: チョコ,北海道限定")]


@router.post(
    "",
    response_model=ResponseModel[PostRead],
    status_code=status.HTTP_201_CREATED,
    summary="创建投稿",
    description="URL 必须以 http:// 或 https:// 开头。校验失败时不会写入任何数据 (包括图片)。",
)
async def create_post(
    request: Request,
    profile: CurrentProfile,
    service: PostServiceDep,
    image: Annotated[UploadFile, File(description="投稿图片")],
    title: TitleForm,
    description: DescriptionForm = "",
    region: RegionForm = None,
    url: UrlForm = None,
    tags: TagsForm = "",
) -> ResponseModel[PostRead]:
    data = PostCreate(
        title=title, description=description, region=region, url=url, tags=[tags]
    )
    post = await service.create_post(profile.account_id, data, await read_upload(image))
    detail = await service.get_post(post.id, viewer_id=profile.account_id)

    return ResponseModel.success(
        data=detail,
        message=PostMsg.CREATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/regions",
    response_model=ResponseModel[list[str]],
    summary="地域选项",
)
async def list_regions(request: Request) -> ResponseModel[list[str]]:
    return ResponseModel.success(
        data=list(REGIONS), request_id=getattr(request.state, "request_id", None)
    )


@router.get(
    "/{post_id}",
    response_model=ResponseModel[PostRead | None],
    summary="投稿详情",
)
async def read_post(
    request: Request,
    post_id: UUID,
    viewer: OptionalAccount,
    service: PostServiceDep,
) -> ResponseModel[PostRead | None]:
    detail = await service.get_post(post_id, viewer_id=viewer.id if viewer else None)
    return ResponseModel.success(
        data=detail, request_id=getattr(request.state, "request_id", None)
    )


@router.put(
    "/{post_id}",
    response_model=ResponseModel[PostRead],
    summary="编辑投稿",
    description="仅作者本人可编辑 (管理员也不可编辑他人投稿)。标签集合整体替换。",
)
async def edit_post(
    request: Request,
    post_id: UUID,
    profile: CurrentProfile,
    service: PostServiceDep,
    title: TitleForm,
    description: DescriptionForm = "",
    region: RegionForm = None,
    url: UrlForm = None,
    tags: TagsForm = "",
    image: Annotated[UploadFile | None, File(description="替换图片 (可选)")] = None,
) -> ResponseModel[PostRead]:
    data = PostUpdate(
        title=title, description=description, region=region, url=url, tags=[tags]
    )
    upload = await read_upload(image) if image is not None else None
    post = await service.edit_post(post_id, profile.account_id, data, upload)
    detail = await service.get_post(post.id, viewer_id=profile.account_id)

    return ResponseModel.success(
        data=detail,
        message=PostMsg.UPDATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.delete(
    "/{post_id}",
    response_model=ResponseModel[None],
    summary="删除投稿",
    description="作者本人或管理员可删除。关联的标签关系与反应一并删除，标签本身保留。",
)
async def delete_post(
    request: Request,
    post_id: UUID,
    profile: CurrentProfile,
    service: PostServiceDep,
) -> ResponseModel[None]:
    await service.delete_post(post_id, profile)
    return ResponseModel.success(
        data=None,
        message=PostMsg.DELETED,
        request_id=getattr(request.state, "request_id", None),
    )

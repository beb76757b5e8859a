"""
File: app/domains/signup/router.py
Description: 注册流程 HTTP 路由层

1. POST /credentials: 凭证步骤 (公开)，创建账号并返回 Token
2. GET  /state: 当前步骤 (会话恢复)
3. POST /profile: 资料步骤 (用户名 + 显示名)
4. POST /back: 后退一步
5. POST /avatar: 头像步骤 (multipart；带图注册或 skip=true 跳过)

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from app.api.deps import CurrentAccount
from app.core.response import ResponseModel
from app.core.storage import read_upload
from app.domains.signup.constants import SignupMsg
from app.domains.signup.dependencies import SignupServiceDep
from app.domains.signup.schemas import (
    SignupCredentials,
    SignupCredentialsResult,
    SignupProfileIn,
    SignupState,
)

router = APIRouter()


@router.post(
    "/credentials",
    response_model=ResponseModel[SignupCredentialsResult],
    status_code=status.HTTP_201_CREATED,
    summary="注册: 凭证步骤",
    description=(
        "密码至少 8 位且同时包含英字与数字。成功后账号立即登录，进入资料步骤。"
        "尚未完成资料的账号用相同密码再次提交时重新登录。"
    ),
)
async def submit_credentials(
    request: Request,
    data: SignupCredentials,
    service: SignupServiceDep,
) -> ResponseModel[SignupCredentialsResult]:
    result = await service.submit_credentials(data)
    return ResponseModel.success(
        data=result,
        message=SignupMsg.ACCOUNT_CREATED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/state",
    response_model=ResponseModel[SignupState],
    summary="注册: 当前步骤",
    description="已登录但没有资料的账号返回未完成的步骤；已有资料时返回 complete。",
)
async def read_signup_state(
    request: Request,
    account: CurrentAccount,
    service: SignupServiceDep,
) -> ResponseModel[SignupState]:
    state = await service.get_state(account.id)
    return ResponseModel.success(
        data=state, request_id=getattr(request.state, "request_id", None)
    )


@router.post(
    "/profile",
    response_model=ResponseModel[SignupState],
    summary="注册: 资料步骤",
)
async def submit_profile(
    request: Request,
    data: SignupProfileIn,
    account: CurrentAccount,
    service: SignupServiceDep,
) -> ResponseModel[SignupState]:
    state = await service.submit_profile(account.id, data.username, data.display_name)
    return ResponseModel.success(
        data=state,
        message=SignupMsg.PROFILE_ACCEPTED,
        request_id=getattr(request.state, "request_id", None),
    )


@router.post(
    "/back",
    response_model=ResponseModel[SignupState],
    summary="注册: 后退一步",
)
async def go_back(
    request: Request,
    account: CurrentAccount,
    service: SignupServiceDep,
) -> ResponseModel[SignupState]:
    state = await service.go_back(account.id)
    return ResponseModel.success(
        data=state, request_id=getattr(request.state, "request_id", None)
    )


@router.post(
    "/avatar",
    response_model=ResponseModel[SignupState],
    summary="注册: 头像步骤",
    description="上传头像完成注册，或传 skip=true 跳过头像。失败时停留在头像步骤。",
)
async def complete_signup(
    request: Request,
    account: CurrentAccount,
    service: SignupServiceDep,
    image: Annotated[UploadFile | None, File(description="头像图片")] = None,
    skip: Annotated[bool, Form()] = False,
) -> ResponseModel[SignupState]:
    upload = await read_upload(image) if image is not None else None
    state = await service.complete(account.id, avatar=upload, skip_avatar=skip)
    return ResponseModel.success(
        data=state,
        message=SignupMsg.COMPLETED,
        request_id=getattr(request.state, "request_id", None),
    )

"""
File: app/domains/auth/router.py
Description: 认证领域 HTTP 路由层

1. POST /login: 邮箱密码登录 (返回双 Token)
2. POST /refresh: 刷新 (旋转策略，返回新双 Token)
3. POST /logout: 登出 (销毁 Refresh Token)
4. GET  /me: 当前会话 (是否已完成注册)

账号创建属于注册流程的凭证步骤，见 POST /signup/credentials。

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (Email login, /me session check)
"""

from fastapi import APIRouter, Request

from app.api.deps import CurrentAccount
from app.core.response import ResponseModel
from app.domains.auth.constants import AuthMsg
from app.domains.auth.dependencies import AuthServiceDep
from app.domains.auth.schemas import AccountSession, LoginRequest, RefreshRequest, Token
from app.domains.profiles.dependencies import ProfileServiceDep

router = APIRouter()


@router.post(
    "/login",
    response_model=ResponseModel[Token],
    summary="登录",
    description="邮箱不区分大小写。账号不存在与密码错误返回相同的错误。",
)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthServiceDep,
) -> ResponseModel[Token]:
    token = await service.login(login_data)
    return ResponseModel.success(
        data=token,
        message=AuthMsg.LOGIN_SUCCESS,
        request_id=getattr(request.state, "request_id", None),
    )


@router.post(
    "/refresh",
    response_model=ResponseModel[Token],
    summary="刷新令牌",
    description="Refresh Token 只能使用一次，成功后旧 Token 立即失效。",
)
async def refresh_token(
    request: Request,
    refresh_data: RefreshRequest,
    service: AuthServiceDep,
) -> ResponseModel[Token]:
    token = await service.refresh_token(refresh_data.refresh_token)
    return ResponseModel.success(
        data=token,
        message=AuthMsg.REFRESH_SUCCESS,
        request_id=getattr(request.state, "request_id", None),
    )


@router.post(
    "/logout",
    response_model=ResponseModel[None],
    summary="登出",
)
async def logout(
    request: Request,
    refresh_data: RefreshRequest,
    service: AuthServiceDep,
) -> ResponseModel[None]:
    await service.logout(refresh_data.refresh_token)
    return ResponseModel.success(
        message=AuthMsg.LOGOUT_SUCCESS,
        request_id=getattr(request.state, "request_id", None),
    )


@router.get(
    "/me",
    response_model=ResponseModel[AccountSession],
    summary="当前会话",
)
async def read_session(
    request: Request,
    account: CurrentAccount,
    profile_service: ProfileServiceDep,
) -> ResponseModel[AccountSession]:
    session = AccountSession(
        account_id=account.id,
        email=account.email,
        has_profile=await profile_service.has_profile(account.id),
    )
    return ResponseModel.success(
        data=session, request_id=getattr(request.state, "request_id", None)
    )

"""
File: app/domains/auth/schemas.py
Description: 认证领域 Pydantic 模型 (Schema)

本模块定义了认证相关的输入/输出数据结构：
1. Token: 登录/刷新成功后返回的双 Token 结构
2. LoginRequest: 邮箱密码登录请求参数
3. RefreshRequest: 刷新 Token 请求参数
4. check_password_policy: 密码策略校验 (注册凭证步骤与 Service 层共用)

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (Email login / password policy)
"""

import re
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.domains.auth.constants import PASSWORD_MIN_LENGTH, AuthError

# ------------------------------------------------------------------------------
# Password Policy (密码策略)
# ------------------------------------------------------------------------------

LETTER_PATTERN = re.compile(r"[A-Za-z]")
DIGIT_PATTERN = re.compile(r"[0-9]")


def check_password_policy(password: str) -> AuthError | None:
    """
    校验密码强度，返回第一条不满足的规则 (全部满足时返回 None)。

    规则：长度 >= 8，包含英字，包含数字；符号允许但不强制。
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return AuthError.PASSWORD_TOO_SHORT
    if not LETTER_PATTERN.search(password):
        return AuthError.PASSWORD_NO_LETTER
    if not DIGIT_PATTERN.search(password):
        return AuthError.PASSWORD_NO_DIGIT
    return None


# ------------------------------------------------------------------------------
# Schemas
# ------------------------------------------------------------------------------


class Token(BaseModel):
    """
    双 Token 响应结构 (Access + Refresh)。
    """

    access_token: str = Field(..., description="访问令牌 (JWT, 短效)")
    refresh_token: str = Field(..., description="刷新令牌 (随机串, 长效, 用于续期)")
    token_type: str = Field(default="bearer", description="令牌类型 (通常为 bearer)")
    expires_in: int = Field(..., description="Access Token 有效期 (秒)")


class LoginRequest(BaseModel):
    """
    邮箱密码登录请求参数。
    """

    email: EmailStr = Field(..., description="登录邮箱", examples=["alice@example.com"])
    password: str = Field(..., min_length=1, description="密码")


class RefreshRequest(BaseModel):
    """
    刷新 Token 请求参数。
    """

    refresh_token: str = Field(..., description="有效的刷新令牌")


class AccountSession(BaseModel):
    """
    当前登录会话。客户端启动时据此判断是否需要回到注册流程。
    """

    account_id: UUID
    email: EmailStr
    has_profile: bool = Field(..., description="false 表示注册未完成，应调用 /signup/state")

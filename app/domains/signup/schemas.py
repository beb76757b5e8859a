"""
File: app/domains/signup/schemas.py
Description: 注册流程 Pydantic 模型 (Schema)

1. SignupCredentials: 凭证步骤 (邮箱 + 密码 + 确认密码)
2. SignupProfileIn: 资料步骤 (用户名 + 显示名)
3. SignupState: 当前步骤与草稿内容 (会话恢复)
4. SignupCredentialsResult: 账号创建并登录后的 Token 与状态

密码策略与用户名规则由 Service 层校验，错误文案原样返回。

Author: jinmozhe
Created: 2026-03-02
"""

from pydantic import BaseModel, EmailStr, Field

from app.domains.auth.constants import PASSWORD_MAX_LENGTH
from app.domains.auth.schemas import Token
from app.domains.signup.constants import SignupStep


class SignupCredentials(BaseModel):
    email: EmailStr = Field(..., examples=["alice@example.com"])
    password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)
    password_confirm: str = Field(..., max_length=PASSWORD_MAX_LENGTH)


class SignupProfileIn(BaseModel):
    username: str = Field(..., max_length=64, examples=["alice_1"])
    display_name: str = Field(..., max_length=64, examples=["Alice"])


class SignupState(BaseModel):
    step: SignupStep
    username: str | None = None
    display_name: str | None = None


class SignupCredentialsResult(BaseModel):
    token: Token
    state: SignupState

"""
File: app/domains/signup/constants.py
Description: 注册流程常量定义 (步骤枚举 + 错误码 + 成功提示)
Namespace: signup.*

Author: jinmozhe
Created: 2026-03-02
"""

from enum import Enum

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_409_CONFLICT

from app.core.error_code import BaseErrorCode

# Redis 草稿 Key: signup:{account_id}
SIGNUP_DRAFT_KEY = "signup:{account_id}"


class SignupStep(str, Enum):
    """注册步骤"""

    CREDENTIALS = "credentials"
    PROFILE = "profile"
    AVATAR = "avatar"
    COMPLETE = "complete"


class SignupError(BaseErrorCode):
    """注册流程错误定义"""

    INVALID_TRANSITION = (
        HTTP_409_CONFLICT,
        "signup.invalid_transition",
        "この手順には進めません",
    )
    AVATAR_REQUIRED = (
        HTTP_400_BAD_REQUEST,
        "signup.avatar_required",
        "画像ファイルを選択してください",
    )


class SignupMsg:
    ACCOUNT_CREATED = "アカウントを作成しました"
    PROFILE_ACCEPTED = "プロフィール情報を保存しました"
    COMPLETED = "登録が完了しました"

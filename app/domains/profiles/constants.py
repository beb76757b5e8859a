"""
File: app/domains/profiles/constants.py
Description: 资料领域常量定义 (校验规则 + 错误码 + 成功提示)
Namespace: profiles.*

Author: jinmozhe
Created: 2026-03-02
"""

import re

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_409_CONFLICT

from app.core.error_code import BaseErrorCode
from app.db.models.profile import BIO_MAX_LENGTH, DISPLAY_NAME_MAX_LENGTH

# 用户名：3-20 位英数字与下划线 (大小写敏感)
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")


class ProfileError(BaseErrorCode):
    """资料领域错误定义"""

    # HTTP 400: 写入前校验失败，文案原样返回
    INVALID_USERNAME = (
        HTTP_400_BAD_REQUEST,
        "profiles.invalid_username",
        "3〜20文字、英数字とアンダースコアのみ使用可",
    )
    MISSING_NAMES = (
        HTTP_400_BAD_REQUEST,
        "profiles.invalid_display_name",
        "ユーザー名と表示名を入力してください",
    )
    DISPLAY_NAME_TOO_LONG = (
        HTTP_400_BAD_REQUEST,
        "profiles.invalid_display_name",
        f"表示名は{DISPLAY_NAME_MAX_LENGTH}文字以内で入力してください",
    )
    BIO_TOO_LONG = (
        HTTP_400_BAD_REQUEST,
        "profiles.invalid_bio",
        f"自己紹介は{BIO_MAX_LENGTH}文字以内で入力してください",
    )

    # HTTP 409: 唯一约束冲突
    USERNAME_TAKEN = (
        HTTP_409_CONFLICT,
        "profiles.username_taken",
        "このユーザー名は既に使用されています",
    )
    PROFILE_EXISTS = (
        HTTP_409_CONFLICT,
        "profiles.profile_exists",
        "プロフィールは既に作成されています",
    )


class ProfileMsg:
    BIO_UPDATED = "自己紹介を更新しました"
    AVATAR_UPDATED = "アバターを更新しました"

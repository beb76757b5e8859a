"""
File: app/domains/follows/constants.py
Description: 关注领域常量定义 (错误码 + 成功提示)
Namespace: follows.*

Author: jinmozhe
Created: 2026-03-02
"""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from app.core.error_code import BaseErrorCode


class FollowError(BaseErrorCode):
    """关注领域错误定义"""

    SELF_FOLLOW = (
        HTTP_400_BAD_REQUEST,
        "follows.self_follow",
        "自分自身をフォローすることはできません",
    )
    TARGET_NOT_FOUND = (
        HTTP_404_NOT_FOUND,
        "follows.target_not_found",
        "ユーザーが見つかりません",
    )


class FollowMsg:
    FOLLOWED = "フォローしました"
    UNFOLLOWED = "フォローを解除しました"

"""
File: app/domains/reactions/constants.py
Description: 反应领域常量定义 (错误码 + 成功提示)
Namespace: reactions.*

Author: jinmozhe
Created: 2026-03-02
"""

from starlette.status import HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from app.core.error_code import BaseErrorCode


class ReactionError(BaseErrorCode):
    """反应领域错误定义"""

    POST_NOT_FOUND = (HTTP_404_NOT_FOUND, "reactions.post_not_found", "投稿が見つかりません")
    KIND_NOT_FOUND = (
        HTTP_404_NOT_FOUND,
        "reactions.kind_not_found",
        "リアクションが見つかりません",
    )
    NAME_TAKEN = (
        HTTP_409_CONFLICT,
        "reactions.name_taken",
        "同じ名前のリアクションが既に存在します",
    )


class ReactionMsg:
    KIND_CREATED = "リアクションを追加しました"

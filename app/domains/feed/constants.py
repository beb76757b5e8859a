"""
File: app/domains/feed/constants.py
Description: 时间线领域常量定义 (错误码)
Namespace: feed.*

Author: jinmozhe
Created: 2026-03-02
"""

from starlette.status import HTTP_400_BAD_REQUEST

from app.core.error_code import BaseErrorCode

# LIKE 通配符转义字符
LIKE_ESCAPE = "\\"


class FeedError(BaseErrorCode):
    """时间线领域错误定义"""

    CONFLICTING_FILTERS = (
        HTTP_400_BAD_REQUEST,
        "feed.conflicting_filters",
        "投稿者の指定とフォロー中のみの指定は同時に使用できません",
    )
    LOGIN_REQUIRED = (
        HTTP_400_BAD_REQUEST,
        "feed.login_required",
        "フォロー中の投稿を見るにはログインしてください",
    )

"""
File: app/domains/tags/constants.py
Description: 标签领域常量定义
Namespace: tags.*

Author: jinmozhe
Created: 2026-03-02
"""

from starlette.status import HTTP_400_BAD_REQUEST

from app.core.error_code import BaseErrorCode
from app.db.models.tag import TAG_NAME_MAX_LENGTH

# 输入框中多个标签以半角逗号分隔
TAG_SEPARATOR = ","

# 搜索面板 "人気のタグ" 默认展示数量
POPULAR_TAGS_LIMIT = 20
POPULAR_TAGS_MAX_LIMIT = 100


class TagError(BaseErrorCode):
    NAME_TOO_LONG = (
        HTTP_400_BAD_REQUEST,
        "tags.invalid_name",
        f"タグは{TAG_NAME_MAX_LENGTH}文字以内で入力してください",
    )

"""
File: app/domains/posts/constants.py
Description: 投稿领域常量定义 (地域枚举 + 校验规则 + 错误码 + 成功提示)
Namespace: posts.*

Author: jinmozhe
Created: 2026-03-02
"""

import re

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from app.core.error_code import BaseErrorCode
from app.db.models.post import TITLE_MAX_LENGTH

# 地域：全国 / 海外 + 47 都道府县
REGIONS: tuple[str, ...] = (
    "全国",
    "海外",
    "北海道",
    "青森県",
    "岩手県",
    "宮城県",
    "秋田県",
    "山形県",
    "福島県",
    "茨城県",
    "栃木県",
    "群馬県",
    "埼玉県",
    "千葉県",
    "東京都",
    "神奈川県",
    "新潟県",
    "富山県",
    "石川県",
    "福井県",
    "山梨県",
    "長野県",
    "岐阜県",
    "静岡県",
    "愛知県",
    "三重県",
    "滋賀県",
    "京都府",
    "大阪府",
    "兵庫県",
    "奈良県",
    "和歌山県",
    "鳥取県",
    "島根県",
    "岡山県",
    "広島県",
    "山口県",
    "徳島県",
    "香川県",
    "愛媛県",
    "高知県",
    "福岡県",
    "佐賀県",
    "長崎県",
    "熊本県",
    "大分県",
    "宮崎県",
    "鹿児島県",
    "沖縄県",
)

# 相关链接只接受 http / https
URL_PATTERN = re.compile(r"^https?://.+")
URL_MAX_LENGTH = 2048


class PostError(BaseErrorCode):
    """投稿领域错误定义"""

    # HTTP 400: 写入前校验失败 (无任何部分写入)
    INVALID_URL = (
        HTTP_400_BAD_REQUEST,
        "posts.invalid_url",
        "URLはhttp://またはhttps://から始まる必要があります",
    )
    INVALID_REGION = (
        HTTP_400_BAD_REQUEST,
        "posts.invalid_region",
        "地域を一覧から選択してください",
    )
    TITLE_REQUIRED = (
        HTTP_400_BAD_REQUEST,
        "posts.invalid_title",
        "タイトルを入力してください",
    )
    TITLE_TOO_LONG = (
        HTTP_400_BAD_REQUEST,
        "posts.invalid_title",
        f"タイトルは{TITLE_MAX_LENGTH}文字以内で入力してください",
    )

    # HTTP 403: 编辑仅限作者，删除限作者或管理员
    EDIT_FORBIDDEN = (
        HTTP_403_FORBIDDEN,
        "posts.edit_forbidden",
        "この投稿を編集する権限がありません",
    )
    DELETE_FORBIDDEN = (
        HTTP_403_FORBIDDEN,
        "posts.delete_forbidden",
        "この投稿を削除する権限がありません",
    )

    # HTTP 404: 写操作目标不存在
    NOT_FOUND = (HTTP_404_NOT_FOUND, "posts.not_found", "投稿が見つかりません")


class PostMsg:
    CREATED = "投稿しました"
    UPDATED = "投稿を更新しました"
    DELETED = "投稿を削除しました"

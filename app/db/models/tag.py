"""
File: app/db/models/tag.py
Description: 标签模型

标签按名称精确匹配 (不做大小写/全半角归一)，首次使用时惰性创建，
即使不再被任何投稿引用也不会删除。
名称唯一性由数据库约束保证，创建走 INSERT ... ON CONFLICT DO NOTHING。

Author: jinmozhe
Created: 2026-03-02
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.db.models.base import CreatedAtMixin, UUIDBase

TAG_NAME_MAX_LENGTH = 50


class Tag(UUIDBase, CreatedAtMixin):
    """标签表"""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "tags"

    __table_args__ = (CheckConstraint("length(name) > 0", name="name_not_empty"),)

    name: Mapped[str] = mapped_column(
        String(TAG_NAME_MAX_LENGTH), unique=True, nullable=False, comment="标签名"
    )

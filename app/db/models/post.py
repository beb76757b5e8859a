"""
File: app/db/models/post.py
Description: 投稿模型与投稿-标签关联表

Post:
- image_url 必填，编辑时可替换
- edited_at 创建时为 NULL，每次编辑都会刷新
- author_id 必须引用已存在的账号

PostTag (多对多关联):
- 复合主键 (post_id, tag_id)，同一投稿不会重复关联同一标签
- 投稿删除时级联删除 (ondelete=CASCADE)；Repository 层也会在同一事务内显式删除

Author: jinmozhe
Created: 2026-03-02
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.db.models.base import Base, CreatedAtMixin, UUIDModel

TITLE_MAX_LENGTH = 100
REGION_MAX_LENGTH = 10


class Post(UUIDModel):
    """投稿表"""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "posts"

    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="title_not_empty"),
        CheckConstraint("length(image_url) > 0", name="image_url_not_empty"),
        # 时间线按作者 + 时间倒序读取
        Index("ix_posts_author_created", "author_id", "created_at"),
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        comment="作者账号ID",
    )

    image_url: Mapped[str] = mapped_column(
        String(512), nullable=False, comment="投稿图片URL"
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH), nullable=False, comment="标题"
    )

    description: Mapped[str] = mapped_column(
        Text, default="", server_default=text("''"), nullable=False, comment="说明"
    )

    region: Mapped[str | None] = mapped_column(
        String(REGION_MAX_LENGTH), nullable=True, index=True, comment="地域"
    )

    url: Mapped[str | None] = mapped_column(
        String(2048), nullable=True, comment="相关链接 (http/https)"
    )

    edited_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="最后编辑时间 (UTC)"
    )


class PostTag(Base, CreatedAtMixin):
    """投稿-标签关联表"""

    __tablename__ = "post_tags"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
        comment="投稿ID",
    )

    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("tags.id"),
        primary_key=True,
        index=True,
        comment="标签ID",
    )

    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default=text("0"),
        nullable=False,
        comment="提交时的顺序 (从 0 开始)",
    )

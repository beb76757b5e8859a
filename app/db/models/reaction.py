"""
File: app/db/models/reaction.py
Description: 反应目录与投稿反应模型

Reaction (目录):
- 由管理员维护的固定目录，普通用户不可创建

PostReaction (成员关系):
- 复合主键 (post_id, user_id, reaction_id)：同一用户对同一投稿的同一反应最多一行
- 切换语义：存在则删除，不存在则插入，唯一性由主键保证而非客户端检查

Author: jinmozhe
Created: 2026-03-02
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.db.models.base import Base, CreatedAtMixin, UUIDBase


class Reaction(UUIDBase, CreatedAtMixin):
    """反应目录表"""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "reactions"

    name: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, comment="反应名称"
    )

    emoji: Mapped[str] = mapped_column(String(16), nullable=False, comment="表情")

    sort_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default=text("0"),
        nullable=False,
        comment="排序 (升序)",
    )


class PostReaction(Base, CreatedAtMixin):
    """投稿反应表"""

    __tablename__ = "post_reactions"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
        comment="投稿ID",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        primary_key=True,
        comment="反应者账号ID",
    )

    reaction_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("reactions.id"),
        primary_key=True,
        comment="反应ID",
    )

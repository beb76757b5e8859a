"""
File: app/db/models/follow.py
Description: 关注关系模型 (有向边)

- 复合主键 (follower_id, following_id)：同一有序对只存在一条边
- 有向、非对称：A 关注 B 不代表 B 关注 A
- 禁止自我关注由数据库 CheckConstraint 兜底

Author: jinmozhe
Created: 2026-03-02
"""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base, CreatedAtMixin


class Follow(Base, CreatedAtMixin):
    """关注关系表"""

    __tablename__ = "follows"

    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="no_self_follow"),
    )

    follower_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        primary_key=True,
        comment="关注者账号ID",
    )

    following_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        primary_key=True,
        index=True,
        comment="被关注者账号ID",
    )

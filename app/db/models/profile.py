"""
File: app/db/models/profile.py
Description: 用户公开资料模型 (1:1 Account)

注意：
采用 "No-Relationship" 模式，不显式定义 ORM relationship。
Account 与 Profile 的关联仅通过 account_id 外键 + 唯一约束保证 1:1。
用户名唯一性由数据库唯一约束兜底，可用性检查接口仅作提示。

Author: jinmozhe
Created: 2025-12-02
Updated: 2026-03-02 (Public profile)
"""

import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, Uuid, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.db.models.base import UUIDModel

USERNAME_MAX_LENGTH = 20
DISPLAY_NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 150


class Profile(UUIDModel):
    """
    用户资料表
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "profiles"

    __table_args__ = (
        CheckConstraint(
            "length(trim(display_name)) > 0", name="display_name_not_empty"
        ),
        CheckConstraint(f"length(bio) <= {BIO_MAX_LENGTH}", name="bio_length"),
    )

    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        unique=True,  # 确保 1:1 关系
        nullable=False,
        comment="关联账号ID",
    )

    # 用户名 (@xxx)：3-20 位英数字与下划线，大小写敏感
    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), unique=True, nullable=False, comment="用户名"
    )

    display_name: Mapped[str] = mapped_column(
        String(DISPLAY_NAME_MAX_LENGTH), nullable=False, comment="显示名"
    )

    # 头像：存储 Media Vault 公开 URL
    avatar_url: Mapped[str | None] = mapped_column(
        String(512), nullable=True, comment="头像URL"
    )

    bio: Mapped[str] = mapped_column(
        String(BIO_MAX_LENGTH),
        default="",
        server_default=text("''"),
        nullable=False,
        comment="一言简介",
    )

    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=text("false"),
        nullable=False,
        comment="是否管理员",
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=text("false"),
        nullable=False,
        comment="是否认证账号",
    )

"""
File: app/db/models/account.py
Description: 账号凭证模型 (Identity)

账号只承载登录凭证 (邮箱 + 密码哈希)。
展示资料 (用户名、昵称、头像等) 放在 profiles 表，1:1 关联，
且只有在凭证校验通过、账号创建并登录之后才会创建。

严格模式：
- CheckConstraint 防止关键字段存入空字符串
- 邮箱唯一性由数据库唯一约束保证

Author: jinmozhe
Created: 2025-11-25
Updated: 2026-03-02 (Email credential account)
"""

from sqlalchemy import Boolean, CheckConstraint, String, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.db.models.base import UUIDModel


class Account(UUIDModel):
    """
    账号模型 (认证域)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "accounts"

    __table_args__ = (
        CheckConstraint("length(trim(email)) > 0", name="email_not_empty"),
        CheckConstraint("length(hashed_password) > 0", name="password_not_empty"),
    )

    # 邮箱：登录凭证，统一转小写后存储
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="登录邮箱"
    )

    # 密码：存储 Argon2id 哈希值
    hashed_password: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="密码哈希值"
    )

    # 账号状态
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=text("true"),
        nullable=False,
        comment="是否激活",
    )

"""
File: app/db/models/base.py
Description: ORM 模型基类与组件化定义

本模块采用"组件化组合" (Mixin) 模式：
1. Base: 声明式基类 + 约束命名约定
2. CreatedAtMixin: [组件] 仅 created_at (用于关联表: post_tags / post_reactions / follows)
3. TimestampMixin: [组件] created_at + updated_at (UTC, TIMESTAMPTZ)
4. UUIDBase: [基础] UUID v7 主键 + 自动表名(snake_case) + update 方法
5. UUIDModel: [标准] UUIDBase + TimestampMixin (适用于大部分业务表)

注意：主键使用通用 Uuid 类型，PostgreSQL 下映射为原生 UUID，SQLite 下为 CHAR(32)。

Author: jinmozhe
Created: 2025-11-25
Updated: 2026-03-02 (Generic Uuid / CreatedAtMixin)
"""

import re
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from uuid6 import uuid7

# 约束命名约定
POSTGRES_INDEXES_NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def resolve_table_name(name: str) -> str:
    """
    将驼峰命名 (CamelCase) 转换为蛇形命名 (snake_case)。

    示例:
    - PostTag -> post_tag
    - APIKey -> api_key
    """
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


class Base(DeclarativeBase):
    """SQLAlchemy 声明式元类"""

    metadata = MetaData(naming_convention=POSTGRES_INDEXES_NAMING_CONVENTION)


# ==============================================================================
# 1. 功能组件 (Mixins)
# ==============================================================================


class CreatedAtMixin:
    """[组件] 仅记录创建时间，关联表不需要 updated_at。"""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        comment="创建时间 (UTC)",
    )


class TimestampMixin(CreatedAtMixin):
    """
    [组件] 时间戳混入类

    规范：强制使用 UTC 时间存储 (TIMESTAMPTZ)，展示时再转本地时间。
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
        comment="更新时间 (UTC)",
    )


# ==============================================================================
# 2. 基础模型 (Base Models)
# ==============================================================================


class UUIDBase(Base):
    """
    [纯净版] 仅包含 ID 和基础工具方法。
    """

    __abstract__ = True

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """自动将类名转为蛇形命名 (snake_case)"""
        return resolve_table_name(cls.__name__)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid7, comment="主键 (UUID v7)"
    )

    def update(self, **kwargs: Any) -> None:
        """
        [工具方法] 动态更新模型属性

        用法:
        profile.update(**schema.model_dump(exclude_unset=True))
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)


# ==============================================================================
# 3. 标准聚合模型 (Standard Model)
# ==============================================================================


class UUIDModel(UUIDBase, TimestampMixin):
    """
    [标准版] 全站通用的业务模型基类。

    用法示例：
       class Post(UUIDModel): ...       -> 表名按 __tablename__ 覆盖为 posts
       class Tag(UUIDBase, CreatedAtMixin): ...  -> 无 updated_at
    """

    __abstract__ = True

"""
File: app/db/models/__init__.py
Description: ORM 模型注册表

本模块负责：
1. 导入所有业务模型
2. 导入基类 (Base, UUIDModel, Mixins)
3. 导出它们供 Alembic (env.py) 与测试建表自动发现 metadata

注意：
每当新增一个 Model 文件，必须在此处导入，
否则 Alembic autogenerate 无法检测到新表。

Author: jinmozhe
Created: 2025-11-25
Updated: 2026-03-02 (Social feed models)
"""

from app.db.models.account import Account
from app.db.models.base import (
    Base,
    CreatedAtMixin,
    TimestampMixin,
    UUIDBase,
    UUIDModel,
)
from app.db.models.follow import Follow
from app.db.models.post import Post, PostTag
from app.db.models.profile import Profile
from app.db.models.reaction import PostReaction, Reaction
from app.db.models.tag import Tag

__all__ = [
    # 基类
    "Base",
    "UUIDBase",
    "UUIDModel",
    "CreatedAtMixin",
    "TimestampMixin",
    # 业务模型
    "Account",
    "Profile",
    "Post",
    "PostTag",
    "Tag",
    "Reaction",
    "PostReaction",
    "Follow",
]

"""
File: app/domains/profiles/schemas.py
Description: 资料领域 Pydantic 模型 (Schema)

本模块定义了资料相关的输入/输出数据结构：
1. ProfileRead: 资料响应
2. ProfileDetail: 资料详情 (附带投稿数、关注数、粉丝数)
3. AuthorSummary: 投稿卡片上的作者摘要 (时间线 / 投稿详情复用)
4. UsernameAvailability: 用户名可用性 (仅作提示)
5. BioUpdate: 一言简介更新参数

Author: jinmozhe
Created: 2026-03-02
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.db.models.profile import BIO_MAX_LENGTH


class AuthorSummary(BaseModel):
    """作者摘要"""

    account_id: UUID
    username: str
    display_name: str
    avatar_url: str | None = None
    is_admin: bool = False
    is_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class ProfileRead(AuthorSummary):
    """
    资料读取模型 (响应)。
    """

    id: UUID = Field(..., description="资料 ID (UUID v7)")
    bio: str = Field(default="", description="一言简介")
    created_at: datetime = Field(..., description="创建时间 (UTC)")


class ProfileDetail(ProfileRead):
    """资料详情 (个人主页)"""

    post_count: int = Field(default=0, description="投稿数")
    follower_count: int = Field(default=0, description="粉丝数")
    following_count: int = Field(default=0, description="关注数")
    is_following: bool = Field(default=False, description="当前观察者是否已关注")


class UsernameAvailability(BaseModel):
    username: str
    available: bool = Field(..., description="可用性 (仅提示，最终以唯一约束为准)")


class BioUpdate(BaseModel):
    bio: str = Field(..., max_length=BIO_MAX_LENGTH, description="一言简介")

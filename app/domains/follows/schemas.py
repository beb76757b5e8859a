"""
File: app/domains/follows/schemas.py
Description: 关注领域 Pydantic 模型 (Schema)

1. FollowCounts: 关注数 / 粉丝数
2. FollowStatus: 某个观察者与目标账号之间的关注状态 (写操作的返回值)

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from pydantic import BaseModel, Field


class FollowCounts(BaseModel):
    follower_count: int = Field(..., description="粉丝数 (关注该账号的人数)")
    following_count: int = Field(..., description="关注数 (该账号关注的人数)")


class FollowStatus(BaseModel):
    target_id: UUID = Field(..., description="目标账号 ID")
    is_following: bool = Field(..., description="观察者是否已关注目标")
    follower_count: int = Field(..., description="目标账号的粉丝数")
    following_count: int = Field(..., description="目标账号的关注数")

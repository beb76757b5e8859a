"""
File: app/domains/reactions/schemas.py
Description: 反应领域 Pydantic 模型 (Schema)

1. ReactionRead / ReactionCreate: 反应目录
2. ReactionSummary: 投稿上各反应的计数 + 观察者自己的反应
3. ReactionToggleResult: 切换后的状态

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReactionRead(BaseModel):
    id: UUID
    name: str
    emoji: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ReactionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, description="反应名称")
    emoji: str = Field(..., min_length=1, max_length=16, description="表情")
    sort_order: int = Field(default=0, description="排序 (升序)")


class ReactionSummary(BaseModel):
    post_id: UUID
    counts: dict[UUID, int] = Field(
        default_factory=dict, description="reaction_id -> count (没有反应的种类不出现)"
    )
    my_reactions: list[UUID] = Field(default_factory=list)


class ReactionToggleResult(ReactionSummary):
    reaction_id: UUID
    reacted: bool = Field(..., description="切换后当前用户是否处于已反应状态")

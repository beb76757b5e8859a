"""
File: app/domains/tags/schemas.py
Description: 标签领域 Pydantic 模型 (Schema)

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TagRead(BaseModel):
    id: UUID
    name: str
    post_count: int = Field(default=0, description="关联投稿数")

    model_config = ConfigDict(from_attributes=True)

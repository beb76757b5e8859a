"""
File: app/domains/feed/schemas.py
Description: 时间线查询条件模型

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from pydantic import BaseModel, Field


class FeedFilters(BaseModel):
    """
    时间线过滤条件。全部为空时返回全部投稿 (按创建时间倒序)。
    author_id 与 following_only 互斥。
    """

    author_id: UUID | None = None
    following_only: bool = False
    region: str | None = None
    search: str | None = Field(default=None, max_length=100)
    tag: str | None = Field(default=None, max_length=50)

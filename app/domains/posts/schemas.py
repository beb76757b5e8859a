"""
File: app/domains/posts/schemas.py
Description: 投稿领域 Pydantic 模型 (Schema)

本模块定义了投稿相关的输入/输出数据结构：
1. PostCreate: 创建参数 (来自 multipart 表单，图片单独传入)
2. PostUpdate: 编辑参数 (整体替换语义，标签集合全部重建)
3. PostRead: 投稿卡片 (作者摘要 + 标签 + 反应计数 + 我的反应)

业务校验 (URL 协议、地域枚举、标题非空) 统一放在 Service 层，
确保 HTTP 与内部调用走同一套规则，文案原样返回给调用方。

Author: jinmozhe
Created: 2026-03-02
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.domains.profiles.schemas import AuthorSummary


class PostCreate(BaseModel):
    title: str = Field(..., description="标题")
    description: str = Field(default="", description="说明")
    region: str | None = Field(default=None, description="地域 (全国 / 海外 / 都道府県)")
    url: str | None = Field(default=None, description="相关链接 (http/https)")
    tags: list[str] = Field(default_factory=list, description="标签名 (可含逗号分隔)")


class PostUpdate(PostCreate):
    """编辑参数与创建参数字段一致；图片可选替换。"""


class PostRead(BaseModel):
    id: UUID
    author_id: UUID
    image_url: str
    title: str
    description: str = ""
    region: str | None = None
    url: str | None = None
    created_at: datetime
    edited_at: datetime | None = None

    author: AuthorSummary | None = Field(default=None, description="作者摘要")
    tags: list[str] = Field(default_factory=list, description="标签名")
    reaction_counts: dict[UUID, int] = Field(
        default_factory=dict, description="各反应的计数 (reaction_id -> count)"
    )
    my_reactions: list[UUID] = Field(
        default_factory=list, description="当前观察者已添加的反应 ID"
    )

    model_config = ConfigDict(from_attributes=True)

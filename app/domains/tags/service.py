"""
File: app/domains/tags/service.py
Description: 标签领域服务

1. normalize_tag_names: 拆分逗号分隔输入，去空白、丢弃空项、按首次出现顺序去重
2. resolve: 校验后原子 get-or-create (投稿创建与编辑共用)
3. list_popular: 搜索面板的 "人気のタグ"

标签按名称精确匹配，不做大小写归一；即使不再被引用也不会删除。

Author: jinmozhe
Created: 2026-03-02
"""

from collections.abc import Iterable

from app.core.exceptions import AppException
from app.db.models.tag import TAG_NAME_MAX_LENGTH, Tag
from app.domains.tags.constants import TAG_SEPARATOR, TagError
from app.domains.tags.repository import TagRepository
from app.domains.tags.schemas import TagRead


def normalize_tag_names(raw: str | Iterable[str] | None) -> list[str]:
    """
    示例:
        "a, a ,b,," -> ["a", "b"]
        ["x,y", " x "] -> ["x", "y"]
    """
    if raw is None:
        return []

    parts = [raw] if isinstance(raw, str) else list(raw)

    names: list[str] = []
    seen: set[str] = set()
    for part in parts:
        for piece in part.split(TAG_SEPARATOR):
            name = piece.strip()
            if name and name not in seen:
                seen.add(name)
                names.append(name)
    return names


class TagService:
    def __init__(self, repo: TagRepository):
        self.repo = repo

    @staticmethod
    def validate(names: list[str]) -> None:
        """写入前校验，必须在投稿写入之前调用。"""
        if any(len(name) > TAG_NAME_MAX_LENGTH for name in names):
            raise AppException(TagError.NAME_TOO_LONG)

    async def resolve(self, names: list[str]) -> list[Tag]:
        self.validate(names)
        return await self.repo.get_or_create_many(names)

    async def list_popular(self, limit: int) -> list[TagRead]:
        rows = await self.repo.list_popular(limit)
        return [TagRead(id=tag.id, name=tag.name, post_count=count) for tag, count in rows]

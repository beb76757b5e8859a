"""
File: tests/unit/test_tag_service.py
Description: 标签服务单元测试

Author: jinmozhe
Created: 2026-03-02
"""

import pytest

from app.core.exceptions import AppException
from app.core.storage import ImageUpload
from app.domains.posts.schemas import PostCreate
from app.domains.posts.service import PostService
from app.domains.tags.constants import TagError
from app.domains.tags.repository import TagRepository
from app.domains.tags.service import TagService, normalize_tag_names


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, []),
        ("", []),
        ("a, a ,b,,", ["a", "b"]),
        (["x,y", " x "], ["x", "y"]),
        (["抹茶", "抹茶", " 京都 "], ["抹茶", "京都"]),
        (" , ,", []),
    ],
)
def test_normalize_tag_names(raw, expected) -> None:
    assert normalize_tag_names(raw) == expected


def test_tag_name_too_long() -> None:
    with pytest.raises(AppException) as exc:
        TagService.validate(["x" * 51])

    assert exc.value.error == TagError.NAME_TOO_LONG


@pytest.mark.asyncio
async def test_resolve_is_idempotent(tag_service: TagService, tag_repo: TagRepository) -> None:
    first = await tag_service.resolve(["抹茶", "京都"])
    second = await tag_service.resolve(["京都", "抹茶", "新作"])

    assert [tag.name for tag in first] == ["抹茶", "京都"]
    assert [tag.name for tag in second] == ["京都", "抹茶", "新作"]
    assert {tag.id for tag in first} <= {tag.id for tag in second}
    assert await tag_repo.count() == 3


@pytest.mark.asyncio
async def test_popular_tags_order_by_usage(
    tag_service: TagService,
    post_service: PostService,
    make_profile,
    png_image: ImageUpload,
) -> None:
    alice = await make_profile("alice_1")
    await post_service.create_post(
        alice.account_id, PostCreate(title="白い恋人", tags=["北海道", "定番"]), png_image
    )
    await post_service.create_post(
        alice.account_id, PostCreate(title="じゃがポックル", tags=["北海道"]), png_image
    )
    await tag_service.resolve(["未使用"])

    popular = await tag_service.list_popular(limit=2)

    assert [(tag.name, tag.post_count) for tag in popular] == [("北海道", 2), ("定番", 1)]

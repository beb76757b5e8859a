"""
File: tests/unit/test_post_service.py
Description: 投稿服务单元测试

覆盖：
1. 创建：字段校验先于任何写入，标签去重
2. 编辑：仅作者本人，权限检查先于修改，刷新 edited_at
3. 删除：作者本人或管理员，关联数据一并删除

Author: jinmozhe
Created: 2026-03-02
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AppException
from app.core.storage import ImageUpload
from app.db.models import Post, PostReaction, PostTag
from app.domains.posts.constants import PostError
from app.domains.posts.repository import PostRepository
from app.domains.posts.schemas import PostCreate
from app.domains.posts.service import PostService


@pytest.mark.asyncio
async def test_create_post_dedupes_tags(
    post_service: PostService, make_profile, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")

    post = await post_service.create_post(
        alice.account_id,
        PostCreate(title="八ツ橋", region="京都府", url="https://example.com", tags=["a", "a"]),
        png_image,
    )
    card = await post_service.get_post(post.id)

    assert card.tags == ["a"]
    assert card.region == "京都府"
    assert card.edited_at is None
    assert card.author.username == "alice_1"
    assert card.image_url.startswith("/media/post-images/")


@pytest.mark.asyncio
async def test_comma_separated_tags(
    post_service: PostService, make_profile, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")

    post = await post_service.create_post(
        alice.account_id, PostCreate(title="もみじ饅頭", tags=["広島, 定番 ,,広島"]), png_image
    )

    assert (await post_service.get_post(post.id)).tags == ["広島", "定番"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("fields", "error"),
    [
        ({"title": "x", "url": "ftp://x"}, PostError.INVALID_URL),
        ({"title": "x", "url": "example.com"}, PostError.INVALID_URL),
        ({"title": "x", "region": "火星"}, PostError.INVALID_REGION),
        ({"title": "   "}, PostError.TITLE_REQUIRED),
        ({"title": "x" * 101}, PostError.TITLE_TOO_LONG),
    ],
)
async def test_invalid_fields_create_nothing(
    post_service: PostService,
    post_repo: PostRepository,
    make_profile,
    png_image: ImageUpload,
    media_vault,
    fields: dict,
    error: PostError,
) -> None:
    alice = await make_profile("alice_1")

    with pytest.raises(AppException) as exc:
        await post_service.create_post(alice.account_id, PostCreate(**fields), png_image)

    assert exc.value.error == error
    assert await post_repo.count() == 0
    # 图片也没有写入
    assert not media_vault.root.exists()


@pytest.mark.asyncio
async def test_invalid_image_creates_nothing(
    post_service: PostService, post_repo: PostRepository, make_profile
) -> None:
    alice = await make_profile("alice_1")
    bad = ImageUpload(content=b"%PDF", content_type="application/pdf")

    with pytest.raises(AppException):
        await post_service.create_post(alice.account_id, PostCreate(title="x"), bad)

    assert await post_repo.count() == 0


@pytest.mark.asyncio
async def test_edit_by_author(
    post_service: PostService, make_profile, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")
    post = await post_service.create_post(
        alice.account_id, PostCreate(title="旧", tags=["a", "b"]), png_image
    )
    old_image = post.image_url

    await post_service.edit_post(
        post.id, alice.account_id, PostCreate(title="新", region="全国", tags=["b", "c"])
    )
    card = await post_service.get_post(post.id)

    assert card.title == "新"
    assert card.region == "全国"
    assert card.tags == ["b", "c"]
    assert card.edited_at is not None
    assert card.image_url == old_image


@pytest.mark.asyncio
async def test_edit_by_non_author_changes_nothing(
    post_service: PostService, make_profile, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")
    bob = await make_profile("bob_2")
    post = await post_service.create_post(
        alice.account_id, PostCreate(title="元のタイトル", tags=["a"]), png_image
    )

    with pytest.raises(AppException) as exc:
        await post_service.edit_post(post.id, bob.account_id, PostCreate(title="乗っ取り"))

    assert exc.value.error == PostError.EDIT_FORBIDDEN
    assert exc.value.http_status == 403
    card = await post_service.get_post(post.id)
    assert card.title == "元のタイトル"
    assert card.tags == ["a"]
    assert card.edited_at is None


@pytest.mark.asyncio
async def test_admin_cannot_edit_others_post(
    post_service: PostService, make_profile, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")
    admin = await make_profile("admin_0", is_admin=True)
    post = await post_service.create_post(alice.account_id, PostCreate(title="x"), png_image)

    with pytest.raises(AppException) as exc:
        await post_service.edit_post(post.id, admin.account_id, PostCreate(title="y"))

    assert exc.value.error == PostError.EDIT_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_permissions(
    post_service: PostService,
    make_profile,
    make_reaction,
    reaction_service,
    db_session: AsyncSession,
    png_image: ImageUpload,
) -> None:
    alice = await make_profile("alice_1")
    bob = await make_profile("bob_2")
    admin = await make_profile("admin_0", is_admin=True)
    yummy = await make_reaction("おいしい")
    post = await post_service.create_post(
        alice.account_id, PostCreate(title="x", tags=["a"]), png_image
    )
    await reaction_service.toggle(post.id, bob.account_id, yummy.id)

    with pytest.raises(AppException) as exc:
        await post_service.delete_post(post.id, bob)
    assert exc.value.error == PostError.DELETE_FORBIDDEN

    await post_service.delete_post(post.id, admin)

    assert await post_service.get_post(post.id) is None
    for model in (Post, PostTag, PostReaction):
        count = await db_session.scalar(select(func.count()).select_from(model))
        assert count == 0


@pytest.mark.asyncio
async def test_missing_post(post_service: PostService, make_profile) -> None:
    alice = await make_profile("alice_1")

    assert await post_service.get_post(uuid.uuid4()) is None
    with pytest.raises(AppException) as exc:
        await post_service.delete_post(uuid.uuid4(), alice)
    assert exc.value.error == PostError.NOT_FOUND

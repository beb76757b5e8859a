"""
File: tests/integration/test_post_router.py
Description: 投稿接口集成测试 (multipart 创建 / 编辑 / 删除)

Author: jinmozhe
Created: 2026-03-02
"""

import pytest
from httpx import AsyncClient

from app.core.config import settings
from app.core.storage import ImageUpload

API = settings.API_V1_STR


async def create_post(client: AsyncClient, headers, image: ImageUpload, **form) -> dict:
    response = await client.post(
        f"{API}/posts",
        data={"title": "白い恋人", **form},
        files={"image": ("snack.png", image.content, "image/png")},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_and_read_post(
    client: AsyncClient, make_profile, auth_header, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")

    post = await create_post(
        client,
        auth_header(alice.account_id),
        png_image,
        region="北海道",
        url="https://example.com/shiroi",
        tags="a,a, 定番",
    )

    assert sorted(post["tags"]) == ["a", "定番"]
    assert post["author"]["username"] == "alice_1"
    assert post["edited_at"] is None

    response = await client.get(f"{API}/posts/{post['id']}")
    assert response.json()["data"]["title"] == "白い恋人"


@pytest.mark.asyncio
async def test_create_post_invalid_url(
    client: AsyncClient, make_profile, auth_header, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")

    response = await client.post(
        f"{API}/posts",
        data={"title": "x", "url": "ftp://x"},
        files={"image": ("snack.png", png_image.content, "image/png")},
        headers=auth_header(alice.account_id),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "posts.invalid_url"

    feed = await client.get(f"{API}/feed")
    assert feed.json()["data"]["items"] == []


@pytest.mark.asyncio
async def test_posting_requires_profile(
    client: AsyncClient, make_account, auth_header, png_image: ImageUpload
) -> None:
    account = await make_account("limbo@example.com")

    response = await client.post(
        f"{API}/posts",
        data={"title": "x"},
        files={"image": ("snack.png", png_image.content, "image/png")},
        headers=auth_header(account.id),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_edit_and_delete_permissions(
    client: AsyncClient, make_profile, auth_header, png_image: ImageUpload
) -> None:
    alice = await make_profile("alice_1")
    bob = await make_profile("bob_2")
    admin = await make_profile("admin_0", is_admin=True)
    post = await create_post(client, auth_header(alice.account_id), png_image, tags="a")

    response = await client.put(
        f"{API}/posts/{post['id']}",
        data={"title": "乗っ取り"},
        headers=auth_header(bob.account_id),
    )
    assert response.status_code == 403

    response = await client.put(
        f"{API}/posts/{post['id']}",
        data={"title": "白い恋人 (限定)", "tags": "b"},
        headers=auth_header(alice.account_id),
    )
    assert response.status_code == 200
    edited = response.json()["data"]
    assert edited["title"] == "白い恋人 (限定)"
    assert edited["tags"] == ["b"]
    assert edited["edited_at"] is not None
    assert edited["image_url"] == post["image_url"]

    response = await client.delete(
        f"{API}/posts/{post['id']}", headers=auth_header(bob.account_id)
    )
    assert response.status_code == 403

    response = await client.delete(
        f"{API}/posts/{post['id']}", headers=auth_header(admin.account_id)
    )
    assert response.status_code == 200

    response = await client.get(f"{API}/posts/{post['id']}")
    assert response.json()["data"] is None


@pytest.mark.asyncio
async def test_regions(client: AsyncClient) -> None:
    response = await client.get(f"{API}/posts/regions")

    regions = response.json()["data"]
    assert len(regions) == 49
    assert regions[0] == "全国"
    assert "沖縄県" in regions

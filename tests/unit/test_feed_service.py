"""
File: tests/unit/test_feed_service.py
Description: 时间线查询引擎单元测试

Author: jinmozhe
Created: 2026-03-02
"""

import pytest

from app.core.exceptions import AppException
from app.core.storage import ImageUpload
from app.domains.feed.constants import FeedError
from app.domains.feed.repository import escape_like
from app.domains.feed.schemas import FeedFilters
from app.domains.feed.service import FeedService
from app.domains.posts.schemas import PostCreate


@pytest.fixture
async def authors(make_profile):
    return await make_profile("alice_1"), await make_profile("bob_2")


@pytest.fixture
async def posts(post_service, authors, png_image: ImageUpload):
    alice, bob = authors
    created = []
    for author, data in [
        (alice, PostCreate(title="白い恋人", description="北海道の定番", region="北海道", tags=["定番"])),
        (bob, PostCreate(title="八ツ橋", description="ニッキの香り", region="京都府", tags=["定番", "和菓子"])),
        (alice, PostCreate(title="100%チョコ", description="カカオ", region="全国")),
    ]:
        created.append(await post_service.create_post(author.account_id, data, png_image))
    return created


def test_escape_like() -> None:
    assert escape_like("100%") == "100\\%"
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("c\\d") == "c\\\\d"


@pytest.mark.asyncio
async def test_feed_newest_first(feed_service: FeedService, posts) -> None:
    feed = await feed_service.query_feed(FeedFilters())

    assert [item.id for item in feed.items] == [post.id for post in reversed(posts)]
    assert feed.total == 3


@pytest.mark.asyncio
async def test_author_and_following_only_conflict(feed_service: FeedService, authors) -> None:
    alice, bob = authors

    with pytest.raises(AppException) as exc:
        await feed_service.query_feed(
            FeedFilters(author_id=bob.account_id, following_only=True),
            viewer_id=alice.account_id,
        )

    assert exc.value.error == FeedError.CONFLICTING_FILTERS


@pytest.mark.asyncio
async def test_following_only_without_followees_skips_post_query(
    feed_service: FeedService, posts, authors, monkeypatch
) -> None:
    alice, _ = authors

    async def fail_list_posts(*args, **kwargs):
        raise AssertionError("posts must not be queried")

    monkeypatch.setattr(feed_service.repo, "list_posts", fail_list_posts)

    feed = await feed_service.query_feed(
        FeedFilters(following_only=True), viewer_id=alice.account_id
    )

    assert feed.items == []


@pytest.mark.asyncio
async def test_following_only(feed_service: FeedService, follow_service, posts, authors) -> None:
    alice, bob = authors
    await follow_service.follow(alice.account_id, bob.account_id)

    feed = await feed_service.query_feed(
        FeedFilters(following_only=True), viewer_id=alice.account_id
    )

    assert [item.title for item in feed.items] == ["八ツ橋"]


@pytest.mark.asyncio
async def test_following_only_requires_viewer(feed_service: FeedService) -> None:
    with pytest.raises(AppException) as exc:
        await feed_service.query_feed(FeedFilters(following_only=True))

    assert exc.value.error == FeedError.LOGIN_REQUIRED


@pytest.mark.asyncio
async def test_author_filter(feed_service: FeedService, posts, authors) -> None:
    alice, _ = authors

    feed = await feed_service.query_feed(FeedFilters(author_id=alice.account_id))

    assert [item.title for item in feed.items] == ["100%チョコ", "白い恋人"]


@pytest.mark.asyncio
async def test_region_filter(feed_service: FeedService, posts) -> None:
    feed = await feed_service.query_feed(FeedFilters(region="京都府"))

    assert [item.title for item in feed.items] == ["八ツ橋"]


@pytest.mark.asyncio
async def test_search_title_or_description(feed_service: FeedService, posts) -> None:
    by_description = await feed_service.query_feed(FeedFilters(search="ニッキ"))
    assert [item.title for item in by_description.items] == ["八ツ橋"]

    # % 按字面匹配，不作为通配符
    literal = await feed_service.query_feed(FeedFilters(search="0%"))
    assert [item.title for item in literal.items] == ["100%チョコ"]

    wildcard = await feed_service.query_feed(FeedFilters(search="%"))
    assert [item.title for item in wildcard.items] == ["100%チョコ"]


@pytest.mark.asyncio
async def test_search_is_case_insensitive(
    feed_service: FeedService, post_service, authors, png_image: ImageUpload
) -> None:
    alice, _ = authors
    await post_service.create_post(
        alice.account_id, PostCreate(title="Tokyo Banana"), png_image
    )

    feed = await feed_service.query_feed(FeedFilters(search="tokyo"))

    assert [item.title for item in feed.items] == ["Tokyo Banana"]


@pytest.mark.asyncio
async def test_tag_filter(feed_service: FeedService, posts) -> None:
    feed = await feed_service.query_feed(FeedFilters(tag="定番"))
    assert [item.title for item in feed.items] == ["八ツ橋", "白い恋人"]

    combined = await feed_service.query_feed(FeedFilters(tag="定番", region="北海道"))
    assert [item.title for item in combined.items] == ["白い恋人"]

    unknown = await feed_service.query_feed(FeedFilters(tag="存在しない"))
    assert unknown.items == []


@pytest.mark.asyncio
async def test_feed_items_carry_cards(
    feed_service: FeedService, posts, authors, make_reaction, reaction_service
) -> None:
    alice, bob = authors
    yummy = await make_reaction("おいしい")
    await reaction_service.toggle(posts[0].id, bob.account_id, yummy.id)

    feed = await feed_service.query_feed(FeedFilters(region="北海道"), viewer_id=bob.account_id)
    item = feed.items[0]

    assert item.author.username == "alice_1"
    assert item.tags == ["定番"]
    assert item.reaction_counts == {yummy.id: 1}
    assert item.my_reactions == [yummy.id]

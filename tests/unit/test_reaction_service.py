"""
File: tests/unit/test_reaction_service.py
Description: 反应服务单元测试

Author: jinmozhe
Created: 2026-03-02
"""

import uuid

import pytest

from app.core.exceptions import AppException
from app.core.storage import ImageUpload
from app.domains.posts.schemas import PostCreate
from app.domains.reactions.constants import ReactionError
from app.domains.reactions.schemas import ReactionCreate
from app.domains.reactions.service import ReactionService


@pytest.fixture
async def snack_post(post_service, make_profile, png_image: ImageUpload):
    alice = await make_profile("alice_1")
    return await post_service.create_post(alice.account_id, PostCreate(title="ひよ子"), png_image)


@pytest.mark.asyncio
async def test_toggle_twice_is_identity(
    reaction_service: ReactionService, snack_post, make_profile, make_reaction
) -> None:
    bob = await make_profile("bob_2")
    yummy = await make_reaction("おいしい")

    first = await reaction_service.toggle(snack_post.id, bob.account_id, yummy.id)
    assert first.reacted is True
    assert first.counts == {yummy.id: 1}
    assert first.my_reactions == [yummy.id]

    second = await reaction_service.toggle(snack_post.id, bob.account_id, yummy.id)
    assert second.reacted is False
    assert second.counts == {}
    assert second.my_reactions == []


@pytest.mark.asyncio
async def test_counts_per_kind(
    reaction_service: ReactionService, snack_post, make_profile, make_reaction
) -> None:
    bob = await make_profile("bob_2")
    carol = await make_profile("carol_3")
    yummy = await make_reaction("おいしい", sort_order=1)
    want = await make_reaction("食べたい", emoji="🤤", sort_order=2)

    await reaction_service.toggle(snack_post.id, bob.account_id, yummy.id)
    await reaction_service.toggle(snack_post.id, carol.account_id, yummy.id)
    await reaction_service.toggle(snack_post.id, carol.account_id, want.id)

    assert await reaction_service.counts_by_kind(snack_post.id) == {yummy.id: 2, want.id: 1}

    summary = await reaction_service.summary(snack_post.id, viewer_id=carol.account_id)
    assert set(summary.my_reactions) == {yummy.id, want.id}


@pytest.mark.asyncio
async def test_toggle_unknown_post_or_kind(
    reaction_service: ReactionService, snack_post, make_profile, make_reaction
) -> None:
    bob = await make_profile("bob_2")
    yummy = await make_reaction("おいしい")

    with pytest.raises(AppException) as exc:
        await reaction_service.toggle(uuid.uuid4(), bob.account_id, yummy.id)
    assert exc.value.error == ReactionError.POST_NOT_FOUND

    with pytest.raises(AppException) as exc:
        await reaction_service.toggle(snack_post.id, bob.account_id, uuid.uuid4())
    assert exc.value.error == ReactionError.KIND_NOT_FOUND


@pytest.mark.asyncio
async def test_catalog_ordering_and_unique_name(reaction_service: ReactionService) -> None:
    await reaction_service.create_kind(ReactionCreate(name="食べたい", emoji="🤤", sort_order=2))
    await reaction_service.create_kind(ReactionCreate(name="おいしい", emoji="😋", sort_order=1))

    kinds = await reaction_service.list_kinds()
    assert [kind.name for kind in kinds] == ["おいしい", "食べたい"]

    with pytest.raises(AppException) as exc:
        await reaction_service.create_kind(ReactionCreate(name="おいしい", emoji="😍"))
    assert exc.value.error == ReactionError.NAME_TAKEN

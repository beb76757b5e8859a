"""
File: tests/unit/conftest.py
Description: 服务层单元测试 Fixtures

每个 Service 都绑定到同一个测试 Session，与路由层使用相同的依赖装配方式。

Author: jinmozhe
Created: 2026-03-02
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.storage import MediaVault
from app.db.models import Account, Follow, Post, PostReaction, Profile, Reaction, Tag
from app.domains.auth.repository import AccountRepository
from app.domains.auth.service import AuthService
from app.domains.feed.repository import FeedRepository
from app.domains.feed.service import FeedService
from app.domains.follows.repository import FollowRepository
from app.domains.follows.service import FollowService
from app.domains.posts.repository import PostRepository
from app.domains.posts.service import PostService
from app.domains.profiles.repository import ProfileRepository
from app.domains.profiles.service import ProfileService
from app.domains.reactions.repository import PostReactionRepository, ReactionRepository
from app.domains.reactions.service import ReactionService
from app.domains.signup.service import SignupService
from app.domains.tags.repository import TagRepository
from app.domains.tags.service import TagService


@pytest.fixture
def account_repo(db_session: AsyncSession) -> AccountRepository:
    return AccountRepository(model=Account, session=db_session)


@pytest.fixture
def profile_repo(db_session: AsyncSession) -> ProfileRepository:
    return ProfileRepository(model=Profile, session=db_session)


@pytest.fixture
def follow_repo(db_session: AsyncSession) -> FollowRepository:
    return FollowRepository(model=Follow, session=db_session)


@pytest.fixture
def post_repo(db_session: AsyncSession) -> PostRepository:
    return PostRepository(model=Post, session=db_session)


@pytest.fixture
def tag_repo(db_session: AsyncSession) -> TagRepository:
    return TagRepository(model=Tag, session=db_session)


@pytest.fixture
def post_reaction_repo(db_session: AsyncSession) -> PostReactionRepository:
    return PostReactionRepository(model=PostReaction, session=db_session)


@pytest.fixture
def auth_service(account_repo: AccountRepository, fake_redis) -> AuthService:
    return AuthService(account_repo=account_repo, redis=fake_redis)


@pytest.fixture
def profile_service(
    profile_repo: ProfileRepository,
    follow_repo: FollowRepository,
    media_vault: MediaVault,
) -> ProfileService:
    return ProfileService(repo=profile_repo, follow_repo=follow_repo, media_vault=media_vault)


@pytest.fixture
def follow_service(
    follow_repo: FollowRepository, account_repo: AccountRepository
) -> FollowService:
    return FollowService(repo=follow_repo, account_repo=account_repo)


@pytest.fixture
def tag_service(tag_repo: TagRepository) -> TagService:
    return TagService(repo=tag_repo)


@pytest.fixture
def post_service(
    post_repo: PostRepository,
    tag_service: TagService,
    profile_repo: ProfileRepository,
    post_reaction_repo: PostReactionRepository,
    media_vault: MediaVault,
) -> PostService:
    return PostService(
        repo=post_repo,
        tag_service=tag_service,
        profile_repo=profile_repo,
        post_reaction_repo=post_reaction_repo,
        media_vault=media_vault,
    )


@pytest.fixture
def reaction_service(
    db_session: AsyncSession,
    post_reaction_repo: PostReactionRepository,
    post_repo: PostRepository,
) -> ReactionService:
    return ReactionService(
        repo=ReactionRepository(model=Reaction, session=db_session),
        post_reaction_repo=post_reaction_repo,
        post_repo=post_repo,
    )


@pytest.fixture
def feed_service(
    db_session: AsyncSession,
    follow_repo: FollowRepository,
    tag_repo: TagRepository,
    post_service: PostService,
) -> FeedService:
    return FeedService(
        repo=FeedRepository(model=Post, session=db_session),
        follow_repo=follow_repo,
        tag_repo=tag_repo,
        post_service=post_service,
    )


@pytest.fixture
def signup_service(
    auth_service: AuthService, profile_service: ProfileService, fake_redis
) -> SignupService:
    return SignupService(
        auth_service=auth_service, profile_service=profile_service, redis=fake_redis
    )

"""
File: tests/conftest.py
Description: Pytest 全局 Fixtures 配置 (Async + 内存 SQLite)

说明：
1. 环境变量必须在导入 app 之前写入 (Settings 与引擎在导入时创建)
2. 每个测试独立的内存 SQLite (StaticPool 让所有连接共享同一个库)
3. Redis 使用内存替身 FakeRedis，只实现业务用到的 get / setex / delete
4. MediaVault 指向 pytest 的 tmp_path
5. 依赖 pyproject.toml 中的 asyncio_mode = "auto"

Author: jinmozhe
Created: 2025-11-26
Updated: 2026-03-02 (SQLite + FakeRedis + MediaVault overrides)
"""

import asyncio
import os
import sys
import tempfile
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from typing import Any

# ------------------------------------------------------------------------------
# Windows 平台特定修复 (必须在任何 async 操作之前)
# ------------------------------------------------------------------------------
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# ------------------------------------------------------------------------------
# 1. 环境配置覆写 (先于 app 导入)
# ------------------------------------------------------------------------------
os.environ["SECRET_KEY"] = "test-secret-key-for-okashi-map-0123456789"
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite+aiosqlite:///:memory:"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="okashi-media-")
os.environ["ENVIRONMENT"] = "local"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from app.api.deps import get_db
from app.core.redis import get_redis
from app.core.security import create_access_token, get_password_hash
from app.core.storage import ImageUpload, MediaVault, get_media_vault
from app.db.models import Account, Base, Profile, Reaction
from app.main import app

TEST_DATABASE_URI = os.environ.get("TEST_DATABASE_URI", "sqlite+aiosqlite://")
DEFAULT_PASSWORD = "abc12345"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeRedis:
    """内存 Redis 替身，忽略过期时间。"""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def setex(self, key: str, expire: timedelta | int, value: Any) -> bool:
        self.store[key] = value if isinstance(value, str) else str(value)
        return True

    async def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self.store.pop(key, None) is not None)


# ------------------------------------------------------------------------------
# 2. 基础设施 Fixtures
# ------------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    每个测试一个全新的库。默认内存 SQLite，设置 TEST_DATABASE_URI 可指向 PostgreSQL。
    """
    if TEST_DATABASE_URI.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URI,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URI, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async_session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_factory() as session:
        yield session


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def media_vault(tmp_path) -> MediaVault:
    return MediaVault(root=tmp_path / "media", base_url="/media", backoff_seconds=0)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, fake_redis: FakeRedis, media_vault: MediaVault
) -> AsyncGenerator[AsyncClient, None]:
    """
    获取异步 HTTP 客户端。
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    async def override_get_redis() -> AsyncGenerator[FakeRedis, None]:
        yield fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_media_vault] = lambda: media_vault

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"  # type: ignore
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ------------------------------------------------------------------------------
# 3. 数据构造 Fixtures
# ------------------------------------------------------------------------------


@pytest.fixture
def png_image() -> ImageUpload:
    return ImageUpload(content=PNG_BYTES, content_type="image/png", filename="snack.png")


@pytest.fixture
def make_account(db_session: AsyncSession) -> Callable[..., Awaitable[Account]]:
    async def _make(email: str, password: str = DEFAULT_PASSWORD) -> Account:
        account = Account(email=email, hashed_password=get_password_hash(password))
        db_session.add(account)
        await db_session.commit()
        return account

    return _make


@pytest.fixture
def make_profile(
    db_session: AsyncSession, make_account: Callable[..., Awaitable[Account]]
) -> Callable[..., Awaitable[Profile]]:
    """创建账号 + 资料 (已完成注册的用户)。"""

    async def _make(username: str, is_admin: bool = False) -> Profile:
        account = await make_account(f"{username.lower()}@example.com")
        profile = Profile(
            account_id=account.id,
            username=username,
            display_name=username.title(),
            is_admin=is_admin,
        )
        db_session.add(profile)
        await db_session.commit()
        return profile

    return _make


@pytest.fixture
def make_reaction(db_session: AsyncSession) -> Callable[..., Awaitable[Reaction]]:
    async def _make(name: str, emoji: str = "😋", sort_order: int = 0) -> Reaction:
        reaction = Reaction(name=name, emoji=emoji, sort_order=sort_order)
        db_session.add(reaction)
        await db_session.commit()
        return reaction

    return _make


@pytest.fixture
def auth_header() -> Callable[[Any], dict[str, str]]:
    """为账号签发 Access Token 并组装 Authorization 头。"""

    def _header(account_id: Any) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(subject=str(account_id))}"}

    return _header

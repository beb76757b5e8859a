"""
File: app/core/redis.py
Description: Redis 客户端管理 (Async)

本模块负责：
1. 创建全局 Redis 连接池 (基于 redis-py 的 asyncio 扩展)
   用途: Refresh Token 存储、注册流程草稿 (Signup Draft)
2. 提供依赖注入所需的 Redis 客户端生成器
3. 提供 JSON 值的读写辅助函数 (orjson)
4. 管理连接生命周期 (关闭)

注意：
使用 decode_responses=True，确保从 Redis 读取的数据自动解码为 str，
避免在业务逻辑中处理 bytes 类型。

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (JSON helpers for signup drafts)
"""

from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Any

import orjson
from redis.asyncio import Redis, from_url

from app.core.config import settings

# ------------------------------------------------------------------------------
# 全局 Redis 客户端实例 (Singleton)
# ------------------------------------------------------------------------------
# redis-py 内部维护连接池，全局单例即可。
redis_client: Redis = from_url(
    settings.REDIS_URL,
    encoding="utf-8",
    decode_responses=True,
)


async def get_redis() -> AsyncGenerator[Redis, None]:
    """
    获取 Redis 客户端依赖。

    用法:
    @router.get("/")
    async def endpoint(redis: Annotated[Redis, Depends(get_redis)]): ...

    封装为依赖注入，单元测试中可以 override 为内存实现。
    """
    yield redis_client


# ------------------------------------------------------------------------------
# JSON 辅助函数
# ------------------------------------------------------------------------------


async def get_json(redis: Redis, key: str) -> dict[str, Any] | None:
    """读取 JSON 对象，不存在或内容损坏时返回 None。"""
    raw = await redis.get(key)
    if not raw:
        return None
    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


async def set_json(
    redis: Redis, key: str, value: dict[str, Any], expire: timedelta | int
) -> None:
    """写入 JSON 对象并设置过期时间。"""
    await redis.setex(key, expire, orjson.dumps(value).decode("utf-8"))


async def close_redis() -> None:
    """
    关闭 Redis 连接池。
    应在 FastAPI 应用的 lifespan shutdown 事件中调用。
    """
    await redis_client.aclose()

"""
File: app/core/security.py
Description: 安全工具模块 (Argon2id + JWT)

本模块负责：
1. 密码加密 (Hash) / 验证 (Verify): Argon2id，CPU 密集型操作放入线程池
2. JWT 签发与解析: 无状态 Access Token，sub = account_id

Author: jinmozhe
Created: 2025-12-05
Updated: 2026-03-02 (decode_access_token)
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pwdlib import PasswordHash
from starlette.concurrency import run_in_threadpool

from app.core.config import settings

# pwdlib[argon2] 默认使用 argon2 算法
password_hash = PasswordHash.recommended()

# ------------------------------------------------------------------------------
# 1. 密码处理 (Password Hashing)
# ------------------------------------------------------------------------------


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证明文密码与哈希值是否匹配。"""
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """生成密码哈希值 (Argon2id)。"""
    return password_hash.hash(password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """异步验证密码（在线程池中执行，避免阻塞事件循环）。"""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


async def get_password_hash_async(password: str) -> str:
    """异步生成密码哈希（在线程池中执行，避免阻塞事件循环）。"""
    return await run_in_threadpool(get_password_hash, password)


# ------------------------------------------------------------------------------
# 2. JWT 处理 (JSON Web Token)
# ------------------------------------------------------------------------------


def _secret_key() -> str:
    secret_key = settings.SECRET_KEY
    if secret_key is None:
        raise ValueError("SECRET_KEY configuration is missing.")
    return secret_key


def create_access_token(
    subject: str | Any, expires_delta: timedelta | None = None
) -> str:
    """
    生成 JWT Access Token (短效, 无状态)。

    Args:
        subject: 主体标识 (account_id)
        expires_delta: 自定义过期时间差 (默认 ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        str: 编码后的 JWT 字符串
    """
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode = {"exp": expire, "sub": str(subject), "type": "access"}
    return jwt.encode(to_encode, _secret_key(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str | None:
    """
    解析 Access Token，返回 sub (account_id)。

    签名错误、过期、类型不符或缺少 sub 时返回 None，由调用方决定如何拒绝。
    """
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None

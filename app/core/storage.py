"""
File: app/core/storage.py
Description: 图片存储 (Media Vault)

本模块负责：
1. 接收上传图片 (头像 / 投稿图片)，校验 MIME 类型与大小
2. 按 bucket + 哈希分层目录写入本地存储，返回可公开访问的 URL
3. 写入失败 (OSError) 时线性退避重试，仍失败则抛出 system.storage_error

注意：
- 上传与数据库写入是两个独立操作。图片写入成功而记录插入失败时，
  会留下孤立文件，视为可接受的泄漏，不做回滚。
- 原样存储字节，不做缩放/转码。

Author: jinmozhe
Created: 2026-03-02
"""

import asyncio
import hashlib
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_413_REQUEST_ENTITY_TOO_LARGE
from uuid6 import uuid7

from app.core.config import settings
from app.core.error_code import BaseErrorCode, SystemErrorCode
from app.core.exceptions import AppException
from app.core.logging import logger

# 允许的图片类型 -> 文件扩展名
ALLOWED_MIME_TYPES: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

AVATAR_BUCKET = "avatars"
POST_IMAGE_BUCKET = "post-images"


class MediaErrorCode(BaseErrorCode):
    """图片上传错误码"""

    INVALID_TYPE = (
        HTTP_400_BAD_REQUEST,
        "media.invalid_type",
        "画像ファイルを選択してください",
    )
    EMPTY_FILE = (HTTP_400_BAD_REQUEST, "media.empty_file", "画像ファイルが空です")
    TOO_LARGE = (
        HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        "media.too_large",
        "画像ファイルのサイズが大きすぎます",
    )


@dataclass(frozen=True)
class ImageUpload:
    """已读入内存的上传图片"""

    content: bytes
    content_type: str
    filename: str = ""


class MediaVault:
    """
    本地文件系统图片仓库。

    目录结构: {root}/{bucket}/{h[0:2]}/{h[2:4]}/{owner_id}-{uuid7}{ext}
    URL 结构: {base_url}/{bucket}/{h[0:2]}/{h[2:4]}/{filename}
    """

    def __init__(
        self,
        root: Path | str,
        base_url: str,
        max_size: int = settings.MAX_IMAGE_SIZE_BYTES,
        retries: int = settings.MEDIA_WRITE_RETRIES,
        backoff_seconds: float = 0.2,
    ):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.max_size = max_size
        self.retries = max(1, retries)
        self.backoff_seconds = backoff_seconds

    def validate(self, image: ImageUpload) -> str:
        """校验图片并返回扩展名，必须在任何写操作之前调用。"""
        mime_type = (image.content_type or "").lower()
        if mime_type not in ALLOWED_MIME_TYPES:
            raise AppException(MediaErrorCode.INVALID_TYPE)
        if not image.content:
            raise AppException(MediaErrorCode.EMPTY_FILE)
        if len(image.content) > self.max_size:
            raise AppException(MediaErrorCode.TOO_LARGE)
        return ALLOWED_MIME_TYPES[mime_type]

    async def save(self, bucket: str, owner_id: UUID, image: ImageUpload) -> str:
        """
        保存图片并返回公开 URL。

        Raises:
            AppException: 类型/大小不合法 (4xx) 或重试后仍写入失败 (500)
        """
        extension = self.validate(image)

        object_id = uuid7()
        digest = hashlib.sha256(str(object_id).encode()).hexdigest()
        relative = Path(bucket, digest[0:2], digest[2:4], f"{owner_id}-{object_id}{extension}")

        last_error: OSError | None = None
        for attempt in range(1, self.retries + 1):
            try:
                await run_in_threadpool(self._write, self.root / relative, image.content)
                break
            except OSError as exc:
                last_error = exc
                logger.bind(bucket=bucket, attempt=attempt, error=str(exc)).warning(
                    "Media write failed"
                )
                if attempt < self.retries:
                    await asyncio.sleep(self.backoff_seconds * attempt)
        else:
            raise AppException(SystemErrorCode.STORAGE_ERROR) from last_error

        url = f"{self.base_url}/{relative.as_posix()}"
        logger.bind(bucket=bucket, owner_id=str(owner_id), size=len(image.content)).info(
            "Media saved"
        )
        return url

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


async def read_upload(upload: UploadFile) -> ImageUpload:
    """将 multipart 上传文件读入内存，交由 MediaVault 校验与保存。"""
    content = await upload.read()
    return ImageUpload(
        content=content,
        content_type=upload.content_type or "",
        filename=upload.filename or "",
    )


media_vault = MediaVault(root=settings.MEDIA_ROOT, base_url=settings.MEDIA_URL)


def get_media_vault() -> MediaVault:
    """依赖注入入口，测试中可 override 到临时目录。"""
    return media_vault

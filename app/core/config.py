"""
File: app/core/config.py
Description: 全局应用配置管理（使用 pydantic-settings）

所有配置值通过 .env 文件加载。
本模块负责：
1. 校验环境变量类型
2. 解析复杂类型（如 CORS 列表）
3. 组装数据库 DSN（确保使用 postgresql+asyncpg 协议）
4. 定义 Redis 连接、JWT 安全参数与注册草稿有效期
5. 定义图片存储 (Media Vault) 的目录、URL 前缀与大小上限
6. 运行时强制校验必填项，确保应用在配置缺失时快速失败

Author: jinmozhe
Created: 2025-11-24
Updated: 2026-03-02 (Media Vault & Signup Draft)
"""

from typing import Literal

from pydantic import AnyHttpUrl, model_validator
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """全局配置对象（唯一真实来源）"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=True,
    )

    # --------------------------------------------------------------------------
    # 1. General (通用)
    # --------------------------------------------------------------------------
    PROJECT_NAME: str = "Okashi Map API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "dev", "prod"] = "local"

    # 密钥 (生产环境强制要求高强度随机串)
    # 用于 JWT 签名
    SECRET_KEY: str | None = None

    # CORS 配置（Pydantic 会自动解析 JSON 字符串列表）
    BACKEND_CORS_ORIGINS: list[AnyHttpUrl] = []

    # --------------------------------------------------------------------------
    # 2. Database (PostgreSQL)
    # --------------------------------------------------------------------------
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    # 连接池配置 (Pool Settings)
    DB_POOL_SIZE: int = 20  # 连接池基准大小
    DB_MAX_OVERFLOW: int = 10  # 允许超出基准的额外连接数
    DB_POOL_PRE_PING: bool = True  # 每次获取连接前是否自动 ping
    DB_POOL_TIMEOUT: int = 30  # 连接获取超时（秒）
    DB_POOL_RECYCLE: int = 1800  # 连接回收时间（秒），防止连接过期

    # 完整 DSN 覆盖（可选，例如 sqlite+aiosqlite:///./okashi.db）
    SQLALCHEMY_DATABASE_URI: str | None = None

    # --------------------------------------------------------------------------
    # 3. Logging (Loguru)
    # --------------------------------------------------------------------------
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON_FORMAT: bool = False  # 是否输出 JSON 格式
    LOG_FILE_ENABLED: bool = False  # 是否启用文件日志
    LOG_DIR: str = "logs"  # 日志文件目录
    LOG_ROTATION: str = "1 hour"  # 轮转策略
    LOG_RETENTION: str = "7 days"  # 保留时间
    LOG_COMPRESSION: str = "zip"  # 压缩格式
    LOG_DIAGNOSE: bool = True  # 是否启用诊断信息（生产环境建议 False）
    SLOW_REQUEST_MS: int = 1000  # 超过该耗时 (毫秒) 的请求以 WARNING 记录
    SQL_ECHO: bool = False  # 是否输出 SQL 语句 (经 Loguru 转发)

    # --------------------------------------------------------------------------
    # 4. Redis Settings (Refresh Token 与注册草稿)
    # --------------------------------------------------------------------------
    # 默认连接本地，生产环境请在 .env 中覆盖
    REDIS_URL: str = "redis://localhost:6379/0"

    # 注册流程草稿 (Signup Draft) 保留时间 (秒)
    # 过期后重新登录将从 PROFILE 步骤恢复
    SIGNUP_DRAFT_EXPIRE_SECONDS: int = 60 * 60 * 24

    # --------------------------------------------------------------------------
    # 5. Security & Authentication (JWT)
    # --------------------------------------------------------------------------
    # Access Token 有效期 (分钟) - 短效，无状态
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Refresh Token 有效期 (天) - 长效，存储于 Redis
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # JWT 签名算法 (推荐使用 HS256)
    ALGORITHM: str = "HS256"

    # --------------------------------------------------------------------------
    # 6. Media Vault (图片存储)
    # --------------------------------------------------------------------------
    # 本地存储根目录 (生产环境可挂载对象存储网关)
    MEDIA_ROOT: str = "media"
    # 对外访问前缀 (由 main.py 挂载为 StaticFiles)
    MEDIA_URL: str = "/media"
    # 单张图片大小上限 (字节)
    MAX_IMAGE_SIZE_BYTES: int = 10 * 1024 * 1024
    # 写入失败重试次数 (线性退避)
    MEDIA_WRITE_RETRIES: int = 3

    # --------------------------------------------------------------------------
    # Properties (便捷属性)
    # --------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """是否为生产环境"""
        return self.ENVIRONMENT == "prod"

    @property
    def is_sqlite(self) -> bool:
        """当前 DSN 是否指向 SQLite (本地开发 / 测试)"""
        return str(self.SQLALCHEMY_DATABASE_URI or "").startswith("sqlite")

    # --------------------------------------------------------------------------
    # Validators
    # --------------------------------------------------------------------------
    @model_validator(mode="after")
    def _check_secret_key(self) -> "Settings":
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY 必须在 .env 中设置")
        if self.is_production and len(self.SECRET_KEY) < 32:
            raise ValueError("生产环境 SECRET_KEY 长度必须 >= 32 字符")
        return self

    @model_validator(mode="after")
    def _assemble_db_uri(self) -> "Settings":
        """
        显式 SQLALCHEMY_DATABASE_URI 优先；否则由 POSTGRES_* 组装 asyncpg DSN。
        """
        if self.SQLALCHEMY_DATABASE_URI:
            return self

        pg_fields = ("POSTGRES_SERVER", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB")
        missing = [name for name in pg_fields if not getattr(self, name)]
        if missing:
            raise ValueError(f"缺少数据库环境变量，无法构建 DSN: {', '.join(missing)}")

        dsn = MultiHostUrl.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,  # type: ignore[arg-type]
            password=self.POSTGRES_PASSWORD,  # type: ignore[arg-type]
            host=self.POSTGRES_SERVER,  # type: ignore[arg-type]
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,  # type: ignore[arg-type]
        )
        self.SQLALCHEMY_DATABASE_URI = str(dsn)
        return self


# 单例配置对象
# 配置加载失败时，Pydantic 会抛出 ValidationError，包含详细错误信息
settings = Settings()

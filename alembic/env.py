"""
File: alembic/env.py
Description: Alembic 迁移环境配置 - 同步版本

策略：
- 迁移 (Migration): 使用同步驱动 (psycopg / sqlite) -> 无 EventLoop 问题
- 运行 (Runtime): 使用异步驱动 (asyncpg / aiosqlite)

Author: jinmozhe
Created: 2025-11-26
Updated: 2026-03-02 (Derive sync URL from runtime DSN, SQLite support)
"""

import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url

from alembic import context  # type: ignore

# ------------------------------------------------------------------------------
# 0. 将项目根目录加入 sys.path
# ------------------------------------------------------------------------------
sys.path.insert(0, str(Path(__file__).parent.parent.resolve()))

# ------------------------------------------------------------------------------
# 1. 导入项目配置与模型
# ------------------------------------------------------------------------------
from app.core.config import settings
from app.db.models import Base

# 异步驱动 -> 同步驱动
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg",
    "sqlite+aiosqlite": "sqlite",
}

config = context.config

# 2. 配置日志
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


# ------------------------------------------------------------------------------
# 3. 构建同步数据库 URL
# ------------------------------------------------------------------------------
def build_sync_url() -> str:
    url = make_url(str(settings.SQLALCHEMY_DATABASE_URI))
    drivername = SYNC_DRIVERS.get(url.drivername, url.drivername)
    # render_as_string 保留密码中的特殊字符编码
    return url.set(drivername=drivername).render_as_string(hide_password=False)


# 转义 % 字符 (configparser 插值符号)
config.set_main_option("sqlalchemy.url", build_sync_url().replace("%", "%%"))

# 4. 指定目标元数据
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """离线模式迁移：生成 SQL 脚本而不实际连接数据库"""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
        render_as_batch=url is not None and url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """在线模式迁移：连接数据库并执行迁移"""
    connectable = create_engine(
        config.get_main_option("sqlalchemy.url") or "",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            # SQLite 不支持 ALTER COLUMN，使用批量模式重建表
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


# ------------------------------------------------------------------------------
# 执行迁移
# ------------------------------------------------------------------------------
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

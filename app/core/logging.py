"""
File: app/core/logging.py
Description: 全局日志配置模块 (Loguru)

本模块负责：
1. 接管标准库 logging (Uvicorn / FastAPI / SQLAlchemy) 并统一交给 Loguru 输出
2. 开发环境彩色文本，生产环境 JSON (serialize)
3. 文件 Sink 的轮转 (Rotation) 与保留 (Retention)
4. 文本格式附带 request_id / account_id 上下文
5. 通过 patcher 对 extra 中的密码、Token 字段统一脱敏

Author: jinmozhe
Created: 2025-11-24
Updated: 2026-03-02 (Extra masking patcher, SQL echo via settings)
"""

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from app.core.config import settings
from app.utils.masking import mask_sensitive_data

# 交由 Loguru 统一输出的第三方 logger 前缀
INTERCEPTED_PREFIXES: tuple[str, ...] = ("uvicorn", "fastapi", "sqlalchemy")

# 按顺序追加到文本日志尾部的上下文字段
CONTEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("request_id", "req_id"),
    ("account_id", "account"),
)


class InterceptHandler(logging.Handler):
    """
    将标准库 logging 记录转发到 Loguru，保留原始调用位置。
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def mask_extra(record: dict[str, Any]) -> None:
    """Loguru patcher：业务代码 bind 的字段在落盘前统一脱敏。"""
    record["extra"] = mask_sensitive_data(record["extra"])


def format_record(record: dict[str, Any]) -> str:
    format_string = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )

    for key, label in CONTEXT_FIELDS:
        if record["extra"].get(key):
            format_string += f" | <magenta>{label}={{extra[{key}]}}</magenta>"

    return format_string + "\n{exception}"


def _intercept_stdlib() -> None:
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)

    # 移除第三方库自带的 handlers，避免重复打印
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(INTERCEPTED_PREFIXES):
            logging.getLogger(name).handlers = []
            logging.getLogger(name).propagate = True

    # SQL 语句只在显式开启时输出
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.SQL_ECHO else logging.WARNING
    )


def setup_logging() -> None:
    """
    初始化日志配置。
    在 main.py 的 lifespan 启动阶段调用。
    """
    _intercept_stdlib()

    logger.remove()
    logger.configure(patcher=mask_extra)

    base_config: dict[str, Any] = {
        "level": settings.LOG_LEVEL,
        "enqueue": True,
        "backtrace": True,
        "diagnose": settings.LOG_DIAGNOSE and not settings.is_production,
    }
    if settings.LOG_JSON_FORMAT:
        base_config["serialize"] = True
    else:
        base_config["format"] = format_record

    # Sink 1: 控制台
    logger.add(sys.stdout, colorize=not settings.LOG_JSON_FORMAT, **base_config)

    # Sink 2: 文件 (按配置启用)
    if settings.LOG_FILE_ENABLED:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_dir / "okashi_{time:YYYY-MM-DD_HH}.log"),
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression=settings.LOG_COMPRESSION,
            **base_config,
        )

    logger.bind(level=settings.LOG_LEVEL, json=settings.LOG_JSON_FORMAT).info(
        "Logging configured"
    )

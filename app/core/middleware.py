"""
File: app/core/middleware.py
Description: 中间件配置与实现

本模块负责：
1. RequestLogMiddleware：
   - 沿用客户端传入的 X-Request-ID (移动端链路追踪)，否则生成 UUID v7
   - 绑定 Loguru 上下文，记录访问日志与耗时
   - 超过阈值的慢请求以 WARNING 级别记录
   - 回传 X-Request-ID 与 X-Process-Time 响应头
2. register_middlewares：统一注册 CORS 与请求日志中间件

Author: jinmozhe
Created: 2025-11-24
Updated: 2026-03-02 (Inbound request id, slow request warning, skip media)
"""

import re
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from uuid6 import uuid7

from app.core.config import settings
from app.core.logging import logger

REQUEST_ID_HEADER = "X-Request-ID"

# 只接受形如 UUID / 短 token 的外部 request id，防止日志注入
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-_]{8,64}$")

# 健康检查与投稿图片请求量大，不记录访问日志
SKIP_LOG_PATHS: frozenset[str] = frozenset({"/health", "/favicon.ico"})
SKIP_LOG_PREFIXES: tuple[str, ...] = (settings.MEDIA_URL.rstrip("/") + "/",)


def resolve_request_id(request: Request) -> str:
    inbound = request.headers.get(REQUEST_ID_HEADER, "")
    if REQUEST_ID_PATTERN.fullmatch(inbound):
        return inbound
    return str(uuid7())


def should_log(path: str) -> bool:
    return path not in SKIP_LOG_PATHS and not path.startswith(SKIP_LOG_PREFIXES)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    全局请求日志中间件。
    在 with 块内，Router / Service / Repository 的日志都会自动携带 request_id。
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        path = request.url.path

        with logger.contextualize(request_id=request_id):
            start_time = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                # 正常情况下异常处理器会返回 Response，走到这里说明出现了未捕获的异常
                logger.bind(
                    method=request.method,
                    path=path,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                ).opt(exception=exc).error("Request failed with unhandled exception")
                raise

            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time"] = f"{duration_ms}ms"

            if should_log(path):
                access_log = logger.bind(
                    method=request.method,
                    path=path,
                    status_code=response.status_code,
                    duration_ms=duration_ms,
                    client_ip=request.client.host if request.client else "unknown",
                )
                if duration_ms >= settings.SLOW_REQUEST_MS:
                    access_log.warning("Slow request")
                else:
                    access_log.info("Request finished")

            return response


def register_middlewares(app: FastAPI) -> None:
    """
    统一注册所有中间件。
    Starlette 为洋葱模型：后注册的中间件先处理请求。
    """
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )

    app.add_middleware(RequestLogMiddleware)

"""
File: app/core/exceptions.py
Description: 业务异常类与全局异常处理器

本模块负责：
1. 业务异常基类（AppException）接受 BaseErrorCode 枚举
2. 常用快捷异常：UnauthorizedException (401) 与 PermissionException (403)
3. 全局异常处理器自动将异常映射为：语义化 HTTP 状态码 + 字符串业务码
4. 数据库唯一约束冲突 (IntegrityError) 兜底归一为 system.conflict (409)
5. 使用 ResponseModel.fail() 构造统一的失败响应信封

Author: jinmozhe
Created: 2025-11-24
Updated: 2026-03-02 (IntegrityError → Conflict)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.error_code import BaseErrorCode, SystemErrorCode
from app.core.logging import logger
from app.core.response import ResponseModel
from app.utils.masking import mask_sensitive_data

# ------------------------------------------------------------------------------
# 1. 自定义业务异常类
# ------------------------------------------------------------------------------


class AppException(Exception):
    """
    应用基础异常类。

    用法示例:
        raise AppException(PostError.INVALID_URL)
        raise AppException(ProfileError.USERNAME_TAKEN, message="...")
    """

    def __init__(
        self,
        error: BaseErrorCode,
        message: str = "",
        data: Any = None,
    ):
        # 自动从枚举中解构: (HTTP状态, 业务码, 默认文案)
        self.error = error
        self.http_status = error.http_status
        self.code = error.code
        self.message = message or error.msg
        self.data = data
        super().__init__(self.message)


class UnauthorizedException(AppException):
    """401: 未登录 / Token 无效"""

    def __init__(self, message: str = "", data: Any = None):
        super().__init__(SystemErrorCode.UNAUTHORIZED, message=message, data=data)


class PermissionException(AppException):
    """403: 已登录但权限不足"""

    def __init__(self, message: str = "", data: Any = None):
        super().__init__(SystemErrorCode.FORBIDDEN, message=message, data=data)


# ------------------------------------------------------------------------------
# 2. 辅助函数
# ------------------------------------------------------------------------------


def _get_request_id(request: Request) -> str:
    """尝试从 request.state 获取 request_id，如果不存在则返回 'unknown'"""
    return str(getattr(request.state, "request_id", "unknown"))


def _fail(
    request_id: str, status_code: int, code: str, message: str, data: Any = None
) -> ORJSONResponse:
    """用 ResponseModel.fail 构造失败信封。"""
    body = ResponseModel.fail(code=code, message=message, data=data, request_id=request_id)
    return ORJSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


# ------------------------------------------------------------------------------
# 3. 全局异常处理器 (Handlers)
# ------------------------------------------------------------------------------


async def app_exception_handler(request: Request, exc: AppException) -> ORJSONResponse:
    """
    处理自定义业务异常 (AppException)
    直接映射为定义好的 HTTP 状态码和 Code
    """
    request_id = _get_request_id(request)

    # 业务警告日志 (通常不需要 stack trace)
    logger.bind(
        request_id=request_id,
        code=exc.code,
        http_status=exc.http_status,
        message=exc.message,
    ).warning("Business exception occurred")

    return _fail(request_id, exc.http_status, exc.code, exc.message, exc.data)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """
    处理 Pydantic 校验异常 (FastAPI 默认抛出 422)
    映射目标: HTTP 400 Bad Request / Code: system.invalid_params
    """
    request_id = _get_request_id(request)

    errors = exc.errors()
    first_error = errors[0] if errors else {}

    # loc 示例: ('body', 'url')
    loc = first_error.get("loc", [])
    field_name = str(loc[-1]) if loc else "unknown"
    msg = first_error.get("msg", "Invalid parameter")

    readable_message = f"{field_name}: {msg}"

    # 原始输入可能包含明文密码，记录前先脱敏
    logger.bind(
        request_id=request_id,
        detail=readable_message,
        raw_input=mask_sensitive_data(first_error.get("input")),
    ).warning("Request validation failed")

    # 只保留可 JSON 序列化的关键信息 (ctx 中可能含异常对象)
    safe_errors = [
        {"loc": list(e.get("loc", [])), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]

    error = SystemErrorCode.INVALID_PARAMS
    return _fail(
        request_id, error.http_status, error.code, readable_message, {"errors": safe_errors}
    )


async def integrity_exception_handler(
    request: Request, exc: IntegrityError
) -> ORJSONResponse:
    """
    处理未被 Service 层捕获的唯一约束冲突。
    并发竞争下的重复写入统一视为可重试的冲突，而不是 500。
    """
    request_id = _get_request_id(request)

    logger.bind(request_id=request_id, detail=str(exc.orig)).warning(
        "Integrity constraint violated"
    )

    error = SystemErrorCode.CONFLICT
    return _fail(request_id, error.http_status, error.code, error.msg)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    """
    处理框架层面的 HTTP 异常 (如 404 Not Found, 405 Method Not Allowed)
    """
    request_id = _get_request_id(request)

    code_str = SystemErrorCode.NOT_FOUND.code if exc.status_code == 404 else "system.http_error"

    logger.bind(
        request_id=request_id,
        status_code=exc.status_code,
        detail=str(exc.detail),
    ).warning("Framework HTTP exception occurred")

    return _fail(request_id, exc.status_code, code_str, str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """未捕获异常统一返回 500，堆栈只写日志不返回给客户端。"""
    request_id = _get_request_id(request)

    # 记录完整堆栈信息 (Error Level)
    logger.opt(exception=exc).bind(request_id=request_id).error(
        "Unhandled system exception occurred"
    )

    error = SystemErrorCode.INTERNAL_ERROR
    return _fail(request_id, error.http_status, error.code, error.msg)


# ------------------------------------------------------------------------------
# 4. 异常处理器注册函数
# ------------------------------------------------------------------------------


def register_exception_handlers(app: FastAPI) -> None:
    """
    统一注册所有异常处理器。
    应在 main.py 中调用。
    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(IntegrityError, integrity_exception_handler)  # type: ignore
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
    app.add_exception_handler(Exception, general_exception_handler)

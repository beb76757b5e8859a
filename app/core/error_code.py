"""
File: app/core/error_code.py
Description: 全局错误码基类与系统级错误定义

本模块定义了错误码的枚举基类及系统通用的错误状态。
错误分类 (与领域错误码共用同一套 HTTP 语义)：
- 400 校验错误 (ValidationError): 写入前拒绝，文案原样返回给调用方
- 401 未认证 (NotAuthenticated)
- 403 越权 (AuthorizationError): 非作者编辑 / 非作者且非管理员删除
- 404 资源不存在 (NotFoundError): 仅用于写操作，读操作返回空
- 409 冲突 (ConflictError): 唯一约束冲突统一归一到此类，可重试
- 500 存储/传输故障: 对调用方不透明

定义结构 Tuple(http_status, code, message):
1. http_status: HTTP 响应状态码 (4xx/5xx)
2. code: 字符串业务码 (格式: domain.reason)
3. message: 默认的人类可读错误消息

Author: jinmozhe
Created: 2026-01-15
Updated: 2026-03-02 (Add NOT_FOUND / CONFLICT)
"""

from enum import Enum

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class BaseErrorCode(Enum):
    """
    错误码枚举基类
    所有业务领域的错误码 Enum 必须继承此类。

    Value Tuple Definition:
    (http_status, code, msg)
    """

    @property
    def http_status(self) -> int:
        """获取映射的 HTTP 状态码"""
        return self.value[0]

    @property
    def code(self) -> str:
        """获取业务错误标识 (domain.reason)"""
        return self.value[1]

    @property
    def msg(self) -> str:
        """获取默认错误描述信息"""
        return self.value[2]


class SystemErrorCode(BaseErrorCode):
    """
    系统通用错误定义 (System Domain)
    包含: 参数校验、认证基础、资源冲突、系统故障
    """

    # HTTP 400: 客户端参数错误 (Pydantic 校验会自动映射到这里)
    INVALID_PARAMS = (HTTP_400_BAD_REQUEST, "system.invalid_params", "入力内容に誤りがあります")

    # HTTP 401: 身份认证失败
    UNAUTHORIZED = (HTTP_401_UNAUTHORIZED, "system.unauthorized", "ユーザーが認証されていません")

    # HTTP 403: 权限/禁止访问 (通用)
    FORBIDDEN = (HTTP_403_FORBIDDEN, "system.forbidden", "権限がありません")

    # HTTP 404: 资源不存在 (通用)
    NOT_FOUND = (HTTP_404_NOT_FOUND, "system.not_found", "リソースが見つかりません")

    # HTTP 409: 并发写入导致的唯一约束冲突 (可重试)
    CONFLICT = (HTTP_409_CONFLICT, "system.conflict", "データが競合しました。再度お試しください")

    # HTTP 500: 服务端故障 (需要监控报警)
    INTERNAL_ERROR = (
        HTTP_500_INTERNAL_SERVER_ERROR,
        "system.internal_error",
        "サーバー内部エラーが発生しました",
    )
    STORAGE_ERROR = (
        HTTP_500_INTERNAL_SERVER_ERROR,
        "system.storage_error",
        "画像の保存に失敗しました",
    )

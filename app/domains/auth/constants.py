"""
File: app/domains/auth/constants.py
Description: 认证领域常量定义 (错误码 + 成功提示)
Namespace: auth.*

遵循 v2.1 架构规范:
1. Error 定义: 继承 BaseErrorCode，包含 (HTTP状态, 业务码, 默认文案)
2. Msg 定义: 纯字符串常量，用于 Router 返回成功响应

Author: jinmozhe
Created: 2026-01-15
Updated: 2026-03-02 (Email credentials / password policy)
"""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_409_CONFLICT,
)

from app.core.error_code import BaseErrorCode

# 密码策略: 至少 8 位，必须同时包含英字与数字 (允许符号)
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

# ==============================================================================
# 1. 错误码定义 (Error Codes)
# 用于 Service 层抛出异常: raise AppException(AuthError.ALREADY_REGISTERED)
# ==============================================================================


class AuthError(BaseErrorCode):
    """
    认证领域错误定义
    Tuple Structure: (HTTP_Status, Code_String, Default_Message)
    """

    # HTTP 400: 凭证格式校验失败 (写入前拒绝)
    PASSWORD_TOO_SHORT = (
        HTTP_400_BAD_REQUEST,
        "auth.invalid_password",
        "パスワードは8文字以上である必要があります",
    )
    PASSWORD_NO_LETTER = (
        HTTP_400_BAD_REQUEST,
        "auth.invalid_password",
        "パスワードには英字を含める必要があります",
    )
    PASSWORD_NO_DIGIT = (
        HTTP_400_BAD_REQUEST,
        "auth.invalid_password",
        "パスワードには数字を含める必要があります",
    )
    PASSWORD_MISMATCH = (
        HTTP_400_BAD_REQUEST,
        "auth.password_mismatch",
        "パスワードが一致しません",
    )

    # HTTP 409: 邮箱已注册 (唯一约束)
    ALREADY_REGISTERED = (
        HTTP_409_CONFLICT,
        "auth.already_registered",
        "このメールアドレスは既に登録されています",
    )

    # HTTP 401: 登录失败的通用错误 (安全掩码)
    # 用户不存在与密码错误返回完全相同的响应，防止枚举攻击
    INVALID_CREDENTIALS = (
        HTTP_401_UNAUTHORIZED,
        "auth.invalid_credentials",
        "メールアドレスまたはパスワードが正しくありません",
    )

    # 账号状态异常
    ACCOUNT_LOCKED = (HTTP_403_FORBIDDEN, "auth.account_locked", "アカウントは停止されています")


# ==============================================================================
# 2. 成功提示语 (Success Messages)
# 用于 Router 层返回响应: return ResponseModel.success(message=AuthMsg.LOGIN_SUCCESS)
# ==============================================================================


class AuthMsg:
    """
    认证领域成功提示文案
    """

    LOGIN_SUCCESS = "ログインしました"
    LOGOUT_SUCCESS = "ログアウトしました"
    REFRESH_SUCCESS = "トークンを更新しました"

"""
File: app/core/response.py
Description: 统一响应信封（Unified Response Envelope）模型与辅助函数

本模块定义了全站统一的 API 响应格式。
所有 HTTP 接口必须遵循此契约返回数据：
    {code, message, data, request_id, timestamp}

列表类接口 (时间线 / 标签 / 反应目录) 使用 ListData 包装，
本项目不做分页，total 即 items 的长度。

Author: jinmozhe
Created: 2025-11-24
Updated: 2026-03-02 (ListData for non-paginated lists)
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ResponseBase(BaseModel):
    """
    响应基类
    """

    model_config = ConfigDict(from_attributes=True)

    code: str = Field(default="success", description="业务状态码")
    message: str = Field(default="Success", description="响应消息")
    request_id: str | None = Field(default=None, description="请求追踪ID")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="响应生成时间",
    )


class ResponseModel(ResponseBase, Generic[T]):
    """
    统一响应信封
    """

    data: T | None = Field(default=None, description="业务数据")

    @classmethod
    def success(
        cls,
        data: T | None = None,
        message: str = "Success",
        request_id: str | None = None,
    ) -> "ResponseModel[T]":
        """
        构造成功响应
        """
        # 强制将 Pydantic 模型转换为 JSON 安全的字典
        if hasattr(data, "model_dump"):
            data = cast(Any, data).model_dump(mode="json")

        return cls(
            code="success",
            message=message,
            data=data,
            request_id=request_id,
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        data: Any = None,
        request_id: str | None = None,
    ) -> "ResponseModel[Any]":
        """
        构造失败响应
        """
        return cls(
            code=code,
            message=message,
            data=data,
            request_id=request_id,
        )


class ListData(BaseModel, Generic[T]):
    """
    不分页的列表数据包装
    """

    items: list[T] = Field(default_factory=list, description="数据列表")
    total: int = Field(default=0, description="条目数")

    @classmethod
    def of(cls, items: Sequence[T]) -> "ListData[T]":
        return cls(items=list(items), total=len(items))

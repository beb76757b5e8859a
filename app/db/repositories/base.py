"""
File: app/db/repositories/base.py
Description: 通用异步 Repository 基类 (CRUD + 冲突安全写入)

本模块定义了 BaseRepository，封装了通用的 CRUD 操作。
所有领域的 Repository 应继承此类，以减少样板代码。

特性：
- 泛型支持: BaseRepository[ModelType]
- 纯异步: 基于 sqlalchemy.ext.asyncio
- 安全增强: update 操作自动过滤核心系统字段 (id, created_at)
- 冲突安全: insert_ignore() 生成 INSERT ... ON CONFLICT DO NOTHING，
  用于 "不存在则插入" 的原子操作 (标签、关注、反应)，
  严禁改写为 "先查询再插入" 的两步逻辑

Author: jinmozhe
Created: 2025-11-25
Updated: 2026-03-02 (insert_ignore for get-or-create / toggles)
"""

from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    通用 CRUD 仓储基类。

    参数:
    - ModelType: SQLAlchemy 模型类 (如 Post)

    注意：所有写方法只 flush 不 commit，事务边界由 Service 层控制。
    """

    # 受保护的字段，禁止通过通用 update 方法修改
    PROTECTED_FIELDS: ClassVar[set[str]] = {"id", "created_at", "updated_at"}

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    # --------------------------------------------------------------------------
    # 查询操作 (Read)
    # --------------------------------------------------------------------------

    async def get(self, id: Any) -> ModelType | None:
        """根据主键 ID 查询单条记录"""
        return await self.session.get(self.model, id)

    async def exists(self, id: Any) -> bool:
        """检查记录是否存在。"""
        return await self.get(id) is not None

    async def count(self, *criteria: Any) -> int:
        """按条件计数 (无条件时为总数)。"""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    # --------------------------------------------------------------------------
    # 写入操作 (Create / Update / Delete)
    # --------------------------------------------------------------------------

    async def add(self, db_obj: ModelType) -> ModelType:
        """
        持久化新对象。
        flush 以获取 ID 与服务端默认值，不 commit。
        """
        self.session.add(db_obj)
        await self.session.flush()
        await self.session.refresh(db_obj)
        return db_obj

    async def update(self, db_obj: ModelType, obj_in: dict[str, Any]) -> ModelType:
        """
        更新现有记录。
        会自动过滤 PROTECTED_FIELDS 中的敏感字段(如 id, created_at)。
        """
        safe_data = {k: v for k, v in obj_in.items() if k not in self.PROTECTED_FIELDS}

        if hasattr(db_obj, "update"):
            db_obj.update(**safe_data)  # type: ignore[union-attr]
        else:
            for field, value in safe_data.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

        self.session.add(db_obj)
        await self.session.flush()
        await self.session.refresh(db_obj)
        return db_obj

    async def delete(self, db_obj: ModelType) -> None:
        """物理删除记录。"""
        await self.session.delete(db_obj)
        await self.session.flush()

    # --------------------------------------------------------------------------
    # 冲突安全写入 (Insert If Absent)
    # --------------------------------------------------------------------------

    def _dialect_insert(self, model: type[Base]) -> Any:
        """按当前连接的方言选择支持 ON CONFLICT 的 insert 构造器。"""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(model)
        if dialect == "sqlite":
            return sqlite.insert(model)
        raise NotImplementedError(f"ON CONFLICT is not supported for dialect {dialect}")

    async def insert_ignore(
        self,
        rows: Sequence[dict[str, Any]],
        conflict_columns: Sequence[str],
        model: type[Base] | None = None,
    ) -> int:
        """
        批量插入，唯一键冲突的行静默跳过。

        Returns:
            int: 实际插入的行数 (部分驱动可能返回 -1)
        """
        if not rows:
            return 0

        stmt = (
            self._dialect_insert(model or self.model)
            .values(list(rows))
            .on_conflict_do_nothing(index_elements=list(conflict_columns))
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

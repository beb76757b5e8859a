"""
File: app/domains/auth/repository.py
Description: 账号仓储层 (Repository)

本模块负责账号数据的数据库访问，继承自通用 BaseRepository。
扩展功能：
1. get_by_email: 根据邮箱查询账号

Author: jinmozhe
Created: 2025-11-25
Updated: 2026-03-02 (Account)
"""

from sqlalchemy import select

from app.db.models.account import Account
from app.db.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """
    账号仓储类。
    邮箱在写入前统一转为小写，因此这里按小写精确匹配。
    """

    async def get_by_email(self, email: str) -> Account | None:
        """根据邮箱查询账号。"""
        stmt = select(Account).where(Account.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

"""
File: app/domains/tags/dependencies.py
Description: 标签领域依赖注入 (DI)

依赖链：
DBSession → TagRepository → TagService → TagServiceDep

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Annotated

from fastapi import Depends

from app.api.deps import DBSession
from app.db.models.tag import Tag
from app.domains.tags.repository import TagRepository
from app.domains.tags.service import TagService


async def get_tag_repository(session: DBSession) -> TagRepository:
    return TagRepository(model=Tag, session=session)


TagRepoDep = Annotated[TagRepository, Depends(get_tag_repository)]


async def get_tag_service(repo: TagRepoDep) -> TagService:
    return TagService(repo=repo)


TagServiceDep = Annotated[TagService, Depends(get_tag_service)]

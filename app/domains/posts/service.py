"""
File: app/domains/posts/service.py
Description: 投稿领域服务 (业务逻辑层)

本模块封装投稿的核心业务逻辑：
1. 创建投稿：字段校验 → 图片上传 → 写入投稿 → 标签 get-or-create → 关联
2. 编辑投稿：仅作者本人 (管理员也不可编辑他人投稿)，刷新 edited_at，整体替换标签
3. 删除投稿：作者本人或管理员，关联的标签关系与反应在同一事务内删除
4. 组装投稿卡片：作者摘要、标签名、反应计数、观察者自己的反应 (时间线复用)

注意：
- 所有校验 (URL 协议、地域、标题、标签长度、图片类型) 都在第一次写入之前完成，
  校验失败不会留下任何数据，包括图片。
- 图片上传与数据库写入是两个独立操作，图片已保存而写入失败时视为可接受的泄漏。

Author: jinmozhe
Created: 2026-03-02
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from app.core.exceptions import AppException
from app.core.logging import logger
from app.core.storage import POST_IMAGE_BUCKET, ImageUpload, MediaVault
from app.db.models.base import utc_now
from app.db.models.post import TITLE_MAX_LENGTH, Post
from app.db.models.profile import Profile
from app.domains.posts.constants import REGIONS, URL_MAX_LENGTH, URL_PATTERN, PostError
from app.domains.posts.repository import PostRepository
from app.domains.posts.schemas import PostCreate, PostRead
from app.domains.profiles.repository import ProfileRepository
from app.domains.profiles.schemas import AuthorSummary
from app.domains.reactions.repository import PostReactionRepository
from app.domains.tags.service import TagService, normalize_tag_names


def validate_url(url: str | None) -> str | None:
    """空值视为未填写；其余必须以 http:// 或 https:// 开头。"""
    url = (url or "").strip()
    if not url:
        return None
    if len(url) > URL_MAX_LENGTH or not URL_PATTERN.match(url):
        raise AppException(PostError.INVALID_URL)
    return url


def validate_region(region: str | None) -> str | None:
    region = (region or "").strip()
    if not region:
        return None
    if region not in REGIONS:
        raise AppException(PostError.INVALID_REGION)
    return region


def validate_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise AppException(PostError.TITLE_REQUIRED)
    if len(title) > TITLE_MAX_LENGTH:
        raise AppException(PostError.TITLE_TOO_LONG)
    return title


class PostService:
    """
    投稿领域服务。
    """

    def __init__(
        self,
        repo: PostRepository,
        tag_service: TagService,
        profile_repo: ProfileRepository,
        post_reaction_repo: PostReactionRepository,
        media_vault: MediaVault,
    ):
        self.repo = repo
        self.tag_service = tag_service
        self.profile_repo = profile_repo
        self.post_reaction_repo = post_reaction_repo
        self.media_vault = media_vault

    def _clean(self, data: PostCreate) -> tuple[dict[str, Any], list[str]]:
        """校验并规整表单字段，返回 (投稿字段, 标签名)。"""
        fields: dict[str, Any] = {
            "title": validate_title(data.title),
            "description": data.description.strip(),
            "region": validate_region(data.region),
            "url": validate_url(data.url),
        }
        tag_names = normalize_tag_names(data.tags)
        self.tag_service.validate(tag_names)
        return fields, tag_names

    # --------------------------------------------------------------------------
    # 写入
    # --------------------------------------------------------------------------

    async def create_post(
        self, author_id: UUID, data: PostCreate, image: ImageUpload
    ) -> Post:
        fields, tag_names = self._clean(data)
        self.media_vault.validate(image)

        image_url = await self.media_vault.save(POST_IMAGE_BUCKET, author_id, image)

        post = await self.repo.add(Post(author_id=author_id, image_url=image_url, **fields))
        tags = await self.tag_service.resolve(tag_names)
        await self.repo.add_tags(post.id, [tag.id for tag in tags])
        await self.repo.session.commit()

        logger.bind(
            post_id=str(post.id), author_id=str(author_id), tags=tag_names
        ).info("Post created")
        return post

    async def edit_post(
        self,
        post_id: UUID,
        editor_id: UUID,
        data: PostCreate,
        image: ImageUpload | None = None,
    ) -> Post:
        """
        编辑投稿。编辑者必须是作者本人，权限检查先于任何修改。
        """
        post = await self.repo.get(post_id)
        if post is None:
            raise AppException(PostError.NOT_FOUND)
        if post.author_id != editor_id:
            raise AppException(PostError.EDIT_FORBIDDEN)

        fields, tag_names = self._clean(data)
        if image is not None:
            self.media_vault.validate(image)
            fields["image_url"] = await self.media_vault.save(
                POST_IMAGE_BUCKET, editor_id, image
            )

        fields["edited_at"] = utc_now()
        post = await self.repo.update(post, fields)

        tags = await self.tag_service.resolve(tag_names)
        await self.repo.replace_tags(post.id, [tag.id for tag in tags])
        await self.repo.session.commit()

        logger.bind(post_id=str(post_id), editor_id=str(editor_id)).info("Post edited")
        return post

    async def delete_post(self, post_id: UUID, requester: Profile) -> None:
        """删除投稿：作者本人或管理员。"""
        post = await self.repo.get(post_id)
        if post is None:
            raise AppException(PostError.NOT_FOUND)
        if post.author_id != requester.account_id and not requester.is_admin:
            raise AppException(PostError.DELETE_FORBIDDEN)

        await self.repo.delete_with_associations(post)
        await self.repo.session.commit()

        logger.bind(
            post_id=str(post_id),
            requester_id=str(requester.account_id),
            by_admin=post.author_id != requester.account_id,
        ).info("Post deleted")

    # --------------------------------------------------------------------------
    # 查询
    # --------------------------------------------------------------------------

    async def get_post(self, post_id: UUID, viewer_id: UUID | None = None) -> PostRead | None:
        post = await self.repo.get(post_id)
        if post is None:
            return None
        items = await self.present([post], viewer_id)
        return items[0]

    async def present(
        self, posts: Sequence[Post], viewer_id: UUID | None = None
    ) -> list[PostRead]:
        """
        组装投稿卡片。所有关联数据按投稿 ID 批量读取，查询次数与投稿数无关。
        """
        if not posts:
            return []

        post_ids = [post.id for post in posts]
        authors = await self.profile_repo.get_many_by_accounts(
            post.author_id for post in posts
        )
        tag_names = await self.repo.tag_names_for(post_ids)
        counts = await self.post_reaction_repo.counts_for_posts(post_ids)
        mine: dict[UUID, list[UUID]] = {}
        if viewer_id is not None:
            mine = await self.post_reaction_repo.reacted_by(post_ids, viewer_id)

        items: list[PostRead] = []
        for post in posts:
            author = authors.get(post.author_id)
            items.append(
                PostRead(
                    id=post.id,
                    author_id=post.author_id,
                    image_url=post.image_url,
                    title=post.title,
                    description=post.description,
                    region=post.region,
                    url=post.url,
                    created_at=post.created_at,
                    edited_at=post.edited_at,
                    author=AuthorSummary.model_validate(author) if author else None,
                    tags=tag_names.get(post.id, []),
                    reaction_counts=counts.get(post.id, {}),
                    my_reactions=mine.get(post.id, []),
                )
            )
        return items

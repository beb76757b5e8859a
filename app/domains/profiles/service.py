"""
File: app/domains/profiles/service.py
Description: 资料领域服务 (业务逻辑层)

本模块封装用户资料的核心业务逻辑：
1. 用户名可用性探测 (仅作提示，不参与一致性保证)
2. 创建资料：凭证校验通过并登录后才允许创建，每个账号恰好一份
   用户名唯一性由数据库唯一约束兜底，IntegrityError 归一为 USERNAME_TAKEN
3. 资料详情：投稿数 / 关注数 / 粉丝数 / 观察者是否已关注
4. 更新一言简介与头像 (仅本人)

注意：
- 头像上传先于资料写入。图片已保存而写入失败时留下孤立文件，视为可接受的泄漏。
- 读操作对不存在的资料返回 None，不抛出 404。

Author: jinmozhe
Created: 2026-03-02
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import AppException
from app.core.logging import logger
from app.core.storage import AVATAR_BUCKET, ImageUpload, MediaVault
from app.db.models.profile import BIO_MAX_LENGTH, DISPLAY_NAME_MAX_LENGTH, Profile
from app.domains.follows.repository import FollowRepository
from app.domains.profiles.constants import USERNAME_PATTERN, ProfileError
from app.domains.profiles.repository import ProfileRepository
from app.domains.profiles.schemas import ProfileDetail


def validate_profile_fields(username: str, display_name: str) -> tuple[str, str]:
    """
    校验用户名与显示名，返回去除首尾空白后的值。
    注册流程的资料步骤与 create_profile 共用同一套规则。
    """
    username = username.strip()
    display_name = display_name.strip()

    if not username or not display_name:
        raise AppException(ProfileError.MISSING_NAMES)
    if not USERNAME_PATTERN.fullmatch(username):
        raise AppException(ProfileError.INVALID_USERNAME)
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise AppException(ProfileError.DISPLAY_NAME_TOO_LONG)
    return username, display_name


class ProfileService:
    """
    资料领域服务。
    """

    def __init__(
        self,
        repo: ProfileRepository,
        follow_repo: FollowRepository,
        media_vault: MediaVault,
    ):
        self.repo = repo
        self.follow_repo = follow_repo
        self.media_vault = media_vault

    # --------------------------------------------------------------------------
    # 查询
    # --------------------------------------------------------------------------

    async def username_available(self, username: str) -> bool:
        """格式不合法的用户名直接视为不可用。"""
        if not USERNAME_PATTERN.fullmatch(username):
            return False
        return not await self.repo.username_exists(username)

    async def get_profile(self, account_id: UUID) -> Profile | None:
        return await self.repo.get_by_account(account_id)

    async def has_profile(self, account_id: UUID) -> bool:
        """会话恢复探测：已登录但没有资料的账号需要回到注册资料步骤。"""
        return await self.repo.get_by_account(account_id) is not None

    async def get_profile_detail(
        self, account_id: UUID, viewer_id: UUID | None = None
    ) -> ProfileDetail | None:
        profile = await self.repo.get_by_account(account_id)
        if profile is None:
            return None

        is_following = False
        if viewer_id is not None and viewer_id != account_id:
            is_following = await self.follow_repo.is_following(viewer_id, account_id)

        return ProfileDetail.model_validate(profile).model_copy(
            update={
                "post_count": await self.repo.count_posts(account_id),
                "follower_count": await self.follow_repo.follower_count(account_id),
                "following_count": await self.follow_repo.following_count(account_id),
                "is_following": is_following,
            }
        )

    # --------------------------------------------------------------------------
    # 写入
    # --------------------------------------------------------------------------

    async def create_profile(
        self,
        account_id: UUID,
        username: str,
        display_name: str,
        avatar: ImageUpload | None = None,
    ) -> Profile:
        """
        创建资料 (注册流程头像步骤的最终写入)。

        Raises:
            AppException: 字段校验失败 (400)、资料已存在 / 用户名被占用 (409)、
                图片不合法 (400/413) 或存储失败 (500)
        """
        username, display_name = validate_profile_fields(username, display_name)

        if await self.repo.get_by_account(account_id):
            raise AppException(ProfileError.PROFILE_EXISTS)

        avatar_url: str | None = None
        if avatar is not None:
            avatar_url = await self.media_vault.save(AVATAR_BUCKET, account_id, avatar)

        session = self.repo.session
        try:
            profile = await self.repo.add(
                Profile(
                    account_id=account_id,
                    username=username,
                    display_name=display_name,
                    avatar_url=avatar_url,
                )
            )
            await session.commit()
        except IntegrityError:
            await session.rollback()
            # 并发下同一账号重复提交时，唯一冲突来自 account_id 而不是 username
            if await self.repo.get_by_account(account_id):
                raise AppException(ProfileError.PROFILE_EXISTS) from None
            raise AppException(ProfileError.USERNAME_TAKEN) from None

        logger.bind(
            account_id=str(account_id),
            username=username,
            has_avatar=avatar_url is not None,
        ).info("Profile created")
        return profile

    async def update_bio(self, profile: Profile, bio: str) -> Profile:
        if len(bio) > BIO_MAX_LENGTH:
            raise AppException(ProfileError.BIO_TOO_LONG)

        updated = await self.repo.update(profile, {"bio": bio})
        await self.repo.session.commit()

        logger.bind(account_id=str(profile.account_id)).info("Profile bio updated")
        return updated

    async def update_avatar(self, profile: Profile, image: ImageUpload) -> Profile:
        avatar_url = await self.media_vault.save(AVATAR_BUCKET, profile.account_id, image)

        updated = await self.repo.update(profile, {"avatar_url": avatar_url})
        await self.repo.session.commit()

        logger.bind(account_id=str(profile.account_id)).info("Profile avatar updated")
        return updated

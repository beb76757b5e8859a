"""
File: app/domains/signup/service.py
Description: 注册流程编排服务 (Signup Orchestrator)

本模块把 SignupFlow 状态机与外部副作用串起来：
1. 凭证步骤：密码策略 + 确认密码 → 创建账号 → 立即登录 → PROFILE
   从 PROFILE 后退到凭证步骤再次提交时，账号已存在：密码一致且尚无资料则
   重新签发 Token 并回到 PROFILE；否则 409 auth.already_registered
2. 资料步骤：显示名非空 + 用户名格式 + 可用性为 true → AVATAR
3. 头像步骤：带图注册或跳过，二者都调用 create_profile → COMPLETE
   失败时停留在 AVATAR 并原样返回错误 (账号已存在但没有资料，可恢复)
4. 会话恢复：已有资料 → COMPLETE；否则读取 Redis 草稿，草稿过期时回到 PROFILE

草稿存储于 Redis: signup:{account_id} -> {"step", "username", "display_name"}

Author: jinmozhe
Created: 2026-03-02
"""

from typing import Any
from uuid import UUID

from redis.asyncio import Redis

from app.core.config import settings
from app.core.exceptions import AppException
from app.core.logging import logger
from app.core.redis import get_json, set_json
from app.core.security import verify_password_async
from app.core.storage import ImageUpload
from app.db.models.account import Account
from app.domains.auth.constants import AuthError
from app.domains.auth.schemas import check_password_policy
from app.domains.auth.service import AuthService
from app.domains.profiles.constants import ProfileError
from app.domains.profiles.service import ProfileService, validate_profile_fields
from app.domains.signup.constants import SIGNUP_DRAFT_KEY, SignupError, SignupStep
from app.domains.signup.flow import SignupFlow
from app.domains.signup.schemas import (
    SignupCredentials,
    SignupCredentialsResult,
    SignupState,
)


class SignupService:
    def __init__(
        self,
        auth_service: AuthService,
        profile_service: ProfileService,
        redis: Redis,
    ):
        self.auth_service = auth_service
        self.profile_service = profile_service
        self.redis = redis

    # --------------------------------------------------------------------------
    # 草稿读写
    # --------------------------------------------------------------------------

    async def _load_draft(self, account_id: UUID) -> dict[str, Any]:
        draft = await get_json(self.redis, SIGNUP_DRAFT_KEY.format(account_id=account_id))
        return draft or {}

    async def _save_draft(self, account_id: UUID, draft: dict[str, Any]) -> None:
        await set_json(
            self.redis,
            SIGNUP_DRAFT_KEY.format(account_id=account_id),
            draft,
            expire=settings.SIGNUP_DRAFT_EXPIRE_SECONDS,
        )

    async def _clear_draft(self, account_id: UUID) -> None:
        await self.redis.delete(SIGNUP_DRAFT_KEY.format(account_id=account_id))

    @staticmethod
    def _state(step: SignupStep, draft: dict[str, Any]) -> SignupState:
        return SignupState(
            step=step,
            username=draft.get("username"),
            display_name=draft.get("display_name"),
        )

    async def _flow(self, account_id: UUID) -> tuple[SignupFlow, dict[str, Any]]:
        """恢复当前账号的状态机。已登录的账号至少处于 PROFILE。"""
        if await self.profile_service.has_profile(account_id):
            return SignupFlow(SignupStep.COMPLETE), {}

        draft = await self._load_draft(account_id)
        try:
            step = SignupStep(draft.get("step", SignupStep.PROFILE.value))
        except ValueError:
            step = SignupStep.PROFILE
        return SignupFlow(step), draft

    # --------------------------------------------------------------------------
    # 步骤
    # --------------------------------------------------------------------------

    async def _reclaim_account(self, email: str, password: str) -> Account | None:
        """
        凭证步骤的重复提交：邮箱未注册时返回 None。
        已注册、尚无资料且密码一致时返回该账号，其余情况视为已注册。
        """
        account = await self.auth_service.account_repo.get_by_email(email.strip().lower())
        if account is None:
            return None

        if (
            not account.is_active
            or await self.profile_service.has_profile(account.id)
            or not await verify_password_async(password, account.hashed_password)
        ):
            raise AppException(AuthError.ALREADY_REGISTERED)
        return account

    async def submit_credentials(self, data: SignupCredentials) -> SignupCredentialsResult:
        """凭证步骤：校验 → 创建 (或取回未完成的) 账号 → 登录 → PROFILE。"""
        if error := check_password_policy(data.password):
            raise AppException(error)
        if data.password != data.password_confirm:
            raise AppException(AuthError.PASSWORD_MISMATCH)

        draft: dict[str, Any] = {}
        account = await self._reclaim_account(data.email, data.password)
        if account is None:
            account = await self.auth_service.create_account(data.email, data.password)
        else:
            draft = await self._load_draft(account.id)
        token = await self.auth_service.issue_tokens(account.id)

        flow = SignupFlow(SignupStep.CREDENTIALS)
        flow.advance()
        draft = {**draft, "step": flow.step.value}
        await self._save_draft(account.id, draft)

        logger.bind(account_id=str(account.id), step=flow.step.value).info(
            "Signup credentials accepted"
        )
        return SignupCredentialsResult(token=token, state=self._state(flow.step, draft))

    async def get_state(self, account_id: UUID) -> SignupState:
        flow, draft = await self._flow(account_id)
        return self._state(flow.step, draft)

    async def submit_profile(
        self, account_id: UUID, username: str, display_name: str
    ) -> SignupState:
        """
        资料步骤：只有可用性检查返回 true 时才进入 AVATAR。
        这里的检查只是提示，最终唯一性由 create_profile 的唯一约束保证。
        """
        flow, draft = await self._flow(account_id)
        flow.expect(SignupStep.PROFILE)

        username, display_name = validate_profile_fields(username, display_name)
        if not await self.profile_service.username_available(username):
            raise AppException(ProfileError.USERNAME_TAKEN)

        flow.advance()
        draft = {
            "step": flow.step.value,
            "username": username,
            "display_name": display_name,
        }
        await self._save_draft(account_id, draft)
        return self._state(flow.step, draft)

    async def go_back(self, account_id: UUID) -> SignupState:
        flow, draft = await self._flow(account_id)
        flow.back()

        draft = {**draft, "step": flow.step.value}
        await self._save_draft(account_id, draft)
        return self._state(flow.step, draft)

    async def complete(
        self,
        account_id: UUID,
        avatar: ImageUpload | None = None,
        skip_avatar: bool = False,
    ) -> SignupState:
        """
        头像步骤：带图注册或跳过。
        create_profile 失败时草稿保持在 AVATAR，错误原样抛给调用方。
        """
        flow, draft = await self._flow(account_id)
        flow.expect(SignupStep.AVATAR)

        if avatar is None and not skip_avatar:
            raise AppException(SignupError.AVATAR_REQUIRED)

        try:
            await self.profile_service.create_profile(
                account_id,
                draft.get("username", ""),
                draft.get("display_name", ""),
                avatar=None if skip_avatar else avatar,
            )
        except AppException as exc:
            logger.bind(account_id=str(account_id), code=exc.code).warning(
                "Signup profile creation failed, staying at avatar step"
            )
            raise

        flow.advance()
        await self._clear_draft(account_id)

        logger.bind(account_id=str(account_id), skipped_avatar=skip_avatar).info(
            "Signup completed"
        )
        return self._state(flow.step, draft)

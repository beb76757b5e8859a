"""
File: tests/unit/test_signup_service.py
Description: 注册流程编排服务单元测试

覆盖：
1. 凭证步骤：确认密码不一致 / 策略失败时不创建账号
2. 资料步骤：用户名被占用时停留在 PROFILE
3. 头像步骤：跳过 / 带图完成；create_profile 失败时停留在 AVATAR
4. 会话恢复与后退 (含退回凭证步骤后重新提交)

Author: jinmozhe
Created: 2026-03-02
"""

import pytest

from app.core.exceptions import AppException
from app.core.storage import ImageUpload
from app.domains.auth.constants import AuthError
from app.domains.profiles.constants import ProfileError
from app.domains.signup.constants import SignupError, SignupStep
from app.domains.signup.schemas import SignupCredentials
from app.domains.signup.service import SignupService


def credentials(email: str = "alice@example.com", password: str = "abc12345", confirm=None):
    return SignupCredentials(
        email=email, password=password, password_confirm=confirm or password
    )


@pytest.mark.asyncio
async def test_credentials_create_account_and_sign_in(signup_service: SignupService) -> None:
    result = await signup_service.submit_credentials(credentials())

    assert result.token.access_token
    assert result.state.step is SignupStep.PROFILE

    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    assert account is not None
    assert await signup_service.get_state(account.id) == result.state


@pytest.mark.asyncio
async def test_credentials_mismatch_creates_nothing(signup_service: SignupService) -> None:
    with pytest.raises(AppException) as exc:
        await signup_service.submit_credentials(credentials(confirm="abc12346"))

    assert exc.value.error == AuthError.PASSWORD_MISMATCH
    repo = signup_service.auth_service.account_repo
    assert await repo.get_by_email("alice@example.com") is None


@pytest.mark.asyncio
async def test_credentials_weak_password(signup_service: SignupService) -> None:
    with pytest.raises(AppException) as exc:
        await signup_service.submit_credentials(credentials(password="abcdefgh"))

    assert exc.value.error == AuthError.PASSWORD_NO_DIGIT


@pytest.mark.asyncio
async def test_full_signup_with_skipped_avatar(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")

    state = await signup_service.submit_profile(account.id, " alice_1 ", "Alice")
    assert state.step is SignupStep.AVATAR
    assert state.username == "alice_1"

    state = await signup_service.complete(account.id, skip_avatar=True)
    assert state.step is SignupStep.COMPLETE

    profile = await signup_service.profile_service.get_profile(account.id)
    assert profile is not None
    assert profile.username == "alice_1"
    assert profile.avatar_url is None
    assert (await signup_service.get_state(account.id)).step is SignupStep.COMPLETE


@pytest.mark.asyncio
async def test_full_signup_with_avatar(
    signup_service: SignupService, png_image: ImageUpload
) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    await signup_service.submit_profile(account.id, "alice_1", "Alice")

    state = await signup_service.complete(account.id, avatar=png_image)

    assert state.step is SignupStep.COMPLETE
    profile = await signup_service.profile_service.get_profile(account.id)
    assert profile.avatar_url.startswith("/media/avatars/")


@pytest.mark.asyncio
async def test_avatar_step_requires_image_or_skip(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    await signup_service.submit_profile(account.id, "alice_1", "Alice")

    with pytest.raises(AppException) as exc:
        await signup_service.complete(account.id)

    assert exc.value.error == SignupError.AVATAR_REQUIRED


@pytest.mark.asyncio
async def test_taken_username_stays_at_profile(
    signup_service: SignupService, make_profile
) -> None:
    await make_profile("alice_1")
    await signup_service.submit_credentials(credentials(email="other@example.com"))
    account = await signup_service.auth_service.account_repo.get_by_email("other@example.com")

    with pytest.raises(AppException) as exc:
        await signup_service.submit_profile(account.id, "alice_1", "Other")

    assert exc.value.error == ProfileError.USERNAME_TAKEN
    assert (await signup_service.get_state(account.id)).step is SignupStep.PROFILE


@pytest.mark.asyncio
async def test_invalid_username_rejected(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")

    with pytest.raises(AppException) as exc:
        await signup_service.submit_profile(account.id, "al", "Alice")

    assert exc.value.error == ProfileError.INVALID_USERNAME


@pytest.mark.asyncio
async def test_profile_failure_stays_at_avatar(
    signup_service: SignupService, make_profile
) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    account_id = account.id
    await signup_service.submit_profile(account_id, "alice_1", "Alice")

    # 可用性检查通过之后，用户名被其他人抢先注册
    await make_profile("alice_1")

    with pytest.raises(AppException) as exc:
        await signup_service.complete(account_id, skip_avatar=True)

    assert exc.value.error == ProfileError.USERNAME_TAKEN
    assert (await signup_service.get_state(account_id)).step is SignupStep.AVATAR
    assert await signup_service.profile_service.get_profile(account_id) is None


@pytest.mark.asyncio
async def test_back_and_resume(signup_service: SignupService, fake_redis) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    await signup_service.submit_profile(account.id, "alice_1", "Alice")

    state = await signup_service.go_back(account.id)
    assert state.step is SignupStep.PROFILE
    assert state.username == "alice_1"

    # 草稿过期后，已登录但没有资料的账号从 PROFILE 恢复
    fake_redis.store.clear()
    assert (await signup_service.get_state(account.id)).step is SignupStep.PROFILE


@pytest.mark.asyncio
async def test_skipping_profile_step_is_rejected(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")

    with pytest.raises(AppException) as exc:
        await signup_service.complete(account.id, skip_avatar=True)

    assert exc.value.error == SignupError.INVALID_TRANSITION


@pytest.mark.asyncio
async def test_back_to_credentials_then_resubmit(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    account_id = account.id
    await signup_service.submit_profile(account_id, "alice_1", "Alice")
    await signup_service.go_back(account_id)

    state = await signup_service.go_back(account_id)
    assert state.step is SignupStep.CREDENTIALS

    # 同一凭证再次提交：取回未完成的账号，而不是 409
    result = await signup_service.submit_credentials(credentials(email="Alice@example.com"))
    assert result.token.access_token
    assert result.state.step is SignupStep.PROFILE
    assert result.state.username == "alice_1"

    state = await signup_service.submit_profile(account_id, "alice_1", "Alice")
    assert state.step is SignupStep.AVATAR

    state = await signup_service.complete(account_id, skip_avatar=True)
    assert state.step is SignupStep.COMPLETE
    profile = await signup_service.profile_service.get_profile(account_id)
    assert profile is not None


@pytest.mark.asyncio
async def test_resubmit_with_other_password_is_rejected(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())

    with pytest.raises(AppException) as exc:
        await signup_service.submit_credentials(credentials(password="xyz98765"))

    assert exc.value.error == AuthError.ALREADY_REGISTERED


@pytest.mark.asyncio
async def test_resubmit_after_completion_is_rejected(signup_service: SignupService) -> None:
    await signup_service.submit_credentials(credentials())
    account = await signup_service.auth_service.account_repo.get_by_email("alice@example.com")
    account_id = account.id
    await signup_service.submit_profile(account_id, "alice_1", "Alice")
    await signup_service.complete(account_id, skip_avatar=True)

    with pytest.raises(AppException) as exc:
        await signup_service.submit_credentials(credentials())

    assert exc.value.error == AuthError.ALREADY_REGISTERED
    assert (await signup_service.get_state(account_id)).step is SignupStep.COMPLETE

"""
File: app/domains/signup/flow.py
Description: 注册流程状态机 (纯逻辑，无 I/O)

    CREDENTIALS ──▶ PROFILE ──▶ AVATAR ──▶ COMPLETE
         ◀──────────   ◀─────────

- 只能向前推进一步，不能跳步
- 允许后退：PROFILE → CREDENTIALS，AVATAR → PROFILE
- COMPLETE 为终态

持久化 (Redis 草稿) 与副作用 (创建账号 / 资料) 由 SignupService 负责。

Author: jinmozhe
Created: 2026-03-02
"""

from app.core.exceptions import AppException
from app.domains.signup.constants import SignupError, SignupStep

FORWARD: dict[SignupStep, SignupStep] = {
    SignupStep.CREDENTIALS: SignupStep.PROFILE,
    SignupStep.PROFILE: SignupStep.AVATAR,
    SignupStep.AVATAR: SignupStep.COMPLETE,
}

BACKWARD: dict[SignupStep, SignupStep] = {
    SignupStep.PROFILE: SignupStep.CREDENTIALS,
    SignupStep.AVATAR: SignupStep.PROFILE,
}

ALLOWED_TRANSITIONS: dict[SignupStep, frozenset[SignupStep]] = {
    step: frozenset(
        target for target in (FORWARD.get(step), BACKWARD.get(step)) if target
    )
    for step in SignupStep
}


class SignupFlow:
    """
    注册状态机。

    用法:
        flow = SignupFlow(SignupStep.PROFILE)
        flow.advance()   # -> AVATAR
        flow.back()      # -> PROFILE
    """

    def __init__(self, step: SignupStep = SignupStep.CREDENTIALS):
        self.step = step

    def can_transition(self, target: SignupStep) -> bool:
        return target in ALLOWED_TRANSITIONS[self.step]

    def transition(self, target: SignupStep) -> SignupStep:
        if not self.can_transition(target):
            raise AppException(
                SignupError.INVALID_TRANSITION,
                data={"from": self.step.value, "to": target.value},
            )
        self.step = target
        return self.step

    def expect(self, step: SignupStep) -> None:
        """要求当前处于指定步骤，否则视为非法跳转。"""
        if self.step != step:
            raise AppException(
                SignupError.INVALID_TRANSITION,
                data={"from": self.step.value, "expected": step.value},
            )

    def advance(self) -> SignupStep:
        target = FORWARD.get(self.step)
        if target is None:
            raise AppException(SignupError.INVALID_TRANSITION, data={"from": self.step.value})
        return self.transition(target)

    def back(self) -> SignupStep:
        target = BACKWARD.get(self.step)
        if target is None:
            raise AppException(SignupError.INVALID_TRANSITION, data={"from": self.step.value})
        return self.transition(target)

    @property
    def is_complete(self) -> bool:
        return self.step is SignupStep.COMPLETE

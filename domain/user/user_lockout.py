"""
로그인 잠금 정책

- 비밀번호 실패 시 login_attempts 증가, MAX 에 도달하면 lock_until 설정
- 잠금이 만료된 상태에서 다시 실패하면 카운터를 1로 되돌린다
- 로그인 성공 시 카운터와 잠금을 초기화한다

카운터 증가는 read-then-write 이므로 동시 실패 요청이 겹치면
시도 횟수가 적게 집계될 수 있다.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from domain.user.user_token import utcnow

logger = logging.getLogger(__name__)


def is_locked(user, now: Optional[datetime] = None) -> bool:
    now = now or utcnow()
    return bool(user.lock_until and user.lock_until > now)


def register_failure(user, max_attempts: int, lock_minutes: int, now: Optional[datetime] = None) -> None:
    """비밀번호 불일치 기록"""
    now = now or utcnow()

    if user.lock_until and user.lock_until < now:
        user.login_attempts = 1
        user.lock_until = None
        return

    user.login_attempts = (user.login_attempts or 0) + 1
    if user.login_attempts >= max_attempts and not is_locked(user, now):
        user.lock_until = now + timedelta(minutes=lock_minutes)
        logger.warning(f"Account locked after {user.login_attempts} failed attempts: user_id={user.id}")


def register_success(user) -> None:
    """로그인 성공 시 잠금 상태 초기화"""
    if (user.login_attempts or 0) > 0 or user.lock_until:
        user.login_attempts = 0
        user.lock_until = None


def reset(user) -> None:
    user.login_attempts = 0
    user.lock_until = None
